import html
import json
from datetime import date

import pytest

from college_hockey.config import AppConfig
from college_hockey.errors import PollDataMissingError
from college_hockey.services.poll_service import PollService, iter_objects, parse_poll_html

TODAY = date(2025, 10, 15)


def _team(rank, **extra):
    obj = {
        "rnk": rank,
        "shortname": f"Team {rank}",
        "first_pv": 20 - rank if rank <= 3 else 0,
        "record": "4-1-0",
        "pts": 1000 - rank * 40,
        "prev_rnk": "NR" if rank == 20 else rank + 1,
    }
    obj.update(extra)
    return json.dumps(obj)


def poll_page(objects, others="Maine 12, Vermont 3"):
    blob = '{"data":[' + ",".join(objects) + '],"other":"' + others + '"}'
    return f'<html><body><div data-page="{html.escape(blob)}"></div></body></html>'


def test_truncated_object_costs_one_row():
    objects = [_team(1, PollDate="October 13, 2025")] + [_team(r) for r in range(2, 21)]
    objects[6] = objects[6][:-1]  # rank 7 loses its closing brace

    poll = parse_poll_html(poll_page(objects), TODAY)

    assert len(poll.teams) == 19
    assert 7 not in [t.rank for t in poll.teams]
    assert poll.date == "October 13, 2025"
    assert poll.others_receiving_votes == "Maine 12, Vermont 3"

    first = poll.teams[0]
    assert (first.rank, first.team, first.first_place_votes, first.points) == (1, "Team 1", 19, 960)
    assert first.last_week_rank == 2
    assert poll.teams[-1].last_week_rank is None


def test_poll_date_defaults_to_today():
    poll = parse_poll_html(poll_page([_team(1), _team(2)]), TODAY)
    assert poll.date == "October 15, 2025"


def test_entity_escaped_team_names():
    poll = parse_poll_html(poll_page([_team(1, shortname="St. Mary&#39;s")]), TODAY)
    assert poll.teams[0].team == "St. Mary's"


def test_missing_array_raises():
    with pytest.raises(PollDataMissingError):
        parse_poll_html("<html><body>No poll this week</body></html>", TODAY)


def test_empty_array_raises():
    with pytest.raises(PollDataMissingError):
        parse_poll_html(poll_page([]), TODAY)


def test_iter_objects_skips_undecodable():
    assert [o["a"] for o in iter_objects('{"a": 1}, {"a": nope}, {"a": 3}')] == [1, 3]


def test_service_uses_gendered_url(fake_fetcher):
    cfg = AppConfig()
    fetcher = fake_fetcher({cfg.poll_url("women"): poll_page([_team(1)])})
    poll = PollService(fetcher=fetcher, config=cfg, today=lambda: TODAY).scrape_poll("women")
    assert poll.teams[0].team == "Team 1"
    assert fetcher.calls == [cfg.poll_url("women")]
