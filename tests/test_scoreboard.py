from datetime import date, datetime

import pytest

from college_hockey.config import AppConfig
from college_hockey.models import COMPLETED, IN_PROGRESS, POSTPONED, SCHEDULED
from college_hockey.services.scoreboard_service import (
    ScoreboardService,
    format_section_date,
    live_data,
    parse_live_scoreboard_html,
    parse_scoreboard_html,
)

NOW = datetime(2025, 10, 15, 20, 30)


def _row(away, away_score, home, home_score, status):
    cells = [away, away_score, "at", home, home_score, "", status, ""]
    return "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def _label(text):
    return f"<tr><td colspan='8'>{text}</td></tr>"


LISTING = (
    "<table>"
    + _label("Friday, October 3, 2025")
    + _label("Hockey East")
    + _row("Maine", "2", "Boston College", "5", "Final")
    + _label("Non-Conference")
    + _row("Denver", "", "Providence", "", "7:00 PM")
    + _label("Exhibition")
    + _row("Toronto", "", "Michigan", "", "PPD")
    + _label("Saturday, October 4, 2025")
    + _row("Yale", "1", "Harvard", "1", "2nd Per. 12:34")
    + "</table>"
)


def test_format_section_date():
    assert format_section_date(date(2025, 10, 3)) == "Friday, October 3, 2025"


def test_scoreboard_section_and_statuses():
    sb = parse_scoreboard_html(LISTING, date(2025, 10, 3), "men", NOW)
    assert [g.home_team for g in sb.games] == ["Boston College", "Providence", "Michigan"]

    final, upcoming, ppd = sb.games
    assert final.status == COMPLETED
    assert (final.result.home_score, final.result.away_score) == (5, 2)
    assert final.conference == "Hockey East" and not final.exhibition
    assert final.id == "Maine-at-Boston-College-2025-10-03"

    assert upcoming.status == SCHEDULED and upcoming.time == "7:00 PM"
    assert upcoming.conference == "Non-Conference"

    assert ppd.status == POSTPONED and ppd.exhibition


def test_scoreboard_live_game_in_later_section():
    sb = parse_scoreboard_html(LISTING, date(2025, 10, 4), "men", NOW)
    (game,) = sb.games
    assert game.status == IN_PROGRESS
    assert game.live_data.period == "2nd"
    assert game.live_data.time_remaining == "12:34"
    assert game.result.home_score == 1


def test_scoreboard_overtime_final_is_completed():
    page = (
        "<table>"
        + _label("Friday, October 3, 2025")
        + _label("Hockey East")
        + _row("Maine", "2", "Boston College", "3", "OT")
        + _row("Vermont", "1", "Northeastern", "2", "SO")
        + "</table>"
    )
    ot, so = parse_scoreboard_html(page, date(2025, 10, 3), "men", NOW).games
    assert ot.status == COMPLETED and ot.live_data is None
    assert (ot.result.away_score, ot.result.home_score) == (2, 3)
    assert so.status == COMPLETED


def test_scoreboard_without_matching_section_is_empty():
    sb = parse_scoreboard_html(LISTING, date(2025, 10, 5), "men", NOW)
    assert list(sb.games) == []
    assert sb.date == date(2025, 10, 5)


@pytest.mark.parametrize(
    "status, period, clock, intermission",
    [
        ("2nd Per. 12:34", "2nd", "12:34", False),
        ("1st Int.", "1st", None, True),
        ("OT 3:21", "OT", "3:21", False),
        ("3rd Period 0:45", "3rd", "0:45", False),
    ],
)
def test_live_data(status, period, clock, intermission):
    live = live_data(status)
    assert (live.period, live.time_remaining, live.intermission) == (period, clock, intermission)


@pytest.mark.parametrize("status", ["Final", "Final OT", "OT", "SO", "7:00 PM", ""])
def test_live_data_none_without_marker(status):
    assert live_data(status) is None


MEN_LIVE = """
<div class="confGroup"><h2>NCHC</h2><table>
<tr><td><img alt="Denver away logo"></td><td></td><td>Denver</td><td>3</td><td class="gamestatus">3rd Per. 5:00</td></tr>
<tr><td><img alt="North Dakota home logo"></td><td></td><td>North Dakota</td><td>2</td></tr>
</table></div>
"""

WOMEN_LIVE = """
<div class="confGroup"><h2>ECAC Hockey</h2><table>
<tr><td><img alt="Yale away logo"></td><td>Yale</td><td>1</td><td class="gamestatus">Final</td></tr>
<tr><td><img alt="Harvard home logo"></td><td>Harvard</td><td>4</td></tr>
</table></div>
"""


def test_live_scoreboard_men_layout():
    (game,) = parse_live_scoreboard_html(MEN_LIVE, "men", NOW).games
    assert (game.away_team, game.home_team) == ("Denver", "North Dakota")
    assert (game.result.away_score, game.result.home_score) == (3, 2)
    assert game.status == IN_PROGRESS and game.live_data.period == "3rd"
    assert game.conference == "NCHC"
    assert game.id == "Denver-at-North-Dakota-2025-10-15"


def test_live_scoreboard_women_layout():
    (game,) = parse_live_scoreboard_html(WOMEN_LIVE, "women", NOW).games
    assert (game.away_team, game.home_team) == ("Yale", "Harvard")
    assert game.status == COMPLETED
    assert game.conference == "ECAC"


def test_service_fetches_gendered_pages(fake_fetcher):
    cfg = AppConfig()
    fetcher = fake_fetcher({cfg.scoreboard_url("women"): LISTING, cfg.live_scoreboard_url("men"): MEN_LIVE})
    service = ScoreboardService(fetcher=fetcher, config=cfg, now=lambda: NOW)

    assert len(service.scrape_scoreboard(date(2025, 10, 3), "women").games) == 3
    assert service.scrape_live_scoreboard("men").date == date(2025, 10, 15)
    assert fetcher.calls == [cfg.scoreboard_url("women"), cfg.live_scoreboard_url("men")]
