# college_hockey/parsers/chn.py
"""
College Hockey News team schedule pages.

The page is one table. Month header rows ("October 2025") give month and
year; game rows carry, by cell position:

    0 day ("3 Fri")   1 footnote   2 W/L/T   3 our score   4 "- 7"
    6 location ("at" away, "vs." neutral, blank home)
    7 opponent, with "(nc)" non-conference and "(ex)" exhibition markers
    10 start time

The h2 header carries "Record: 6-3-1 (4-2-0 HEA)".
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from datetime import date
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ..models import NEUTRAL_SITE, GameResult, Record, ScheduleGame, TeamSchedule
from ..seasons import extract_season, is_valid_season, season_for_date
from .common import ROW_ERRORS, ParseContext, build_game, finish_schedule, offseason_schedule

logger = logging.getLogger(__name__)

MIN_GAME_CELLS = 9

_MONTH_HEADER = re.compile(
    r"^(January|February|March|April|May|June|July|August|September|October|November|December)\s+(\d{4})$"
)
_MONTHS = {
    name: i
    for i, name in enumerate(
        ("January", "February", "March", "April", "May", "June", "July",
         "August", "September", "October", "November", "December"),
        start=1,
    )
}
_DAY = re.compile(r"^(\d{1,2})\b")
_OPPONENT_SCORE = re.compile(r"^-\s*(\d+)$")
_RECORD = re.compile(r"Record:\s*(\d+-\d+-\d+).*?\((\d+-\d+-\d+)\s+[A-Za-z]+\)")
_OVERALL_ONLY = re.compile(r"Record:\s*(\d+-\d+-\d+)")


def _header_record(soup: BeautifulSoup) -> Tuple[str, str]:
    h2 = soup.find("h2")
    text = h2.get_text(" ", strip=True) if h2 else ""
    m = _RECORD.search(text)
    if m:
        return m.group(1), m.group(2)
    m = _OVERALL_ONLY.search(text)
    return (m.group(1) if m else "0-0-0"), "0-0-0"


def _venue_split(game: ScheduleGame) -> str:
    if game.venue == NEUTRAL_SITE:
        return "neutral"
    return "home" if game.is_home else "away"


def _tally(games: List[ScheduleGame]) -> Record:
    """Home/away/neutral W-L-T splits from completed games."""
    counts = {key: Counter() for key in ("home", "away", "neutral")}
    for g in games:
        if g.result is None:
            continue
        ours, theirs = (int(x) for x in g.result.score.split("-"))
        outcome = "W" if g.result.won else ("T" if ours == theirs else "L")
        counts[_venue_split(g)][outcome] += 1
    return Record(**{k: f"{c['W']}-{c['L']}-{c['T']}" for k, c in counts.items()})


def _result(cells: List[Tag]) -> Optional[GameResult]:
    outcome = cells[2].get_text(strip=True)
    ours = cells[3].get_text(strip=True)
    m = _OPPONENT_SCORE.match(cells[4].get_text(strip=True))
    if outcome not in ("W", "L", "T") or not ours.isdigit() or not m:
        return None
    return GameResult(score=f"{int(ours)}-{int(m.group(1))}", won=outcome == "W")


def _game_from_row(cells: List[Tag], month: int, year: int, ctx: ParseContext) -> Optional[ScheduleGame]:
    m = _DAY.match(cells[0].get_text(strip=True))
    if not m:
        return None
    day = date(year, month, int(m.group(1)))

    location = cells[6].get_text(strip=True).lower()
    raw_opponent = cells[7].get_text(" ", strip=True)
    markers = raw_opponent.lower()
    exhibition = "(ex)" in markers or "(exh" in markers
    conference = False if "(nc)" in markers or exhibition else None

    time = cells[10].get_text(" ", strip=True) if len(cells) > 10 else None
    row_text = " ".join(c.get_text(" ", strip=True) for c in cells)

    return build_game(
        ctx,
        day,
        raw_opponent,
        location != "at",
        row_text,
        neutral=location == "vs.",
        time=time or None,
        exhibition=exhibition,
        conference=conference,
        result=_result(cells),
    )


def parse(soup: BeautifulSoup, ctx: ParseContext) -> TeamSchedule:
    games: List[ScheduleGame] = []
    first_month: Optional[date] = None
    month = year = None

    for row in soup.select("table tr"):
        cells = row.find_all("td")
        if not cells:
            continue

        header = _MONTH_HEADER.match(row.get_text(" ", strip=True))
        if header:
            month, year = _MONTHS[header.group(1)], int(header.group(2))
            if first_month is None:
                first_month = date(year, month, 1)
            continue

        if len(cells) < MIN_GAME_CELLS or month is None:
            continue

        try:
            game = _game_from_row(cells, month, year, ctx)
        except ROW_ERRORS as exc:
            logger.debug("Skipping CHN row for %s: %s", ctx.team_name, exc)
            continue
        if game is None:
            continue
        games.append(game)

    # Month headers are authoritative; headings only matter without them.
    season = season_for_date(first_month) if first_month else extract_season(soup, ctx.target_season)
    if not season or not is_valid_season(season, ctx.target_season):
        return offseason_schedule(ctx)

    overall, conference = _header_record(soup)
    splits = _tally(games)
    record = Record(
        overall=overall,
        conference=conference,
        home=splits.home,
        away=splits.away,
        neutral=splits.neutral,
    )
    return finish_schedule(ctx, season, record, games)
