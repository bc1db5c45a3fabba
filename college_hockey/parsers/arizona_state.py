# college_hockey/parsers/arizona_state.py
"""
Arizona State (thesundevils.com).

The schedule renders each game as separately laid out nodes whose text runs
together once extracted, e.g.

    Oct3Oct3(Fri)7:00 p.m. (MST)Mullett Arenavs. Penn StateBig TenEvent details

Dates and "vs."/"at" opponents are matched independently and each opponent
is paired with the closest date token in front of it.
"""

from __future__ import annotations

import bisect
import logging
import re
from typing import List, Tuple

from bs4 import BeautifulSoup

from ..models import ScheduleGame, TeamSchedule
from ..seasons import extract_season
from .common import (
    ROW_ERRORS,
    ParseContext,
    build_game,
    collect,
    extract_record,
    finish_schedule,
    offseason_schedule,
    season_date,
)

logger = logging.getLogger(__name__)

SECTION_MARKER = "Schedule Events"

_DATE_TOKEN = re.compile(r"([A-Z][a-z]{2})(\d{1,2})\([A-Z][a-z]{2}\)")
# "at" stands alone, or is glued to the venue name in front of it ("Magness Arenaat Denver").
_AT = r"(?:(?<![A-Za-z])|(?<=Arena)|(?<=Center)|(?<=Rink)|(?<=Forum))at"
_END = r"(?=Event details|Show Event Info|Season opener|[A-Z][a-z]{2}\d{1,2}[A-Z(]|$)"
_OPPONENT = re.compile(r"(vs\.|" + _AT + r")\s+(.+?)" + _END)
# Looser pass for pages without the "(Fri)" weekday tokens.
_LOOSE = re.compile(
    r"([A-Z][a-z]{2}) ?(\d{1,2})(?![\d:])[^\n]{0,120}?(vs\.|" + _AT + r")\s+(.+?)"
    r"(?=Season|Event|Show|[A-Z][a-z]{2} ?\d{1,2}(?![\d:])|$)"
)


def _schedule_text(soup: BeautifulSoup) -> str:
    # Nodes are joined without separators, the way the page renders them.
    text = re.sub(r"\s+", " ", soup.get_text())
    start = text.find(SECTION_MARKER)
    return text[start:] if start != -1 else text


def _paired(text: str, ctx: ParseContext, season: str) -> List[ScheduleGame]:
    dates: List[Tuple[int, str, str]] = [(m.end(), m.group(1), m.group(2)) for m in _DATE_TOKEN.finditer(text)]
    if not dates:
        return []
    ends = [d[0] for d in dates]

    games: List[ScheduleGame] = []
    used = set()
    for m in _OPPONENT.finditer(text):
        i = bisect.bisect_right(ends, m.start()) - 1
        if i < 0 or i in used:
            continue
        used.add(i)
        _, month, day_num = dates[i]
        context = text[dates[i][0]:m.end()]
        try:
            day = season_date(month, day_num, season)
            collect(games, build_game(ctx, day, m.group(2), m.group(1) == "vs.", context))
        except ROW_ERRORS as exc:
            logger.debug("Skipping Arizona State entry %s %s: %s", month, day_num, exc)
    return games


def _loose(text: str, ctx: ParseContext, season: str) -> List[ScheduleGame]:
    games: List[ScheduleGame] = []
    for m in _LOOSE.finditer(text):
        month, day_num, marker, opponent = m.groups()
        try:
            day = season_date(month, day_num, season)
            collect(games, build_game(ctx, day, opponent, marker == "vs.", m.group(0)))
        except ROW_ERRORS as exc:
            logger.debug("Skipping loose Arizona State match %r: %s", m.group(0)[:40], exc)
    return games


def parse(soup: BeautifulSoup, ctx: ParseContext) -> TeamSchedule:
    record = extract_record(soup)
    season = extract_season(soup, ctx.target_season)
    if not season:
        return offseason_schedule(ctx, record)

    text = _schedule_text(soup)
    games = _paired(text, ctx, season) or _loose(text, ctx, season)
    logger.info("Arizona State parser found %d games for %s", len(games), ctx.team_name)
    return finish_schedule(ctx, season, record, games)
