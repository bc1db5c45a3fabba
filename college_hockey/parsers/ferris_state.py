# college_hockey/parsers/ferris_state.py
"""
Ferris State (ferrisstatebulldogs.com).

Every piece of a game sits in its own element, in document order:

    Oct 03 (Fri) / 6:07 PM EDT / AT Miami (Ohio) / L, 1-4

The scanner remembers the last date and time it saw and emits a game when it
reaches an "AT"/"VS" opponent element. A result element that follows fills in
the score of the game just emitted.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup

from ..models import COMPLETED, ScheduleGame, TeamSchedule
from ..seasons import extract_season
from .common import (
    ROW_ERRORS,
    ParseContext,
    build_game,
    extract_record,
    finish_schedule,
    offseason_schedule,
    parse_result,
    season_date,
)

logger = logging.getLogger(__name__)

SCANNED_TAGS = ["div", "li", "article", "span", "p", "time"]

_DATE = re.compile(r"^([A-Z][a-z]{2})\s+(\d{1,2})\s+\([A-Z][a-z]{2}\)$")
_TIME = re.compile(r"^(\d{1,2}:\d{2}\s+(?:AM|PM)(?:\s+(?:EDT|EST|CDT|CST))?|TBA)$")
_OPPONENT = re.compile(r"^(AT|VS)\s+(.+?)(\s*[#*%].*)?$")
_RESULT = re.compile(r"^[WLT],?\s*\d{1,2}-\d{1,2}")


def parse(soup: BeautifulSoup, ctx: ParseContext) -> TeamSchedule:
    record = extract_record(soup)
    season = extract_season(soup, ctx.target_season)
    if not season:
        return offseason_schedule(ctx, record)

    games: List[ScheduleGame] = []
    current_date: Optional[re.Match] = None
    current_time: Optional[str] = None
    awaiting_result = False

    for el in soup.find_all(SCANNED_TAGS):
        text = el.get_text(" ", strip=True)
        if not text:
            continue

        m = _DATE.match(text)
        if m:
            current_date = m
            awaiting_result = False
            continue

        if _TIME.match(text):
            current_time = text
            continue

        if awaiting_result and _RESULT.match(text):
            result = parse_result(text)
            if result is not None:
                games[-1] = dataclasses.replace(games[-1], result=result, status=COMPLETED, time=None)
            awaiting_result = False
            continue

        m = _OPPONENT.match(text)
        if not m or current_date is None:
            continue

        try:
            day = season_date(current_date.group(1), current_date.group(2), season)
            game = build_game(
                ctx,
                day,
                m.group(2),
                m.group(1) == "VS",
                text,
                time=current_time,
                exhibition="#" in (m.group(3) or ""),
            )
        except ROW_ERRORS as exc:
            logger.debug("Skipping Ferris State element %r: %s", text, exc)
            game = None

        if game is not None:
            games.append(game)
            awaiting_result = True
        current_date = None
        current_time = None

    return finish_schedule(ctx, season, record, games)
