# college_hockey/parsers/generic.py
"""
Last-resort parser for unrecognised athletics sites.

Looks for schedule tables: a row counts as a game when one cell holds a date
("Oct 4", "Sat, Oct. 4", "10/4") and another holds an opponent prefixed with
"vs", "at" or "@".
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, Optional

from bs4 import BeautifulSoup

from ..models import ScheduleGame, TeamSchedule
from ..seasons import extract_season, infer_game_year
from .common import (
    MONTHS,
    ROW_ERRORS,
    ParseContext,
    build_game,
    collect,
    extract_record,
    finish_schedule,
    month_number,
    offseason_schedule,
)

logger = logging.getLogger(__name__)

_NAMED_DATE = re.compile(r"\b([A-Z][a-z]{2})[a-z]*\.?\s+(\d{1,2})\b")
_NUMERIC_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/\d{2,4})?\b")
_OPPONENT_CELL = re.compile(r"^(vs\.?\s*|at\s+|@\s*)(.+)$", re.IGNORECASE)


def _row_date(texts: List[str], season: str) -> Optional[date]:
    for text in texts:
        m = _NUMERIC_DATE.match(text)
        if m:
            month, day = int(m.group(1)), int(m.group(2))
            return date(infer_game_year(month, season), month, day)
        m = _NAMED_DATE.search(text)
        if m and m.group(1) in MONTHS:
            month = month_number(m.group(1))
            return date(infer_game_year(month, season), month, int(m.group(2)))
    return None


def parse(soup: BeautifulSoup, ctx: ParseContext) -> TeamSchedule:
    record = extract_record(soup)
    season = extract_season(soup, ctx.target_season)
    if not season:
        return offseason_schedule(ctx, record)

    games: List[ScheduleGame] = []
    for row in soup.find_all("tr"):
        texts = [c.get_text(" ", strip=True) for c in row.find_all(["td", "th"])]
        if len(texts) < 2:
            continue

        opponent = next((m for m in map(_OPPONENT_CELL.match, texts) if m), None)
        if opponent is None:
            continue

        try:
            day = _row_date(texts, season)
            if day is None:
                continue
            collect(
                games,
                build_game(ctx, day, opponent.group(2), opponent.group(1).lower().startswith("vs"), " ".join(texts)),
            )
        except ROW_ERRORS as exc:
            logger.debug("Skipping table row for %s: %s", ctx.team_name, exc)

    return finish_schedule(ctx, season, record, games)
