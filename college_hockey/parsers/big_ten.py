# college_hockey/parsers/big_ten.py
"""Big Ten athletics sites: date + "vs"/"at"/"@" opponent runs in page text."""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from bs4 import BeautifulSoup

from ..models import ScheduleGame, TeamSchedule
from ..seasons import extract_season
from .common import (
    ROW_ERRORS,
    ParseContext,
    build_game,
    collect,
    cut_opponent_tail,
    extract_record,
    finish_schedule,
    offseason_schedule,
    page_text,
    season_date,
)

logger = logging.getLogger(__name__)

SECTION_KEYWORDS = ("schedule", "games", "opponents")

_NEXT_DATE = r"(?:[A-Z][a-z]{2},?\s+)?[A-Z][a-z]{2}\.?\s*\d{1,2}\b"

# Tried in order; the first one that yields games wins.
PATTERNS: Sequence[re.Pattern] = (
    # "Oct 4 vs Michigan State"
    re.compile(r"\b([A-Z][a-z]{2})\.?\s+(\d{1,2})\s+(vs\.?|at|@)\s+(.+?)(?=\s+" + _NEXT_DATE + r"|\s*$)"),
    # "Oct4 vs Michigan State"
    re.compile(r"\b([A-Z][a-z]{2})(\d{1,2})\s+(vs\.?|at|@)\s+(.+?)(?=\s+[A-Z][a-z]{2}\d|\s*$)"),
    # "Sat, Oct 4 vs Michigan State"
    re.compile(r"[A-Z][a-z]{2},?\s+([A-Z][a-z]{2})\s+(\d{1,2})\s+(vs\.?|at|@)\s+(.+?)(?=\s+[A-Z][a-z]{2}|\s*$)"),
)


def _schedule_text(soup: BeautifulSoup) -> str:
    text = page_text(soup)
    lowered = text.lower()
    for keyword in SECTION_KEYWORDS:
        i = lowered.find(keyword)
        if i != -1:
            return text[i:]
    return text


def parse(soup: BeautifulSoup, ctx: ParseContext) -> TeamSchedule:
    record = extract_record(soup)
    season = extract_season(soup, ctx.target_season)
    if not season:
        return offseason_schedule(ctx, record)

    text = _schedule_text(soup)
    games: List[ScheduleGame] = []

    for pattern in PATTERNS:
        for m in pattern.finditer(text):
            month, day_num, marker, raw = m.groups()
            try:
                day = season_date(month, day_num, season)
                collect(
                    games,
                    build_game(ctx, day, cut_opponent_tail(raw), marker.lower().startswith("vs"), m.group(0)),
                )
            except ROW_ERRORS as exc:
                logger.debug("Skipping Big Ten match %r: %s", m.group(0)[:60], exc)
        if games:
            break

    logger.info("Big Ten parser found %d games for %s", len(games), ctx.team_name)
    return finish_schedule(ctx, season, record, games)
