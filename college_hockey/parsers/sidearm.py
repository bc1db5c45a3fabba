# college_hockey/parsers/sidearm.py
"""
Sidearm Sports athletics sites (goterriers.com, bceagles.com and most others).

Two passes:
  1. DOM cards: each game is an element with class "sidearm-schedule-game"
     carrying date, opponent, location, result and link children.
  2. Text: when the card markup is missing (print views, older templates),
     split the page text on "Oct 4 (Sat)" date anchors and read the
     "vs"/"at" opponent out of each chunk. Splitting on dates keeps one
     game's text from bleeding into the next.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..models import BroadcastInfo, ScheduleGame, TeamSchedule
from ..seasons import extract_season
from .common import (
    ROW_ERRORS,
    ParseContext,
    build_game,
    collect,
    cut_opponent_tail,
    detect_network,
    extract_record,
    finish_schedule,
    offseason_schedule,
    page_text,
    parse_result,
    season_date,
)

logger = logging.getLogger(__name__)

_CARD_DATE = re.compile(r"([A-Z][a-z]{2})[a-z]*\.?\s+(\d{1,2})\b")
_DATE_ANCHOR = re.compile(r"([A-Z][a-z]{2}\s+\d{1,2}\s+\([A-Z][a-z]{2}\))")
_STOP = r"(?=\s*(?:ESPN|Watch|Listen|Tickets|Game|$))"
_STARRED_OPPONENT = re.compile(r"\*\s+(vs\.?|at)\s+(.+?)" + _STOP, re.IGNORECASE)
_OPPONENT = re.compile(r"(?:^|\s)(vs\.?|at)\s+(.+?)" + _STOP, re.IGNORECASE)


def _links(card: Tag) -> BroadcastInfo:
    watch = stats = tickets = None
    for a in card.find_all("a", href=True):
        label = a.get_text(" ", strip=True).lower()
        if watch is None and ("watch" in label or "video" in label):
            watch = a["href"]
        elif stats is None and ("stats" in label or "box score" in label):
            stats = a["href"]
        elif tickets is None and "ticket" in label:
            tickets = a["href"]
    return BroadcastInfo(
        network=detect_network(card.get_text(" ")),
        watch_link=watch,
        stats_link=stats,
        tickets_link=tickets,
    )


def _game_from_card(card: Tag, ctx: ParseContext, season: str) -> Optional[ScheduleGame]:
    classes = " ".join(card.get("class", []))

    date_el = card.select_one(".sidearm-schedule-game-opponent-date")
    date_text = date_el.get_text(" ", strip=True) if date_el else card.get_text(" ", strip=True)
    m = _CARD_DATE.search(date_text)
    if not m:
        return None
    day = season_date(m.group(1), m.group(2), season)

    name_el = card.select_one(".sidearm-schedule-game-opponent-name")
    if name_el is None:
        return None
    raw_opponent = name_el.get_text(" ", strip=True)

    vs_el = card.select_one(".sidearm-schedule-game-conference-vs")
    vs_text = vs_el.get_text(" ", strip=True).lower() if vs_el else ""
    neutral = "neutral" in classes
    is_home = "sidearm-schedule-away-game" not in classes and not vs_text.startswith("at")

    result_el = card.select_one(".sidearm-schedule-game-result")
    result = parse_result(result_el.get_text(" ", strip=True)) if result_el else None

    card_text = card.get_text(" ", strip=True)
    return build_game(
        ctx,
        day,
        raw_opponent,
        is_home,
        card_text,
        neutral=neutral,
        exhibition=(
            "exhibition" in classes
            or "exhibition" in card_text.lower()
            or "(exh" in card_text.lower()
            or raw_opponent.rstrip().endswith("#")
        ),
        result=result,
        broadcast=_links(card),
    )


def _parse_cards(soup: BeautifulSoup, ctx: ParseContext, season: str) -> List[ScheduleGame]:
    games: List[ScheduleGame] = []
    for card in soup.select(".sidearm-schedule-game"):
        try:
            collect(games, _game_from_card(card, ctx, season))
        except ROW_ERRORS as exc:
            logger.debug("Skipping sidearm card for %s: %s", ctx.team_name, exc)
    return games


def _parse_text(soup: BeautifulSoup, ctx: ParseContext, season: str) -> List[ScheduleGame]:
    games: List[ScheduleGame] = []
    sections = _DATE_ANCHOR.split(page_text(soup))

    # split() with a capture group alternates [before, date, chunk, date, chunk, ...]
    for i in range(1, len(sections) - 1, 2):
        date_part, chunk = sections[i], sections[i + 1]
        m = _STARRED_OPPONENT.search(chunk) or _OPPONENT.search(chunk)
        if not m:
            continue
        try:
            month, day_num = date_part.split()[:2]
            day = season_date(month, day_num, season)
            collect(
                games,
                build_game(
                    ctx,
                    day,
                    cut_opponent_tail(m.group(2)),
                    m.group(1).lower().startswith("vs"),
                    f"{date_part} {chunk}",
                ),
            )
        except ROW_ERRORS as exc:
            logger.debug("Skipping sidearm text section %r: %s", date_part, exc)

    logger.debug("Sidearm text pass found %d games for %s", len(games), ctx.team_name)
    return games


def parse(soup: BeautifulSoup, ctx: ParseContext) -> TeamSchedule:
    record = extract_record(soup)
    season = extract_season(soup, ctx.target_season)
    if not season:
        return offseason_schedule(ctx, record)

    games = _parse_cards(soup, ctx, season) or _parse_text(soup, ctx, season)
    return finish_schedule(ctx, season, record, games)
