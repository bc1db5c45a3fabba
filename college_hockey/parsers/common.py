# college_hockey/parsers/common.py
"""
Helpers shared by the schedule parsers.

Parsers are plain functions of (soup, ParseContext) -> TeamSchedule. Anything
they have in common (record extraction, date building, result/time/network
sniffing, known home venues, the offseason shape) lives here so each parser
only carries its own site's extraction logic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from ..conferences import ConferenceMap
from ..models import (
    CANCELLED,
    COMPLETED,
    NEUTRAL_SITE,
    OFFSEASON,
    POSTPONED,
    SCHEDULED,
    BroadcastInfo,
    GameResult,
    Record,
    ScheduleGame,
    TeamSchedule,
)
from ..opponents import has_exhibition_marker, normalize_opponent
from ..seasons import infer_game_year

logger = logging.getLogger(__name__)

# Exceptions a single malformed row may raise; the row is skipped.
ROW_ERRORS = (ValueError, AttributeError, IndexError, KeyError, TypeError)

MONTHS: Mapping[str, int] = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

RESULT_RE = re.compile(r"\b([WLT]),?\s*(\d{1,2})\s*-\s*(\d{1,2})\b")
TIME_RE = re.compile(r"\b(\d{1,2}(?::\d{2})?\s*[AaPp]\.?\s?[Mm]\.?(?:\s*\(?[ECMP][SD]T\)?)?)")
_STATUS_POSTPONED = re.compile(r"\b(?:postponed|PPD)\b", re.IGNORECASE)
_STATUS_CANCELLED = re.compile(r"\bcancel+ed\b", re.IGNORECASE)

_RECORD_PATTERNS: Sequence[Tuple[str, re.Pattern]] = (
    ("overall", re.compile(r"Overall\s*:?\s*(\d+-\d+-\d+)")),
    ("conference", re.compile(r"Conf(?:erence)?\s*:?\s*(\d+-\d+-\d+)")),
    ("home", re.compile(r"Home\s*:?\s*(\d+-\d+-\d+)")),
    ("away", re.compile(r"Away\s*:?\s*(\d+-\d+-\d+)")),
    ("neutral", re.compile(r"Neutral\s*:?\s*(\d+-\d+-\d+)")),
)

# (network name, pattern) checked in order
_NETWORKS: Sequence[Tuple[str, re.Pattern]] = (
    ("ESPN+", re.compile(r"ESPN\+")),
    ("Big Ten Network", re.compile(r"\bBTN\b|Big Ten Network")),
    ("NESN", re.compile(r"\bNESN\+?")),
    ("NCHC.tv", re.compile(r"NCHC\.tv", re.IGNORECASE)),
    ("FloHockey", re.compile(r"FloHockey|FloSports")),
)


@dataclass(frozen=True)
class KnownVenue:
    venue: str
    city: str
    state: str
    markers: Tuple[str, ...]


KNOWN_VENUES: Sequence[KnownVenue] = (
    KnownVenue("Agganis Arena", "Boston", "MA", ("Agganis", "goterriers.com")),
    KnownVenue("Mullett Arena", "Tempe", "AZ", ("Mullett",)),
    KnownVenue("Conte Forum", "Chestnut Hill", "MA", ("Conte Forum",)),
    KnownVenue("Yost Ice Arena", "Ann Arbor", "MI", ("Yost",)),
    KnownVenue("Ewigleben Arena", "Big Rapids", "MI", ("Ewigleben",)),
    KnownVenue("Munn Ice Arena", "East Lansing", "MI", ("Munn Ice",)),
)


@dataclass(frozen=True)
class ParseContext:
    """Per-scrape inputs every parser needs."""

    team_name: str
    target_season: str
    conferences: ConferenceMap
    now: datetime


def page_text(soup: BeautifulSoup, separator: str = " ") -> str:
    """Whole-document text with whitespace runs collapsed."""
    return re.sub(r"\s+", " ", soup.get_text(separator)).strip()


def extract_record(soup: BeautifulSoup) -> Record:
    """Pull "Overall6-3-1" style label/value pairs; missing splits stay "0-0-0"."""
    text = soup.get_text()
    found = {}
    for key, pattern in _RECORD_PATTERNS:
        m = pattern.search(text)
        if m:
            found[key] = m.group(1)
    return Record(**found)


def offseason_schedule(ctx: ParseContext, record: Optional[Record] = None) -> TeamSchedule:
    """The "no confirmed current-season data" shape."""
    logger.info("%s: no valid current season found, page likely shows an old schedule", ctx.team_name)
    return TeamSchedule(
        team_name=ctx.team_name,
        season=OFFSEASON,
        record=record or Record(),
        games=[],
        last_updated=ctx.now,
    )


def finish_schedule(ctx: ParseContext, season: str, record: Record, games: Iterable[ScheduleGame]) -> TeamSchedule:
    """Wrap parsed games into a TeamSchedule ordered by date (stable for same-day games)."""
    return TeamSchedule(
        team_name=ctx.team_name,
        season=season,
        record=record,
        games=sorted(games, key=lambda g: g.date),
        last_updated=ctx.now,
    )


def month_number(name: str) -> int:
    """Month number for "Oct", "Oct.", "October"; raises KeyError for anything else."""
    return MONTHS[name.strip(". ")[:3].title()]


def season_date(month_name: str, day: str, season: str) -> date:
    """Build a game date, taking the year from the season's two-calendar-year rule."""
    month = month_number(month_name)
    return date(infer_game_year(month, season), month, int(day))


def game_id(team_name: str, day: date, opponent: str) -> str:
    return re.sub(r"\s+", "-", f"{team_name}-{day.isoformat()}-{opponent}")


def known_venue(text: str) -> Optional[KnownVenue]:
    for venue in KNOWN_VENUES:
        if any(marker in text for marker in venue.markers):
            return venue
    return None


def parse_result(text: str) -> Optional[GameResult]:
    """ "W, 4-2" / "L 1-3" / "T 2-2" -> GameResult; None when no final score is shown."""
    m = RESULT_RE.search(text or "")
    if not m:
        return None
    outcome, ours, theirs = m.groups()
    return GameResult(score=f"{ours}-{theirs}", won=outcome == "W")


def extract_time(text: str) -> Optional[str]:
    m = TIME_RE.search(text or "")
    if m:
        return re.sub(r"\s+", " ", m.group(1)).strip()
    if re.search(r"\bTBA\b", text or ""):
        return "TBA"
    return None


def detect_network(text: str) -> Optional[str]:
    for name, pattern in _NETWORKS:
        if pattern.search(text or ""):
            return name
    return None


def status_from_text(text: str) -> str:
    if _STATUS_POSTPONED.search(text or ""):
        return POSTPONED
    if _STATUS_CANCELLED.search(text or ""):
        return CANCELLED
    return SCHEDULED


def cut_opponent_tail(raw: str) -> str:
    """Drop a trailing result, time or network that text patterns swept into the opponent."""
    cut = len(raw)
    for pattern in (RESULT_RE, TIME_RE, re.compile(r"ESPN\+?|\bBTN\b|\bNESN")):
        m = pattern.search(raw)
        if m:
            cut = min(cut, m.start())
    return raw[:cut]


def build_game(
    ctx: ParseContext,
    day: date,
    raw_opponent: str,
    is_home: bool,
    context_text: str = "",
    *,
    neutral: bool = False,
    time: Optional[str] = None,
    exhibition: Optional[bool] = None,
    conference: Optional[bool] = None,
    result: Optional[GameResult] = None,
    broadcast: Optional[BroadcastInfo] = None,
) -> Optional[ScheduleGame]:
    """
    Assemble one ScheduleGame from extracted pieces.

    The opponent goes through normalize_opponent(); None is returned when it
    does not survive. Flags left as None are derived: exhibition from markers
    next to the opponent, conference from the conference map, result, time,
    network and status from context_text.
    """
    opponent = normalize_opponent(raw_opponent)
    if opponent is None:
        logger.debug("Rejected opponent text %r", raw_opponent)
        return None

    if exhibition is None:
        exhibition = has_exhibition_marker(raw_opponent)
    if conference is None:
        conference = ctx.conferences.is_conference_game(ctx.team_name, opponent)
    if exhibition:
        conference = False

    if result is None:
        result = parse_result(context_text)

    if result is not None:
        status = COMPLETED
        time = None
    else:
        status = status_from_text(context_text)
        time = time or extract_time(context_text)

    venue = city = state = None
    if neutral:
        is_home = False
        venue = NEUTRAL_SITE
    elif is_home:
        found = known_venue(context_text)
        if found:
            venue, city, state = found.venue, found.city, found.state

    if broadcast is None:
        broadcast = BroadcastInfo(network=detect_network(context_text))

    return ScheduleGame(
        id=game_id(ctx.team_name, day, opponent),
        date=day,
        opponent=opponent,
        is_home=is_home,
        conference=conference,
        exhibition=exhibition,
        status=status,
        time=time,
        venue=venue,
        city=city,
        state=state,
        result=result,
        broadcast_info=None if broadcast.is_empty() else broadcast,
    )


def collect(games: List[ScheduleGame], game: Optional[ScheduleGame]) -> None:
    if game is not None:
        games.append(game)
