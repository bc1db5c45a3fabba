# college_hockey/seasons.py
"""
Season label rules.

A hockey season spans two calendar years and is labelled "YYYY-YY", where the
two-digit suffix is (start year + 1) mod 100. August through December belong
to the start year, January through July to the following year.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, Optional

from bs4 import BeautifulSoup

from .models import OFFSEASON

logger = logging.getLogger(__name__)

SEASON_RE = re.compile(r"^(\d{4})-(\d{2})$")

# First month (1-based) that belongs to the season's start year.
SEASON_START_MONTH = 8

_SEASON_TOKEN = r"(\d{4})\s*[-/–]\s*(\d{4}|\d{2})"
_CONTEXT_PATTERNS = (
    re.compile(_SEASON_TOKEN + r"\s*(?:season|schedule)", re.IGNORECASE),
    re.compile(r"(?:season|schedule)\s*:?\s*" + _SEASON_TOKEN, re.IGNORECASE),
)
_STANDALONE_PATTERN = re.compile(r"(?<![\d/-])" + _SEASON_TOKEN + r"(?![\d/-])")


def format_season(start_year: int) -> str:
    """Build the "YYYY-YY" label for a season starting in start_year."""
    return f"{start_year}-{(start_year + 1) % 100:02d}"


def season_for_date(day: date) -> str:
    """Return the season label that day falls in."""
    start = day.year if day.month >= SEASON_START_MONTH else day.year - 1
    return format_season(start)


def season_start_year(season: str) -> Optional[int]:
    """
    Return the start year of a well-formed season label, else None.

    "2099-00" is well formed (99 wraps to 00); "2025-27" is not.
    """
    m = SEASON_RE.match(season or "")
    if not m:
        return None
    start = int(m.group(1))
    if int(m.group(2)) != (start + 1) % 100:
        return None
    return start


def is_valid_season(season: str, target_season: str) -> bool:
    """True for a well-formed season that is the target season or later."""
    if season == OFFSEASON:
        return False
    start = season_start_year(season)
    target_start = season_start_year(target_season)
    if start is None or target_start is None:
        return False
    return start >= target_start


def infer_game_year(month: int, season: str) -> int:
    """Calendar year of a game played in month (1-12) during season."""
    start = season_start_year(season)
    if start is None:
        raise ValueError(f"Malformed season label: {season!r}")
    return start if month >= SEASON_START_MONTH else start + 1


def _normalize_token(start: str, end: str) -> Optional[str]:
    """Turn ("2025", "26") or ("2025", "2026") into "2025-26"; None if the years don't chain."""
    if len(end) == 4:
        if int(end) != int(start) + 1:
            return None
        end = end[2:]
    return f"{start}-{end}"


def _find_seasons(text: str, patterns) -> List[str]:
    out: List[str] = []
    for pattern in patterns:
        for m in pattern.finditer(text):
            label = _normalize_token(m.group(1), m.group(2))
            if label:
                out.append(label)
    return out


def extract_season(soup: BeautifulSoup, target_season: str) -> Optional[str]:
    """
    Find the season a schedule page is showing.

    Looks at the <title> and h1-h3 headings. Returns the target season when it
    is present, otherwise the earliest valid season at or after the target.
    Returns None when only older (or malformed) seasons are found, which
    callers treat as a stale prior-season page. With no season text at all,
    the target season is assumed only if the page mentions one of its years.
    """
    title = soup.title.get_text(" ", strip=True) if soup.title else ""
    headings = " ".join(h.get_text(" ", strip=True) for h in soup.find_all(["h1", "h2", "h3"]))

    found = _find_seasons(title, _CONTEXT_PATTERNS) + _find_seasons(headings, _CONTEXT_PATTERNS)

    if not found:
        found = [
            s for s in _find_seasons(f"{title} {headings}", (_STANDALONE_PATTERN,))
            if season_start_year(s) is not None
        ]

    valid = sorted({s for s in found if is_valid_season(s, target_season)})
    if target_season in valid:
        return target_season
    if valid:
        logger.info("Found valid season %s (not target %s)", valid[0], target_season)
        return valid[0]

    if found:
        logger.info("Only stale or malformed seasons found (%s); treating page as outdated", ", ".join(sorted(set(found))))
        return None

    target_start = season_start_year(target_season)
    page_text = soup.get_text(" ")
    if target_start is not None and (str(target_start) in page_text or str(target_start + 1) in page_text):
        return target_season

    return None
