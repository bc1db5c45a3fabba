# college_hockey/services/scoreboard_service.py
"""
Daily scoreboards from College Hockey News.

Two page flavors:
  - the schedule listing: date-sectioned table. A single-cell row reading
    "Friday, October 3, 2025" opens a section; single-cell rows inside a
    section name the conference (or exhibition) for the games under them.
  - the live scoreboard: today's games only, one away-logo row followed by
    its home-logo row, grouped in ".confGroup" blocks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from dateutil import tz

from ..config import AppConfig
from ..http_client import HttpFetcher
from ..models import (
    CANCELLED,
    COMPLETED,
    IN_PROGRESS,
    POSTPONED,
    SCHEDULED,
    LiveData,
    Scoreboard,
    ScoreboardGame,
    ScoreboardResult,
)

logger = logging.getLogger(__name__)

NON_CONFERENCE = "Non-Conference"
MIN_ROW_CELLS = 8

CONFERENCE_NAMES = (
    "Hockey East", "NCHC", "Big Ten", "CCHA", "ECAC", "Atlantic Hockey", "AHA", "WCHA", "NEWHA",
)

_DATE_HEADER = re.compile(r"^\w+, \w+ \d+, \d{4}$")
_LIVE_MARKER = re.compile(
    r"\b(?:Per\.?|Period|Int\.?|Intermission)(?![a-z])"
    r"|^(?:OT\d?|SO)\b(?=.*\d{1,2}:\d{2})",
    re.IGNORECASE,
)
_PERIOD = re.compile(r"\b(1st|2nd|3rd|[1-3]|OT\d?|SO)\b", re.IGNORECASE)
_INTERMISSION = re.compile(r"\bInt(?:\.|ermission)?\b", re.IGNORECASE)
_CLOCK = re.compile(r"\b(\d{1,2}:\d{2})\b")
_POSTPONED = re.compile(r"\b(?:PPD|Postponed)\b", re.IGNORECASE)
_CANCELLED = re.compile(r"\bCancel+ed\b", re.IGNORECASE)
_ORDINALS = {"1": "1st", "2": "2nd", "3": "3rd"}


def format_section_date(day: date) -> str:
    """Long-form date exactly as CHN prints section headers."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def _clean(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def _score(text: str) -> Optional[int]:
    text = _clean(text)
    return int(text) if text.isdigit() else None


def _scoreboard_id(away: str, home: str, day: date) -> str:
    return re.sub(r"\s+", "-", f"{away}-at-{home}-{day.isoformat()}")


def _conference_from_label(label: str) -> Tuple[str, bool]:
    """(conference name, exhibition) for a section label such as "Hockey East" or "Exhibition"."""
    exhibition = "exhibition" in label.lower()
    for name in CONFERENCE_NAMES:
        if name in label:
            return name, exhibition
    return NON_CONFERENCE, exhibition


def live_data(status_text: str) -> Optional[LiveData]:
    """
    Period/clock for an in-progress status ("2nd Per. 12:34", "1st Int.", "OT 3:21").

    Returns None when the text carries no live marker.
    """
    text = _clean(status_text)
    if not _LIVE_MARKER.search(text):
        return None
    m = _PERIOD.search(text)
    period = m.group(1) if m else "Live"
    period = _ORDINALS.get(period, period)
    if period.lower().startswith(("ot", "so")):
        period = period.upper()
    clock = _CLOCK.search(text)
    intermission = bool(_INTERMISSION.search(text))
    return LiveData(
        period=period,
        time_remaining=clock.group(1) if clock and not intermission else None,
        intermission=intermission,
    )


def _game(
    away: str,
    home: str,
    away_score: Optional[int],
    home_score: Optional[int],
    status_text: str,
    day: date,
    conference: str,
    exhibition: bool,
) -> ScoreboardGame:
    """Classify status: live marker, then final score, then PPD/cancelled, else scheduled."""
    scores = (
        ScoreboardResult(home_score=home_score, away_score=away_score)
        if home_score is not None and away_score is not None
        else None
    )
    live = live_data(status_text)

    time = None
    if live is not None:
        status = IN_PROGRESS
    elif scores is not None:
        status = COMPLETED
    elif _POSTPONED.search(status_text):
        status = POSTPONED
    elif _CANCELLED.search(status_text):
        status = CANCELLED
    else:
        status = SCHEDULED
        time = status_text or None

    return ScoreboardGame(
        id=_scoreboard_id(away, home, day),
        date=day,
        home_team=home,
        away_team=away,
        conference=conference,
        exhibition=exhibition,
        status=status,
        time=time,
        result=scores,
        live_data=live,
    )


def parse_scoreboard_html(html: str, day: date, gender: str, now: datetime) -> Scoreboard:
    """
    Pick the section whose header equals day's long-form date and parse its rows.

    Header matching is exact string equality; no matching section is an
    empty scoreboard, not an error.
    """
    soup = BeautifulSoup(html, "html.parser")
    target = format_section_date(day)

    in_target = False
    conference, exhibition = NON_CONFERENCE, False
    games: List[ScoreboardGame] = []

    for row in soup.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) == 1:
            label = _clean(cells[0].get_text(" "))
            if _DATE_HEADER.match(label):
                in_target = label == target
                conference, exhibition = NON_CONFERENCE, False
            elif in_target and label:
                conference, exhibition = _conference_from_label(label)
            continue

        if not in_target or len(cells) < MIN_ROW_CELLS:
            continue

        try:
            texts = [_clean(c.get_text(" ")) for c in cells]
            away, home = texts[0], texts[3]
            if not away or not home:
                continue
            games.append(
                _game(
                    away,
                    home,
                    _score(texts[1]),
                    _score(texts[4]),
                    texts[6],
                    day,
                    conference,
                    exhibition or any("Exhibition" in t for t in (texts[0], texts[3], texts[6])),
                )
            )
        except (ValueError, IndexError) as exc:
            logger.debug("Skipping scoreboard row: %s", exc)

    logger.info("Scoreboard %s (%s): %d games", target, gender, len(games))
    return Scoreboard(date=day, gender=gender, games=games, last_updated=now)


def _live_cells(row: Tag, team_idx: int) -> Tuple[str, Optional[int]]:
    cells = row.find_all("td")
    team = _clean(cells[team_idx].get_text(" ")) if len(cells) > team_idx else ""
    score = _score(cells[team_idx + 1].get_text(" ")) if len(cells) > team_idx + 1 else None
    return team, score


def parse_live_scoreboard_html(html: str, gender: str, now: datetime) -> Scoreboard:
    """
    Parse the live page: each away-logo row plus the row after it is one game.

    Women's rows are laid out logo | team | score, men's logo | blank | team | score.
    """
    soup = BeautifulSoup(html, "html.parser")
    today = now.date()
    games: List[ScoreboardGame] = []

    for img in soup.select('img[alt*="away logo"]'):
        away_row = img.find_parent("tr")
        home_row = away_row.find_next_sibling("tr") if away_row else None
        if away_row is None or home_row is None:
            continue

        team_idx = 1 if gender == "women" else 2
        away, away_score = _live_cells(away_row, team_idx)
        if not away:
            team_idx = 2 if team_idx == 1 else 1
            away, away_score = _live_cells(away_row, team_idx)
        home, home_score = _live_cells(home_row, team_idx)
        if not away or not home:
            continue

        status_el = away_row.select_one(".gamestatus")
        status_text = _clean(status_el.get_text(" ")) if status_el else ""

        conference, exhibition = NON_CONFERENCE, False
        group = img.find_parent(class_="confGroup")
        heading = group.find("h2") if group else None
        if heading is not None:
            conference, exhibition = _conference_from_label(_clean(heading.get_text(" ")))

        games.append(_game(away, home, away_score, home_score, status_text, today, conference, exhibition))

    logger.info("Live scoreboard (%s): %d games", gender, len(games))
    return Scoreboard(date=today, gender=gender, games=games, last_updated=now)


@dataclass
class ScoreboardService:
    """Fetches CHN listing pages and turns them into Scoreboard models."""

    fetcher: HttpFetcher
    config: AppConfig
    now: Optional[Callable[[], datetime]] = field(default=None, repr=False)

    def _now_local(self) -> datetime:
        if self.now is not None:
            return self.now()
        return datetime.now(tz=tz.gettz(self.config.tz))

    def scrape_scoreboard(self, day: date, gender: str = "men") -> Scoreboard:
        """Games for one date from the date-sectioned schedule listing."""
        html = self.fetcher.fetch(self.config.scoreboard_url(gender))
        return parse_scoreboard_html(html, day, gender, self._now_local())

    def scrape_live_scoreboard(self, gender: str = "men") -> Scoreboard:
        """Today's games from the live scoreboard page."""
        html = self.fetcher.fetch(self.config.live_scoreboard_url(gender))
        return parse_live_scoreboard_html(html, gender, self._now_local())
