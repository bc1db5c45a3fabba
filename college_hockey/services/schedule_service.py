# college_hockey/services/schedule_service.py
"""
Team schedule scraping pipeline.

Responsibilities:
  - fetch the schedule page (HttpFetcher)
  - detect the site format and run its parser
  - apply the acceptance policy and the fallback parser chain
  - dedupe the accepted schedule's games

Acceptance policy:
  - a result is accepted when its season is valid (target season or later)
    and it has at least one game
  - a valid-season result with zero games is accepted as a confirmed-empty
    schedule only when detection confidence is at least FALLBACK_THRESHOLD
  - otherwise, if confidence is below the threshold, the remaining parsers
    run in FALLBACK_ORDER and the first one passing the strict test wins
  - when no fallback passes, a valid-season empty primary result is still
    returned as confirmed-empty
  - nothing passing returns None ("could not confirm current-season data")
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from bs4 import BeautifulSoup
from dateutil import tz

from ..conferences import ConferenceMap
from ..detector import FALLBACK_THRESHOLD, detect_format
from ..errors import TeamNotFoundError
from ..http_client import HttpFetcher
from ..models import ScheduleGame, TeamSchedule
from ..parsers import FALLBACK_ORDER, ParseContext, get_parser
from ..parsers.common import ROW_ERRORS
from ..seasons import is_valid_season, season_for_date
from ..team_directory import TeamDirectory

logger = logging.getLogger(__name__)

T = TypeVar("T")

TEAMS_LIST_HINT = "Use /api/teams/list to see available teams."


def first_accepted(
    candidates: Iterable[Tuple[str, Callable[[], Optional[T]]]],
    accept: Callable[[T], bool],
) -> Optional[T]:
    """
    Evaluate candidates in order and return the first result accept() passes.

    Candidates are (name, thunk) pairs, evaluated lazily so later ones never
    run once an earlier one is accepted.
    """
    for name, run in candidates:
        result = run()
        if result is not None and accept(result):
            logger.info("Accepted result from %s", name)
            return result
        logger.info("Rejected result from %s", name)
    return None


def dedupe_games(games: Iterable[ScheduleGame]) -> List[ScheduleGame]:
    """Drop games repeating an earlier (date, opponent) pair; first occurrence wins."""
    seen = set()
    out: List[ScheduleGame] = []
    for g in games:
        key = (g.date, re.sub(r"\s+", "", g.opponent.lower()))
        if key in seen:
            continue
        seen.add(key)
        out.append(g)
    return out


def has_current_games(schedule: TeamSchedule, target_season: str) -> bool:
    """Strict test: valid current-or-later season and at least one game."""
    return is_valid_season(schedule.season, target_season) and len(schedule.games) > 0


@dataclass
class ScheduleService:
    """Scrapes team schedules from athletics sites and College Hockey News."""

    fetcher: HttpFetcher
    directory: TeamDirectory
    tz_name: str = "America/New_York"
    target_season: Optional[str] = None
    now: Optional[Callable[[], datetime]] = field(default=None, repr=False)

    @property
    def app_tz(self):
        """Return the configured timezone object used for "today"."""
        return tz.gettz(self.tz_name)

    def _now_local(self) -> datetime:
        if self.now is not None:
            return self.now()
        return datetime.now(tz=self.app_tz)

    def season_target(self, today: date) -> str:
        """The season scrapes must confirm: the configured override, else today's season."""
        return self.target_season or season_for_date(today)

    def current_target(self) -> str:
        """season_target() for today in the app timezone."""
        return self.season_target(self._now_local().date())

    def _run_parser(self, format_id: str, soup: BeautifulSoup, ctx: ParseContext) -> Optional[TeamSchedule]:
        try:
            schedule = get_parser(format_id)(soup, ctx)
        except ROW_ERRORS as exc:
            logger.warning("%s parser failed for %s: %s", format_id, ctx.team_name, exc)
            return None
        logger.info(
            "%s parser: season %s, %d games for %s",
            format_id, schedule.season, len(schedule.games), ctx.team_name,
        )
        return schedule

    def parse_document(
        self,
        html: str,
        url: str,
        team_name: Optional[str] = None,
        gender: str = "men",
    ) -> Optional[TeamSchedule]:
        """
        Run detection, the detected parser and, if needed, the fallback chain.

        Returns the accepted schedule with deduplicated games, or None.
        """
        soup = BeautifulSoup(html, "html.parser")
        now = self._now_local()
        target = self.season_target(now.date())
        ctx = ParseContext(
            team_name=team_name or "Unknown Team",
            target_season=target,
            conferences=ConferenceMap.from_entries(self.directory.entries(gender)),
            now=now,
        )

        detection = detect_format(url, team_name, soup)
        logger.info(
            "Detected format for %s: %s (confidence %.1f, %s)",
            ctx.team_name, detection.format_id, detection.confidence, detection.reason,
        )

        confident = detection.confidence >= FALLBACK_THRESHOLD

        def accept_primary(s: TeamSchedule) -> bool:
            if has_current_games(s, target):
                return True
            if confident and is_valid_season(s.season, target):
                logger.info("%s: confirmed empty %s schedule", ctx.team_name, s.season)
                return True
            return False

        primary_schedule = self._run_parser(detection.format_id, soup, ctx)
        schedule = first_accepted([(detection.format_id, lambda: primary_schedule)], accept_primary)

        if schedule is None and not confident:
            logger.info("Primary format failed for %s, trying fallback parsers", ctx.team_name)
            primary = get_parser(detection.format_id)
            fallbacks = [
                (fid, lambda fid=fid: self._run_parser(fid, soup, ctx))
                for fid in FALLBACK_ORDER
                if get_parser(fid) is not primary
            ]
            schedule = first_accepted(fallbacks, lambda s: has_current_games(s, target))

            if schedule is None and primary_schedule is not None and is_valid_season(primary_schedule.season, target):
                logger.info("%s: no fallback found games, keeping empty %s schedule", ctx.team_name, target)
                schedule = primary_schedule

        if schedule is None:
            logger.warning("No current-season (%s) schedule found for %s at %s", target, ctx.team_name, url)
            return None

        return dataclasses.replace(schedule, games=dedupe_games(schedule.games))

    def scrape_schedule(self, url: str, team_name: Optional[str] = None, gender: str = "men") -> Optional[TeamSchedule]:
        """
        Fetch and parse a schedule page.

        Raises:
            FetchError when every request strategy fails.
        """
        html = self.fetcher.fetch(url)
        return self.parse_document(html, url, team_name, gender)

    def scrape_team_schedule(self, team_name: str, gender: str = "men") -> Optional[TeamSchedule]:
        """
        Scrape a team's College Hockey News schedule via the Team Directory.

        Raises:
            TeamNotFoundError when the team is not in the directory.
            FetchError when every request strategy fails.
        """
        info = self.directory.lookup(team_name, gender)
        if info is None:
            raise TeamNotFoundError(team_name, TEAMS_LIST_HINT)
        return self.scrape_schedule(info.url, info.name, gender)
