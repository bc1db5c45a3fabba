# college_hockey/handlers/api_handler.py
"""
Handler/controller that turns service results into JSON payloads.

Every public method returns (payload, status) so the Flask routes stay thin:
they parse query params, call one method and jsonify the result.

Successful results are cached in the shared TTLCache; failures never are.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..cache import TTLCache
from ..config import AppConfig
from ..errors import FetchError, PollDataMissingError, TeamNotFoundError
from ..http_client import SportradarClient
from ..models import Poll, Scoreboard, ScheduleGame, TeamSchedule
from ..seasons import season_for_date
from ..services import PollService, ScheduleService, ScoreboardService
from ..team_directory import GENDERS, TeamDirectory, load_active_programs, load_schedule_urls

logger = logging.getLogger(__name__)

Response = Tuple[Dict[str, Any], int]

# Vendor "market" names that differ from the active program list.
VENDOR_MARKET_NAMES = {
    "Massachusetts": "UMass",
    "Connecticut": "UConn",
    "UMass-Lowell": "UMass Lowell",
    "Massachusetts-Lowell": "UMass Lowell",
    "Long Island University": "LIU",
    "Minnesota-Duluth": "Minnesota Duluth",
    "Miami": "Miami (OH)",
    "Miami (Ohio)": "Miami (OH)",
    "Saint Cloud State": "St. Cloud State",
    "St Cloud State": "St. Cloud State",
    "Saint Lawrence": "St. Lawrence",
    "Saint Thomas": "St. Thomas",
    "St Thomas": "St. Thomas",
    "Army": "Army West Point",
}

RATE_LIMITED = "Rate limit exceeded. Please try again in a few minutes."


# -------------------------
# Serializers
# -------------------------

def game_to_dict(g: ScheduleGame) -> Dict[str, Any]:
    """Serialize a ScheduleGame into JSON-safe primitives."""
    b = g.broadcast_info
    return {
        "id": g.id,
        "date": g.date.isoformat(),
        "opponent": g.opponent,
        "isHome": g.is_home,
        "venue": g.venue,
        "city": g.city,
        "state": g.state,
        "time": g.time,
        "conference": g.conference,
        "exhibition": g.exhibition,
        "status": g.status,
        "result": {"score": g.result.score, "won": g.result.won} if g.result else None,
        "broadcastInfo": {
            "network": b.network,
            "watchLink": b.watch_link,
            "statsLink": b.stats_link,
            "ticketsLink": b.tickets_link,
        } if b else None,
    }


def schedule_to_dict(s: TeamSchedule) -> Dict[str, Any]:
    """Serialize a TeamSchedule, games included."""
    r = s.record
    return {
        "teamName": s.team_name,
        "season": s.season,
        "record": {
            "overall": r.overall,
            "conference": r.conference,
            "home": r.home,
            "away": r.away,
            "neutral": r.neutral,
        },
        "games": [game_to_dict(g) for g in s.games],
        "lastUpdated": s.last_updated.isoformat(),
    }


def scoreboard_to_dict(sb: Scoreboard) -> Dict[str, Any]:
    games: List[Dict[str, Any]] = []
    for g in sb.games:
        games.append(
            {
                "id": g.id,
                "date": g.date.isoformat(),
                "homeTeam": g.home_team,
                "awayTeam": g.away_team,
                "conference": g.conference,
                "exhibition": g.exhibition,
                "status": g.status,
                "time": g.time,
                "result": {
                    "homeScore": g.result.home_score,
                    "awayScore": g.result.away_score,
                } if g.result else None,
                "liveData": {
                    "period": g.live_data.period,
                    "timeRemaining": g.live_data.time_remaining,
                    "intermission": g.live_data.intermission,
                } if g.live_data else None,
            }
        )
    return {
        "date": sb.date.isoformat(),
        "gender": sb.gender,
        "games": games,
        "lastUpdated": sb.last_updated.isoformat(),
    }


def poll_to_dict(p: Poll) -> Dict[str, Any]:
    return {
        "date": p.date,
        "teams": [
            {
                "rank": t.rank,
                "team": t.team,
                "firstPlaceVotes": t.first_place_votes,
                "record": t.record,
                "points": t.points,
                "lastWeekRank": t.last_week_rank,
            }
            for t in p.teams
        ],
        "othersReceivingVotes": p.others_receiving_votes,
    }


def _vendor_error(exc: requests.RequestException, fallback: str) -> Response:
    """Map a vendor API failure to a payload, keeping its HTTP status."""
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None) or 500
    api_error = None
    if response is not None:
        try:
            api_error = response.json()
        except ValueError:
            api_error = None
    return (
        {
            "error": RATE_LIMITED if status == 429 else fallback,
            "details": str(exc),
            "apiError": api_error,
        },
        status,
    )


@dataclass
class ApiHandler:
    """Orchestrates the scraping services, the cache and the vendor client."""

    schedules: ScheduleService
    scoreboards: ScoreboardService
    polls: PollService
    directory: TeamDirectory
    cache: TTLCache
    cfg: AppConfig
    vendor: Optional[SportradarClient] = None

    @staticmethod
    def is_valid_gender(gender: Optional[str]) -> bool:
        return gender in GENDERS

    def _no_season_payload(self, team: str) -> Dict[str, Any]:
        season = self.schedules.current_target()
        return {
            "error": (
                f"No {season} schedule found for {team}. The website may only show an older "
                "season's schedule; the new schedule may not be published yet."
            ),
            "isOffseason": True,
            "expectedSeason": season,
        }

    # -------------------------
    # Schedules
    # -------------------------

    def schedule(self, team: str, gender: str = "men") -> Response:
        """CHN schedule for a Team Directory entry."""
        key = f"chn-schedule:{gender}:{team.casefold()}"
        try:
            schedule = self.cache.get_or_set(
                key,
                ttl_seconds=self.cfg.chn_schedule_cache_ttl_seconds,
                loader=lambda: self.schedules.scrape_team_schedule(team, gender),
            )
        except TeamNotFoundError as exc:
            return {"error": str(exc)}, 404
        except FetchError as exc:
            logger.error("Schedule fetch failed for %s: %s", team, exc)
            return {"error": f"College Hockey News is unavailable right now. {exc}"}, 500

        if schedule is None:
            return self._no_season_payload(team), 500
        return schedule_to_dict(schedule), 200

    def scrape_team_site(self, team: str) -> Response:
        """Athletics-site schedule for a team listed in the URL map."""
        url = load_schedule_urls(self.cfg.schedule_urls_path).get(team)
        if not url:
            season = self.schedules.current_target()
            return (
                {
                    "error": (
                        f"Schedule not available for {team}. The {season} season schedule may "
                        "not be published yet, or the team may not be supported."
                    )
                },
                404,
            )

        payload, status = self.scrape_url(url, team)
        if status == 500 and payload.get("isOffseason"):
            return payload, 404
        return payload, status

    def scrape_url(self, url: str, team_name: Optional[str] = None) -> Response:
        """Schedule from an arbitrary page URL."""
        key = f"site-schedule:{url}:{team_name or 'custom'}"
        try:
            schedule = self.cache.get_or_set(
                key,
                ttl_seconds=self.cfg.schedule_cache_ttl_seconds,
                loader=lambda: self.schedules.scrape_schedule(url, team_name),
            )
        except FetchError as exc:
            logger.error("Schedule fetch failed for %s: %s", url, exc)
            return {"error": "Failed to scrape schedule data", "details": str(exc)}, 500

        if schedule is None:
            return self._no_season_payload(team_name or url), 500
        return schedule_to_dict(schedule), 200

    # -------------------------
    # Scoreboard / polls
    # -------------------------

    def scoreboard(self, day: Optional[date], gender: str = "men") -> Response:
        """A day's slate, or the live page when no day is given."""
        key = f"scoreboard:{gender}:{day.isoformat() if day else 'live'}"

        def loader() -> Scoreboard:
            if day is None:
                return self.scoreboards.scrape_live_scoreboard(gender)
            return self.scoreboards.scrape_scoreboard(day, gender)

        try:
            sb = self.cache.get_or_set(key, ttl_seconds=self.cfg.scoreboard_cache_ttl_seconds, loader=loader)
        except FetchError as exc:
            logger.error("Scoreboard fetch failed: %s", exc)
            return {"error": "Failed to fetch scoreboard data", "details": str(exc)}, 500
        return scoreboard_to_dict(sb), 200

    def poll(self, gender: str) -> Response:
        try:
            poll = self.cache.get_or_set(
                f"poll:{gender}",
                ttl_seconds=self.cfg.poll_cache_ttl_seconds,
                loader=lambda: self.polls.scrape_poll(gender),
            )
        except (FetchError, PollDataMissingError) as exc:
            logger.error("Poll scrape failed (%s): %s", gender, exc)
            return {"error": "Failed to fetch poll data", "details": str(exc)}, 500
        return poll_to_dict(poll), 200

    # -------------------------
    # Teams
    # -------------------------

    def teams_list(self, gender: str = "men") -> Response:
        payload = self.cache.get_or_set(
            f"teams-list:{gender}",
            ttl_seconds=self.cfg.teams_cache_ttl_seconds,
            loader=lambda: self.directory.teams_list(gender),
        )
        return payload, 200

    def vendor_teams(self, today: date) -> Response:
        """Vendor team list filtered to active programs, sorted by market."""
        if self.vendor is None:
            return {"error": "API key not configured"}, 500

        try:
            data = self.cache.get_or_set(
                "vendor-teams",
                ttl_seconds=self.cfg.teams_cache_ttl_seconds,
                loader=self.vendor.league_teams,
            )
        except requests.RequestException as exc:
            logger.error("Vendor teams request failed: %s", exc)
            return _vendor_error(exc, "Failed to fetch teams")

        teams = data.get("teams") if isinstance(data, dict) else None
        if not isinstance(teams, list):
            return {"error": "Invalid API response format"}, 500

        active = load_active_programs(self.cfg.programs_path)
        kept = [
            t for t in teams
            if isinstance(t, dict) and VENDOR_MARKET_NAMES.get(t.get("market"), t.get("market")) in active
        ]
        kept.sort(key=lambda t: str(t.get("market", "")).casefold())

        return {"season": self.cfg.target_season or season_for_date(today), "teams": kept}, 200

    def team_profile(self, team_id: str) -> Response:
        if self.vendor is None:
            return {"error": "API key not configured"}, 500

        try:
            profile = self.cache.get_or_set(
                f"vendor-profile:{team_id}",
                ttl_seconds=self.cfg.profile_cache_ttl_seconds,
                loader=lambda: self.vendor.team_profile(team_id),
            )
        except requests.RequestException as exc:
            logger.error("Vendor profile request failed for %s: %s", team_id, exc)
            return _vendor_error(exc, "Failed to fetch team profile")
        return profile, 200
