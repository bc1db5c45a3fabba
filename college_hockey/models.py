# college_hockey/models.py
"""
Domain models for schedules, scoreboards and polls.

Everything here is built fresh per request from scraped HTML and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence

OFFSEASON = "offseason"

SCHEDULED = "scheduled"
COMPLETED = "completed"
POSTPONED = "postponed"
CANCELLED = "cancelled"
IN_PROGRESS = "in-progress"

NEUTRAL_SITE = "Neutral Site"


@dataclass(frozen=True)
class GameResult:
    """Final score from the subject team's point of view, e.g. "4-2"."""
    score: str
    won: bool


@dataclass(frozen=True)
class BroadcastInfo:
    """Optional broadcast network and outbound links for a game."""
    network: Optional[str] = None
    watch_link: Optional[str] = None
    stats_link: Optional[str] = None
    tickets_link: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.network or self.watch_link or self.stats_link or self.tickets_link)


@dataclass(frozen=True)
class ScheduleGame:
    """A normalized game on one team's schedule."""
    id: str
    date: date
    opponent: str
    is_home: bool
    conference: bool = False
    exhibition: bool = False
    status: str = SCHEDULED
    time: Optional[str] = None
    venue: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    result: Optional[GameResult] = None
    broadcast_info: Optional[BroadcastInfo] = None


@dataclass(frozen=True)
class Record:
    """Win-loss-tie strings per split."""
    overall: str = "0-0-0"
    conference: str = "0-0-0"
    home: str = "0-0-0"
    away: str = "0-0-0"
    neutral: str = "0-0-0"


@dataclass(frozen=True)
class TeamSchedule:
    """A team's season schedule; season is "YYYY-YY" or the OFFSEASON sentinel."""
    team_name: str
    season: str
    record: Record
    games: Sequence[ScheduleGame]
    last_updated: datetime

    @property
    def is_offseason(self) -> bool:
        return self.season == OFFSEASON


@dataclass(frozen=True)
class ScoreboardResult:
    home_score: int
    away_score: int


@dataclass(frozen=True)
class LiveData:
    """Period/clock for an in-progress game, e.g. period "2nd", time_remaining "12:34"."""
    period: str
    time_remaining: Optional[str] = None
    intermission: bool = False


@dataclass(frozen=True)
class ScoreboardGame:
    """One game on a day's slate."""
    id: str
    date: date
    home_team: str
    away_team: str
    conference: str = "Non-Conference"
    exhibition: bool = False
    status: str = SCHEDULED
    time: Optional[str] = None
    result: Optional[ScoreboardResult] = None
    live_data: Optional[LiveData] = None


@dataclass(frozen=True)
class Scoreboard:
    date: date
    gender: str
    games: Sequence[ScoreboardGame]
    last_updated: datetime


@dataclass(frozen=True)
class PollTeam:
    rank: int
    team: str
    first_place_votes: int
    record: str
    points: int
    last_week_rank: Optional[int]


@dataclass(frozen=True)
class Poll:
    date: str
    teams: Sequence[PollTeam]
    others_receiving_votes: str


@dataclass(frozen=True)
class TeamInfo:
    """A Team Directory entry: display name, CHN schedule URL and conference."""
    name: str
    url: str
    conference: str
    gender: str


@dataclass(frozen=True)
class FormatDetection:
    """Chosen parser and how sure the detector is that it fits the page."""
    format_id: str
    confidence: float
    reason: str = field(default="", compare=False)
