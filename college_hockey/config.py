# college_hockey/config.py
"""
Configuration for the college hockey scraping service.

This module centralizes all tunable settings (timezone, upstream site URLs,
vendor API credentials, fetch pacing, static data paths and cache TTLs).
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional


DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable, returning default on missing/invalid values."""
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read a string environment variable; blank values count as unset."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Notes:
      - target_season is normally None so the season is computed from today's
        date on every scrape; set TARGET_SEASON (e.g. "2025-26") to pin it.
      - sportradar_api_key is optional; vendor routes answer 500 without it.
    """

    # Core settings
    tz: str = os.getenv("TZ", "America/New_York")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    target_season: Optional[str] = _env_str("TARGET_SEASON")

    # Upstream sites
    chn_base_url: str = os.getenv("CHN_BASE_URL", "https://www.collegehockeynews.com")
    uscho_base_url: str = os.getenv("USCHO_BASE_URL", "https://www.uscho.com")
    sportradar_api_base: str = os.getenv(
        "SPORTRADAR_API_BASE", "https://api.sportradar.com/ncaamh/trial/v3/en"
    )
    sportradar_api_key: Optional[str] = _env_str("SPORTRADAR_API_KEY")

    # Fetch pacing (seconds between request strategies)
    fetch_retry_pause_seconds: float = _env_float("FETCH_RETRY_PAUSE_SECONDS", 1.0)

    # Static reference data
    schedule_urls_path: str = os.getenv("SCHEDULE_URLS_PATH", str(DATA_DIR / "program_schedule_sites.csv"))
    programs_path: str = os.getenv("PROGRAMS_PATH", str(DATA_DIR / "list_of_programs.txt"))

    # Cache controls
    schedule_cache_ttl_seconds: int = _env_int("SCHEDULE_CACHE_TTL_SECONDS", 60 * 60)
    chn_schedule_cache_ttl_seconds: int = _env_int("CHN_SCHEDULE_CACHE_TTL_SECONDS", 10 * 60)
    scoreboard_cache_ttl_seconds: int = _env_int("SCOREBOARD_CACHE_TTL_SECONDS", 60)
    poll_cache_ttl_seconds: int = _env_int("POLL_CACHE_TTL_SECONDS", 30 * 60)
    teams_cache_ttl_seconds: int = _env_int("TEAMS_CACHE_TTL_SECONDS", 60 * 60)
    profile_cache_ttl_seconds: int = _env_int("PROFILE_CACHE_TTL_SECONDS", 10 * 60)

    def scoreboard_url(self, gender: str) -> str:
        """Return the CHN date-sectioned schedule listing for a gender."""
        if gender == "women":
            return f"{self.chn_base_url}/women/schedule.php"
        return f"{self.chn_base_url}/schedules/"

    def live_scoreboard_url(self, gender: str) -> str:
        """Return the CHN live scoreboard page for a gender."""
        if gender == "women":
            return f"{self.chn_base_url}/women/scoreboard.php"
        return f"{self.chn_base_url}/schedules/scoreboard.php"

    def poll_url(self, gender: str) -> str:
        """Return the USCHO Division I poll page for a gender."""
        if gender == "women":
            return f"{self.uscho_base_url}/rankings/d-i-womens-poll"
        return f"{self.uscho_base_url}/rankings/d-i-mens-poll"
