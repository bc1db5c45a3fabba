# college_hockey/http_client.py
"""
Thin HTTP clients for scraped pages and the vendor JSON API.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Sequence

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Request profiles tried in order; some athletics sites reject requests that
# do not look like a browser, others reject the full browser header set.
REQUEST_STRATEGIES: Sequence[Dict[str, Any]] = (
    {
        "headers": {
            "User-Agent": BROWSER_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
            "DNT": "1",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "none",
            "Cache-Control": "max-age=0",
        },
        "timeout": 15,
    },
    {
        "headers": {
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
            ),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
        "timeout": 20,
    },
    {
        "headers": {
            "User-Agent": (
                "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
            ),
            "Accept": "*/*",
        },
        "timeout": 25,
    },
)


class HttpFetcher:
    """Fetches raw HTML, retrying the same URL across request strategies."""

    def __init__(
        self,
        retry_pause_seconds: float = 1.0,
        strategies: Sequence[Dict[str, Any]] = REQUEST_STRATEGIES,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Store pacing and the ordered request profiles."""
        self.retry_pause_seconds = retry_pause_seconds
        self.strategies = list(strategies)
        self._sleep = sleep

    def fetch(self, url: str) -> str:
        """
        Return the body of the first strategy that gets a 2xx response.

        Raises:
            FetchError once every strategy has failed.
        """
        last_error: Optional[Exception] = None

        for i, strategy in enumerate(self.strategies):
            try:
                r = requests.get(url, headers=strategy["headers"], timeout=strategy["timeout"])
                r.raise_for_status()
                return r.text
            except requests.RequestException as exc:
                status = getattr(getattr(exc, "response", None), "status_code", None)
                logger.warning(
                    "Request strategy %d/%d failed for %s: %s",
                    i + 1, len(self.strategies), url, status or exc,
                )
                last_error = exc

            if i < len(self.strategies) - 1 and self.retry_pause_seconds > 0:
                self._sleep(self.retry_pause_seconds)

        raise FetchError(url, f"All request strategies failed for {url}: {last_error}") from last_error


class SportradarClient:
    """A minimal client for retrieving JSON from the Sportradar NCAA hockey API."""

    def __init__(self, base_url: str, api_key: str) -> None:
        """Store the base URL and build request headers."""
        self.base_url = base_url.rstrip("/")
        self._headers = {"accept": "application/json", "x-api-key": api_key}

    def get_json(self, path: str, timeout: int = 10) -> Dict[str, Any]:
        """
        Execute a GET request to base_url + path and return parsed JSON.

        Raises:
            requests.HTTPError on non-2xx responses.
        """
        url = f"{self.base_url}{path}"
        r = requests.get(url, timeout=timeout, headers=self._headers)
        r.raise_for_status()
        return r.json()

    def league_teams(self) -> Dict[str, Any]:
        """Fetch the league-wide team list."""
        return self.get_json("/league/teams.json")

    def team_profile(self, team_id: str) -> Dict[str, Any]:
        """Fetch one team's profile payload."""
        return self.get_json(f"/teams/{team_id}/profile.json")
