# college_hockey/errors.py
"""Structured errors raised by the scraping pipeline.

Parsers never raise these for a bad row; they skip it. Only request-level
failures (unknown team, exhausted fetch strategies, unrecoverable poll data)
propagate to the handlers.
"""

from __future__ import annotations

from typing import Any, Optional


class ScrapeError(Exception):
    """Base class for scraping related issues."""

    def __init__(self, message: str, *, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class FetchError(ScrapeError):
    """Raised when every request strategy for a URL has failed."""

    def __init__(self, url: str, message: str):
        super().__init__(message, context={"url": url})
        self.url = url


class TeamNotFoundError(ScrapeError):
    """Raised when a team name is absent from the directory or URL map."""

    def __init__(self, team_name: str, hint: str):
        super().__init__(f'Team "{team_name}" not found. {hint}', context={"team": team_name})
        self.team_name = team_name
        self.hint = hint


class PollDataMissingError(ScrapeError):
    """Raised when a poll page carries no recoverable team rows."""
