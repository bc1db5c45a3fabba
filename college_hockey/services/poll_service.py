# college_hockey/services/poll_service.py
"""
USCHO Division I poll.

The poll page embeds its data as an entity-escaped JSON blob:

    ...&quot;data&quot;:[{&quot;rnk&quot;:1,&quot;shortname&quot;:&quot;Denver&quot;,...},...]...

The array is located, unescaped, and split into balanced {...} objects that
are decoded one by one, so one broken team object costs one row instead of
the whole poll.
"""

from __future__ import annotations

import html as html_lib
import json
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from dateutil import tz

from ..config import AppConfig
from ..errors import PollDataMissingError
from ..http_client import HttpFetcher
from ..models import Poll, PollTeam

logger = logging.getLogger(__name__)

_DATA_ARRAY = re.compile(r"&quot;data&quot;:\s*\[")
_OTHERS = re.compile(r"&quot;other&quot;:\s*&quot;(.*?)&quot;", re.DOTALL)


def safe_int(v, default=0) -> int:
    """Convert a value to int safely; return default on failures."""
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _array_body(raw: str, start: int) -> str:
    """Text between the opening "[" (just before start) and its matching "]"."""
    depth = 1
    for i in range(start, len(raw)):
        if raw[i] == "[":
            depth += 1
        elif raw[i] == "]":
            depth -= 1
            if depth == 0:
                return raw[start:i]
    return raw[start:]


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index of the "}" closing the object opened at start, or None if it never closes."""
    depth = 0
    in_string = escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def iter_objects(text: str) -> Iterator[Dict[str, Any]]:
    """
    Yield each decodable top-level {...} object in text.

    A broken object is logged and skipped; scanning resumes at the next "{"
    after its opening brace.
    """
    i = 0
    while True:
        start = text.find("{", i)
        if start == -1:
            return
        end = _balanced_end(text, start)
        if end is None:
            logger.warning("Unbalanced poll object at offset %d; skipping", start)
            i = start + 1
            continue
        try:
            obj = json.loads(text[start:end + 1])
        except ValueError as exc:
            logger.warning("Failed to parse poll object at offset %d: %s", start, exc)
            i = start + 1
            continue
        if isinstance(obj, dict):
            yield obj
        i = end + 1


def _last_week_rank(v) -> Optional[int]:
    if v in (None, "", "NR", "nr"):
        return None
    rank = safe_int(v, 0)
    return rank or None


def _poll_team(obj: Dict[str, Any]) -> Optional[PollTeam]:
    rank = safe_int(obj.get("rnk"), 0)
    name = obj.get("shortname")
    if rank <= 0 or not isinstance(name, str) or not name.strip():
        return None
    return PollTeam(
        rank=rank,
        team=html_lib.unescape(name.strip()),
        first_place_votes=max(safe_int(obj.get("first_pv"), 0), 0),
        record=str(obj.get("record") or ""),
        points=max(safe_int(obj.get("pts"), 0), 0),
        last_week_rank=_last_week_rank(obj.get("prev_rnk")),
    )


def parse_poll_html(raw_html: str, today: date) -> Poll:
    """
    Extract the poll from page HTML.

    Raises:
        PollDataMissingError when the data array is absent or no team decodes.
    """
    m = _DATA_ARRAY.search(raw_html)
    if not m:
        raise PollDataMissingError("Could not find poll data in page HTML")

    decoded = html_lib.unescape(_array_body(raw_html, m.end()))

    teams: List[PollTeam] = []
    poll_date: Optional[str] = None
    for obj in iter_objects(decoded):
        team = _poll_team(obj)
        if team is None:
            logger.warning("Poll object without rank/team skipped: %s", sorted(obj)[:6])
            continue
        if poll_date is None and obj.get("PollDate"):
            poll_date = str(obj["PollDate"])
        teams.append(team)

    if not teams:
        raise PollDataMissingError("No teams found in poll data")

    others = _OTHERS.search(raw_html)
    return Poll(
        date=poll_date or f"{today:%B} {today.day}, {today.year}",
        teams=teams,
        others_receiving_votes=html_lib.unescape(others.group(1)).strip() if others else "",
    )


@dataclass
class PollService:
    """Fetches and parses the USCHO poll for a gender."""

    fetcher: HttpFetcher
    config: AppConfig
    today: Optional[Callable[[], date]] = field(default=None, repr=False)

    def _today(self) -> date:
        if self.today is not None:
            return self.today()
        return datetime.now(tz=tz.gettz(self.config.tz)).date()

    def scrape_poll(self, gender: str) -> Poll:
        """
        Raises:
            FetchError when the page cannot be fetched.
            PollDataMissingError when the page carries no poll rows.
        """
        raw_html = self.fetcher.fetch(self.config.poll_url(gender))
        poll = parse_poll_html(raw_html, self._today())
        logger.info("Parsed %s poll: %d teams", gender, len(poll.teams))
        return poll
