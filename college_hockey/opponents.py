# college_hockey/opponents.py
"""
Opponent name cleanup and validation.

Schedule pages glue all kinds of text onto an opponent: rankings, location
strings, link labels, conference tags, exhibition markers, leftovers from
neighbouring games. Every parser funnels its raw opponent text through
normalize_opponent(), which strips that noise and then applies a validation
gate. A None result means "not an opponent", and the row is skipped.
"""

from __future__ import annotations

import re
from typing import Optional

MIN_LENGTH = 2
MAX_LENGTH = 100

_RANK_PREFIX = re.compile(r"^(?:#\s*\d+|No\.\s*\d+|\(\d+\))\s*", re.IGNORECASE)

_LINK_LABELS = re.compile(
    r"\s+(?:Box\s+Score|Recap|Gallery|Int|Gameday\s+Information|Watch|Live|Stats|Tickets|Listen|Radio|"
    r"Preview|Game\s+Notes|Schedule\s+Magnet\s+Giveaway|Magnet\s+Giveaway|Exhibition|"
    r"Event\s+details|Show\s+Event\s+Info|Season\s+opener)\b.*$",
    re.IGNORECASE,
)
_MIXED_CONTENT = re.compile(
    r"\s+(?:Ice\s+Hockey\s+Highlights|All\s+Videos|Related\s+News|Skip\s+Ad|All\s+News|Highlights|Videos)\b.*$",
    re.IGNORECASE,
)
_DATE_REFERENCE = re.compile(r"\s*\([A-Z][a-z]{2}\.?\s+\d{1,2}\).*$")
_WEEKDAY_REFERENCE = re.compile(
    r"\s+(?:Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday),.*$", re.IGNORECASE
)
# Home-arena towns that athletics sites render right after the opponent name.
_LOCATION_SUFFIX = re.compile(
    r"\s+(?:Boston|Storrs|Orono|Cambridge|Durham|Providence|Amherst|North Andover|Hamden|"
    r"Chestnut Hill|New York|Burlington|Worcester|Ann Arbor|East Lansing|Big Rapids|Tempe)\b.*$"
)
# UMass Lowell under the names sites print for it.
_LOWELL_TEAM = re.compile(r"^(.*?\b(?:UMass|Mass\.|Massachusetts)[- ]Lowell)(?:\s+Lowell\b|\s*,).*$")
_TOWN_LOWELL = re.compile(r"\s+Lowell,.*$")
_MARKERS = re.compile(r"\s*\((?:exh\.?|exhibition|ex|nc)\)", re.IGNORECASE)
_EVENT_NAMES = re.compile(r"\s*Red Hot Hockey.*$")
_BRACKETS = re.compile(r"^\s*\[|\]\s*$")
_CONFERENCE_TAG = re.compile(r"\s*(?:NCHC|HEA|ECAC|CCHA|Big Ten|B1G|Atlantic Hockey|AHA|WCHA|NEWHA)$")
_SYMBOL_SUFFIX = re.compile(r"\s*[*#%]+$")
# Trailing parentheses go, except the school qualifiers that are part of a name.
_TRAILING_PARENS = re.compile(r"\s*\((?!(?:OH|Ohio|NY|N\.Y\.)\))[^)]*\)\s*$")

_EXHIBITION = re.compile(r"\((?:exh\.?|exhibition|ex)\)|#\s*$|#(?=\s)", re.IGNORECASE)

_TEMPLATE_ARTIFACTS = re.compile(
    r"\$\{|\{\{|\}\}|\{%|%\}|<%|%>|\[object|\bundefined\b|\bnull\b|\bNaN\b|lorem ipsum|placeholder|"
    r"\bTBD\b|\bTBA\b|/",
    re.IGNORECASE,
)
_NAV_TEXT = re.compile(
    r"Men's Ice Hockey|Women's Ice Hockey|Highlights|Videos|\bNews\b|Tickets|Subscribe|Sponsor|"
    r"Presented by|Click|Buy Now|Schedule|Roster|Promotion|Giveaway|Skip to|Menu|Log ?in|Cookie",
    re.IGNORECASE,
)
_REPEATED_PHRASE = re.compile(r"\b(\w[\w.'&-]*(?:\s+\w[\w.'&-]*){0,4})\s+\1\b", re.IGNORECASE)


def has_exhibition_marker(text: str) -> bool:
    """True for "(Exhibition)", "(exh.)", "(ex)" or a "#" flag next to the opponent."""
    return bool(_EXHIBITION.search(text or ""))


def is_valid_opponent(name: str) -> bool:
    """Validation gate for a cleaned opponent name."""
    if not name or not (MIN_LENGTH <= len(name) <= MAX_LENGTH):
        return False
    if not re.search(r"[A-Za-z]", name):
        return False
    if _TEMPLATE_ARTIFACTS.search(name) or _NAV_TEXT.search(name):
        return False
    if _REPEATED_PHRASE.search(name):
        return False
    return True


def normalize_opponent(raw: str) -> Optional[str]:
    """
    Strip scraped noise from raw opponent text.

    Returns the cleaned name, or None when what is left does not pass
    is_valid_opponent().
    """
    s = re.sub(r"\s+", " ", raw or "").strip()
    s = _RANK_PREFIX.sub("", s)

    s = _LINK_LABELS.sub("", s)
    s = _MIXED_CONTENT.sub("", s)
    s = _DATE_REFERENCE.sub("", s)
    s = _WEEKDAY_REFERENCE.sub("", s)
    s = _LOCATION_SUFFIX.sub("", s)

    # "UMass Lowell Lowell, Mass." keeps the team name; "Lowell, Mass." after any other name is a town.
    team = _LOWELL_TEAM.match(s)
    s = team.group(1) if team else _TOWN_LOWELL.sub("", s)

    s = _MARKERS.sub("", s)
    s = _EVENT_NAMES.sub("", s)
    s = _BRACKETS.sub("", s)
    s = _CONFERENCE_TAG.sub("", s)
    s = _SYMBOL_SUFFIX.sub("", s)
    s = _TRAILING_PARENS.sub("", s)
    s = re.sub(r"\s+", " ", s).strip(" ,;:-")

    return s if is_valid_opponent(s) else None
