# college_hockey/conferences.py
"""
Team -> conference classification with name-variant reconciliation.

Schedule pages spell opponents many ways ("UMass" / "Massachusetts",
"St. Cloud State" / "Saint Cloud State", "Minnesota-Duluth" / "Minnesota Duluth").
Names are folded to a canonical key before lookup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from .models import TeamInfo

# Not a conference: two independents meeting is not a league game.
INDEPENDENT = "Independent"

# Folded spelling -> folded canonical spelling
NAME_VARIANTS: Mapping[str, str] = {
    "umass": "massachusetts",
    "umass amherst": "massachusetts",
    "massachusetts amherst": "massachusetts",
    "umass lowell": "mass lowell",
    "massachusetts lowell": "mass lowell",
    "uml": "mass lowell",
    "uconn": "connecticut",
    "miami oh": "miami",
    "miami ohio": "miami",
    "miami university": "miami",
    "umd": "minnesota duluth",
    "nebraska omaha": "omaha",
    "neb omaha": "omaha",
    "army west point": "army",
    "rochester institute of technology": "rit",
    "long island": "liu",
    "long island university": "liu",
    "union ny": "union",
    "alaska fairbanks": "alaska",
    "uaf": "alaska",
    "uaa": "alaska anchorage",
    "rpi": "rensselaer",
    "bu": "boston university",
    "bc": "boston college",
    "unh": "new hampshire",
    "uvm": "vermont",
    "lake superior": "lake superior state",
    "lssu": "lake superior state",
    "st cloud": "st cloud state",
    "scsu": "st cloud state",
    "mtu": "michigan tech",
    "nmu": "northern michigan",
    "wmu": "western michigan",
    "und": "north dakota",
    "asu": "arizona state",
    "bgsu": "bowling green",
    "st michael s": "st michaels",
}


def team_key(name: str) -> str:
    """
    Fold a team name to its canonical lookup key.

    "Saint" and "St." collapse to "st", punctuation becomes whitespace, and
    known variants map onto one spelling.
    """
    s = (name or "").casefold().replace("&amp;", "&")
    s = re.sub(r"\bsaint\b", "st", s)
    s = re.sub(r"[^a-z0-9&]+", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return NAME_VARIANTS.get(s, s)


@dataclass(frozen=True)
class ConferenceMap:
    """Read-only folded-name -> conference map."""

    by_key: Mapping[str, str]

    @classmethod
    def from_entries(cls, entries: Iterable[TeamInfo]) -> "ConferenceMap":
        """Build from Team Directory entries (aliases included)."""
        by_key: Dict[str, str] = {}
        for info in entries:
            by_key.setdefault(team_key(info.name), info.conference)
        return cls(by_key=by_key)

    def conference_of(self, name: str) -> Optional[str]:
        """Return the conference for name, or None for unknown teams."""
        return self.by_key.get(team_key(name))

    def is_conference_game(self, team: str, opponent: str) -> bool:
        """True iff both teams resolve to the same named conference."""
        mine = self.conference_of(team)
        if not mine or mine == INDEPENDENT:
            return False
        return mine == self.conference_of(opponent)
