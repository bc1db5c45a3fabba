# college_hockey/team_directory.py
"""
Team Directory: static team name -> College Hockey News schedule URL + conference.

Several display names can point at one CHN page ("Army" / "Army West Point");
the first name listed for a page is its canonical name.

Also loads the two static reference files (athletics-site schedule URL map and
active program list) once per process into read-only mappings.
"""

from __future__ import annotations

import csv
import logging
from collections import defaultdict
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .models import TeamInfo

logger = logging.getLogger(__name__)

GENDERS = ("men", "women")

# (display name, CHN "Slug/id", conference)
MEN_TEAMS: Sequence[Tuple[str, str, str]] = (
    # Atlantic Hockey
    ("Air Force", "Air-Force/1", "Atlantic Hockey"),
    ("Army", "Army/6", "Atlantic Hockey"),
    ("Army West Point", "Army/6", "Atlantic Hockey"),
    ("Bentley", "Bentley/8", "Atlantic Hockey"),
    ("Canisius", "Canisius/13", "Atlantic Hockey"),
    ("Holy Cross", "Holy-Cross/23", "Atlantic Hockey"),
    ("Mercyhurst", "Mercyhurst/28", "Atlantic Hockey"),
    ("Niagara", "Niagara/39", "Atlantic Hockey"),
    ("RIT", "RIT/49", "Atlantic Hockey"),
    ("Rochester Institute of Technology", "RIT/49", "Atlantic Hockey"),
    ("Robert Morris", "Robert-Morris/50", "Atlantic Hockey"),
    ("Sacred Heart", "Sacred-Heart/51", "Atlantic Hockey"),
    # Big Ten
    ("Michigan", "Michigan/31", "Big Ten"),
    ("Michigan State", "Michigan-State/32", "Big Ten"),
    ("Minnesota", "Minnesota/34", "Big Ten"),
    ("Notre Dame", "Notre-Dame/43", "Big Ten"),
    ("Ohio State", "Ohio-State/44", "Big Ten"),
    ("Penn State", "Penn-State/60", "Big Ten"),
    ("Wisconsin", "Wisconsin/58", "Big Ten"),
    # CCHA
    ("Augustana", "Augustana/64", "CCHA"),
    ("Bemidji State", "Bemidji-State/7", "CCHA"),
    ("Bowling Green", "Bowling-Green/11", "CCHA"),
    ("Ferris State", "Ferris-State/21", "CCHA"),
    ("Lake Superior State", "Lake-Superior/24", "CCHA"),
    ("Michigan Tech", "Michigan-Tech/33", "CCHA"),
    ("Minnesota State", "Minnesota-State/35", "CCHA"),
    ("Northern Michigan", "Northern-Michigan/42", "CCHA"),
    ("St. Thomas", "St-Thomas/63", "CCHA"),
    # ECAC
    ("Brown", "Brown/12", "ECAC"),
    ("Clarkson", "Clarkson/14", "ECAC"),
    ("Colgate", "Colgate/15", "ECAC"),
    ("Cornell", "Cornell/18", "ECAC"),
    ("Dartmouth", "Dartmouth/19", "ECAC"),
    ("Harvard", "Harvard/22", "ECAC"),
    ("Princeton", "Princeton/45", "ECAC"),
    ("Quinnipiac", "Quinnipiac/47", "ECAC"),
    ("Rensselaer", "Rensselaer/48", "ECAC"),
    ("St. Lawrence", "St-Lawrence/53", "ECAC"),
    ("Union (NY)", "Union/54", "ECAC"),
    ("Union", "Union/54", "ECAC"),
    ("Yale", "Yale/59", "ECAC"),
    # Hockey East
    ("Boston College", "Boston-College/9", "Hockey East"),
    ("Boston University", "Boston-University/10", "Hockey East"),
    ("Connecticut", "Connecticut/17", "Hockey East"),
    ("UConn", "Connecticut/17", "Hockey East"),
    ("Maine", "Maine/25", "Hockey East"),
    ("Mass.-Lowell", "Mass-Lowell/26", "Hockey East"),
    ("UMass Lowell", "Mass-Lowell/26", "Hockey East"),
    ("Massachusetts", "Massachusetts/27", "Hockey East"),
    ("UMass", "Massachusetts/27", "Hockey East"),
    ("Merrimack", "Merrimack/29", "Hockey East"),
    ("New Hampshire", "New-Hampshire/38", "Hockey East"),
    ("Northeastern", "Northeastern/41", "Hockey East"),
    ("Providence", "Providence/46", "Hockey East"),
    ("Vermont", "Vermont/55", "Hockey East"),
    # NCHC
    ("Arizona State", "Arizona-State/61", "NCHC"),
    ("Colorado College", "Colorado-College/16", "NCHC"),
    ("Denver", "Denver/20", "NCHC"),
    ("Miami", "Miami/30", "NCHC"),
    ("Miami (OH)", "Miami/30", "NCHC"),
    ("Minnesota-Duluth", "Minnesota-Duluth/36", "NCHC"),
    ("Minnesota Duluth", "Minnesota-Duluth/36", "NCHC"),
    ("Omaha", "Omaha/37", "NCHC"),
    ("North Dakota", "North-Dakota/40", "NCHC"),
    ("St. Cloud State", "St-Cloud-State/52", "NCHC"),
    ("Western Michigan", "Western-Michigan/57", "NCHC"),
    # Independents
    ("Alaska-Anchorage", "Alaska-Anchorage/3", "Independent"),
    ("Alaska Anchorage", "Alaska-Anchorage/3", "Independent"),
    ("Alaska", "Alaska/4", "Independent"),
    ("Alaska Fairbanks", "Alaska/4", "Independent"),
    ("Lindenwood", "Lindenwood/433", "Independent"),
    ("Long Island", "Long-Island/62", "Independent"),
    ("LIU", "Long-Island/62", "Independent"),
    ("Stonehill", "Stonehill/422", "Independent"),
)

WOMEN_TEAMS: Sequence[Tuple[str, str, str]] = (
    # ECAC
    ("Brown", "Brown/12", "ECAC"),
    ("Clarkson", "Clarkson/14", "ECAC"),
    ("Colgate", "Colgate/15", "ECAC"),
    ("Cornell", "Cornell/18", "ECAC"),
    ("Dartmouth", "Dartmouth/19", "ECAC"),
    ("Harvard", "Harvard/22", "ECAC"),
    ("Princeton", "Princeton/45", "ECAC"),
    ("Quinnipiac", "Quinnipiac/47", "ECAC"),
    ("Rensselaer", "Rensselaer/48", "ECAC"),
    ("St. Lawrence", "St-Lawrence/53", "ECAC"),
    ("Union", "Union/54", "ECAC"),
    ("Union (NY)", "Union/54", "ECAC"),
    ("Yale", "Yale/59", "ECAC"),
    # Hockey East
    ("Boston College", "Boston-College/9", "Hockey East"),
    ("Boston University", "Boston-University/10", "Hockey East"),
    ("Connecticut", "Connecticut/17", "Hockey East"),
    ("UConn", "Connecticut/17", "Hockey East"),
    ("Maine", "Maine/25", "Hockey East"),
    ("Holy Cross", "Holy-Cross/23", "Hockey East"),
    ("Merrimack", "Merrimack/29", "Hockey East"),
    ("New Hampshire", "New-Hampshire/38", "Hockey East"),
    ("Northeastern", "Northeastern/41", "Hockey East"),
    ("Providence", "Providence/46", "Hockey East"),
    ("Vermont", "Vermont/55", "Hockey East"),
    # WCHA
    ("Bemidji State", "Bemidji-State/7", "WCHA"),
    ("Minnesota", "Minnesota/34", "WCHA"),
    ("Minnesota State", "Minnesota-State/35", "WCHA"),
    ("Ohio State", "Ohio-State/44", "WCHA"),
    ("St. Cloud State", "St-Cloud-State/52", "WCHA"),
    ("St. Thomas", "St-Thomas/63", "WCHA"),
    ("Wisconsin", "Wisconsin/58", "WCHA"),
    # Atlantic Hockey America (women)
    ("Delaware", "Delaware/447", "AHA"),
    ("Lindenwood", "Lindenwood/433", "AHA"),
    ("Mercyhurst", "Mercyhurst/28", "AHA"),
    ("Penn State", "Penn-State/60", "AHA"),
    ("RIT", "RIT/49", "AHA"),
    ("Rochester Institute of Technology", "RIT/49", "AHA"),
    ("Robert Morris", "Robert-Morris/50", "AHA"),
    ("Syracuse", "Syracuse/423", "AHA"),
    # New England Women's Hockey Alliance
    ("Assumption", "Assumption/401", "NEWHA"),
    ("Franklin Pierce", "Franklin-Pierce/406", "NEWHA"),
    ("Long Island", "Long-Island/62", "NEWHA"),
    ("LIU", "Long-Island/62", "NEWHA"),
    ("Post", "Post/434", "NEWHA"),
    ("Sacred Heart", "Sacred-Heart/51", "NEWHA"),
    ("Saint Anselm", "Saint-Anselm/419", "NEWHA"),
    ("Saint Michael's", "Saint-Michaels/421", "NEWHA"),
    ("Stonehill", "Stonehill/422", "NEWHA"),
)


class TeamDirectory:
    """Read-only lookup of CHN team pages by display name and gender."""

    def __init__(self, chn_base_url: str = "https://www.collegehockeynews.com") -> None:
        """Materialize both gender tables into TeamInfo maps."""
        base = chn_base_url.rstrip("/")
        self._teams: Dict[str, Dict[str, TeamInfo]] = {
            "men": self._build(MEN_TEAMS, f"{base}/schedules/team", "men"),
            "women": self._build(WOMEN_TEAMS, f"{base}/women/schedules/team", "women"),
        }
        self._folded: Dict[str, Dict[str, TeamInfo]] = {
            g: {name.casefold(): info for name, info in teams.items()}
            for g, teams in self._teams.items()
        }

    @staticmethod
    def _build(rows: Sequence[Tuple[str, str, str]], prefix: str, gender: str) -> Dict[str, TeamInfo]:
        return {
            name: TeamInfo(name=name, url=f"{prefix}/{slug}", conference=conf, gender=gender)
            for name, slug, conf in rows
        }

    def lookup(self, team_name: str, gender: str = "men") -> Optional[TeamInfo]:
        """Return the entry for team_name, or None when it is not in the directory."""
        name = (team_name or "").strip()
        teams = self._teams.get(gender, {})
        if name in teams:
            return teams[name]
        return self._folded.get(gender, {}).get(name.casefold())

    def entries(self, gender: str = "men") -> List[TeamInfo]:
        """Every entry for a gender, aliases included, in table order."""
        return list(self._teams.get(gender, {}).values())

    def list_all(self, gender: str = "men") -> List[TeamInfo]:
        """
        One entry per distinct CHN page, sorted case-insensitively by name.

        The first alias listed for a URL is the one surfaced.
        """
        unique: Dict[str, TeamInfo] = {}
        for info in self.entries(gender):
            unique.setdefault(info.url, info)
        return sorted(unique.values(), key=lambda t: t.name.casefold())

    def teams_list(self, gender: str = "men") -> Dict[str, object]:
        """Summary payload grouped by conference for the team picker."""
        teams = self.list_all(gender)
        by_conf: Dict[str, List[str]] = defaultdict(list)
        for t in teams:
            by_conf[t.conference].append(t.name)

        return {
            "totalTeams": len(teams),
            "conferences": sorted(by_conf),
            "teamsByConference": {c: sorted(names, key=str.casefold) for c, names in sorted(by_conf.items())},
            "allTeams": [t.name for t in teams],
            "gender": gender,
        }


def _is_comment(line: str) -> bool:
    return line.startswith("#") or line.startswith("//")


@lru_cache(maxsize=None)
def load_schedule_urls(path: str) -> Mapping[str, str]:
    """
    Load the team display name -> athletics schedule URL map.

    One "name,url" pair per line; blank and comment lines are ignored. The
    result is cached per path and read-only. A missing file yields an empty map.
    """
    urls: Dict[str, str] = {}
    try:
        with open(path, newline="", encoding="utf-8") as fh:
            for row in csv.reader(fh):
                if not row or not row[0].strip() or _is_comment(row[0].strip()):
                    continue
                if len(row) < 2:
                    continue
                name, url = row[0].strip(), row[1].strip()
                if name and url:
                    urls[name] = url
    except FileNotFoundError:
        logger.error("Schedule URL map not found at %s", path)
        return MappingProxyType({})

    logger.info("Loaded %d team schedule URLs from %s", len(urls), Path(path).name)
    return MappingProxyType(urls)


@lru_cache(maxsize=None)
def load_active_programs(path: str) -> FrozenSet[str]:
    """Load the active program names list (one per line, comments ignored)."""
    try:
        with open(path, encoding="utf-8") as fh:
            lines = [line.strip() for line in fh]
    except FileNotFoundError:
        logger.error("Program list not found at %s", path)
        return frozenset()
    return frozenset(line for line in lines if line and not _is_comment(line))
