from datetime import datetime

import pytest
from bs4 import BeautifulSoup

from college_hockey.conferences import ConferenceMap
from college_hockey.errors import FetchError
from college_hockey.parsers import ParseContext
from college_hockey.team_directory import TeamDirectory

NOW = datetime(2025, 10, 15, 12, 0)


class FakeFetcher:
    """Returns canned HTML per URL (or one page for every URL) and records requests."""

    def __init__(self, pages=None, default=None):
        self.pages = pages or {}
        self.default = default
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        if url in self.pages:
            return self.pages[url]
        if self.default is not None:
            return self.default
        raise FetchError(url, f"All request strategies failed for {url}: 503")


@pytest.fixture
def directory():
    return TeamDirectory()


@pytest.fixture
def make_ctx(directory):
    def _make(team_name="Boston University", target_season="2025-26", gender="men"):
        return ParseContext(
            team_name=team_name,
            target_season=target_season,
            conferences=ConferenceMap.from_entries(directory.entries(gender)),
            now=NOW,
        )

    return _make


@pytest.fixture
def soup():
    def _soup(html):
        return BeautifulSoup(html, "html.parser")

    return _soup


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def now():
    return NOW


def chn_row(day, loc="", opponent="", outcome="", ours="", theirs="", time=""):
    cells = [day, "", outcome, ours, f"- {theirs}" if theirs else "", "", loc, opponent, "", "", time]
    return "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def chn_page(rows, record="Record: 1-0-0 (1-0-0 HEA)"):
    """A College Hockey News team schedule page: h2 record plus one table."""
    return (
        "<html><head><title>UConn Men's Hockey Schedule - College Hockey News</title></head><body>"
        f"<h2>UConn Huskies {record}</h2><table>" + "".join(rows) + "</table></body></html>"
    )


UCONN_ROWS = [
    "<tr><td colspan='11'>October 2025</td></tr>",
    chn_row("3 Fri", opponent="Boston College", outcome="W", ours="4", theirs="2"),
    chn_row("10 Fri", loc="at", opponent="Sacred Heart (nc)", time="7:00 PM"),
]


@pytest.fixture
def uconn_page():
    return chn_page(UCONN_ROWS)


@pytest.fixture
def make_chn_page():
    return chn_page


@pytest.fixture
def make_chn_row():
    return chn_row
