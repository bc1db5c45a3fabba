from college_hockey.detector import (
    ARIZONA_STATE,
    BIG_TEN,
    BOSTON_UNIVERSITY,
    CHN,
    FALLBACK_THRESHOLD,
    GENERIC,
    SIDEARM,
    detect_format,
)


def test_domain_wins_over_everything(soup):
    page = soup('<div class="sidearm-schedule-game"></div>')
    d = detect_format("https://goterriers.com/sports/mens-ice-hockey/schedule", "Michigan", page)
    assert (d.format_id, d.confidence) == (BOSTON_UNIVERSITY, 1.0)

    d = detect_format("https://www.collegehockeynews.com/schedules/team/Maine/25", None, page)
    assert d.format_id == CHN


def test_title_beats_schedule_events_marker(soup):
    page = soup("<title>Sun Devil Hockey Schedule</title><h2>Schedule Events</h2>")
    d = detect_format("https://example.edu", None, page)
    assert (d.format_id, d.confidence) == (ARIZONA_STATE, 0.8)


def test_known_team_beats_content(soup):
    page = soup('<div class="sidearm-schedule-game"></div>')
    d = detect_format("https://mgoblue.com/sports/mens-ice-hockey/schedule", "Michigan", page)
    assert (d.format_id, d.confidence) == (BIG_TEN, 0.7)
    assert d.confidence < FALLBACK_THRESHOLD


def test_sidearm_content_markers(soup):
    d = detect_format("https://example.edu/hockey", None, soup('<ul class="sidearm-schedule-games-container"></ul>'))
    assert (d.format_id, d.confidence) == (SIDEARM, 0.6)

    d = detect_format("https://example.edu/hockey", None, soup("<h2>Schedule Events</h2>"))
    assert d.format_id == SIDEARM


def test_title_markers(soup):
    d = detect_format("https://example.edu", None, soup("<title>Sun Devil Hockey</title>"))
    assert (d.format_id, d.confidence) == (ARIZONA_STATE, 0.8)

    d = detect_format("https://mirror.example", None, soup("<title>College Hockey News: Maine</title>"))
    assert d.format_id == CHN


def test_generic_default(soup):
    d = detect_format("https://example.edu/hockey", "Springfield Tech", soup("<table></table>"))
    assert (d.format_id, d.confidence) == (GENERIC, 0.3)
