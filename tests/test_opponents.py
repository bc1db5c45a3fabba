import pytest

from college_hockey.conferences import ConferenceMap, team_key
from college_hockey.opponents import has_exhibition_marker, is_valid_opponent, normalize_opponent


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("#5 Boston College", "Boston College"),
        ("No. 12 Maine Orono, Maine", "Maine"),
        ("Providence Box Score Recap", "Providence"),
        ("UMass Lowell Lowell, Mass.", "UMass Lowell"),
        ("Mass. Lowell", "Mass. Lowell"),
        ("Massachusetts Lowell", "Massachusetts Lowell"),
        ("Massachusetts-Lowell, Mass.", "Massachusetts-Lowell"),
        ("Merrimack Lowell, Mass.", "Merrimack"),
        ("Merrimack (Exhibition)", "Merrimack"),
        ("Miami (OH)", "Miami (OH)"),
        ("Union (NY)", "Union (NY)"),
        ("Denver (Feb. 28)", "Denver"),
        ("Denver NCHC", "Denver"),
        ("Colgate*", "Colgate"),
        ("Wisconsin Highlights Videos", "Wisconsin"),
        ("Vermont Saturday, Oct 4", "Vermont"),
        ("Cornell Red Hot Hockey at MSG", "Cornell"),
        ("  Northern   Michigan  ", "Northern Michigan"),
    ],
)
def test_normalize_opponent_strips_noise(raw, expected):
    assert normalize_opponent(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "A",
        "123",
        "TBA",
        "${opponent}",
        "{{ game.opponent }}",
        "Men's Ice Hockey Schedule",
        "Maine Maine",
        "Buy Now",
        "Home/Away",
    ],
)
def test_normalize_opponent_rejects_junk(raw):
    assert normalize_opponent(raw) is None


def test_is_valid_opponent_length_bounds():
    assert is_valid_opponent("RIT")
    assert not is_valid_opponent("x" * 101)


def test_exhibition_markers():
    assert has_exhibition_marker("Merrimack (Exhibition)")
    assert has_exhibition_marker("Toronto (exh.)")
    assert has_exhibition_marker("USNTDP #")
    assert not has_exhibition_marker("Maine")


def test_lowell_variants_keep_their_conference():
    conferences = ConferenceMap({team_key("UMass Lowell"): "Hockey East"})
    for raw in ("Mass. Lowell", "Massachusetts Lowell", "UMass Lowell Lowell, Mass."):
        assert conferences.conference_of(normalize_opponent(raw)) == "Hockey East"
