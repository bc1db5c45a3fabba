from datetime import date

import pytest

from college_hockey.seasons import (
    extract_season,
    format_season,
    infer_game_year,
    is_valid_season,
    season_for_date,
    season_start_year,
)


def test_format_season_wraps_century():
    assert format_season(2025) == "2025-26"
    assert format_season(2099) == "2099-00"


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2025, 8, 1), "2025-26"),
        (date(2025, 12, 31), "2025-26"),
        (date(2026, 1, 5), "2025-26"),
        (date(2026, 7, 31), "2025-26"),
        (date(2026, 8, 1), "2026-27"),
    ],
)
def test_season_for_date(day, expected):
    assert season_for_date(day) == expected


def test_season_start_year_rejects_broken_suffix():
    assert season_start_year("2025-26") == 2025
    assert season_start_year("2099-00") == 2099
    assert season_start_year("2025-27") is None
    assert season_start_year("25-26") is None


def test_is_valid_season():
    assert is_valid_season("2025-26", "2025-26")
    assert is_valid_season("2026-27", "2025-26")
    assert is_valid_season("2099-00", "2099-00")
    assert not is_valid_season("2024-25", "2025-26")
    assert not is_valid_season("2025-27", "2025-26")
    assert not is_valid_season("offseason", "2025-26")


def test_infer_game_year_uses_start_year_for_fall():
    assert infer_game_year(10, "2025-26") == 2025
    assert infer_game_year(8, "2025-26") == 2025
    assert infer_game_year(2, "2025-26") == 2026
    assert infer_game_year(1, "2099-00") == 2100
    with pytest.raises(ValueError):
        infer_game_year(10, "offseason")


def test_extract_season_from_title(soup):
    page = soup("<title>2025-26 Men's Ice Hockey Schedule</title><body></body>")
    assert extract_season(page, "2025-26") == "2025-26"


def test_extract_season_four_digit_end_year(soup):
    page = soup("<h1>2025-2026 Schedule</h1>")
    assert extract_season(page, "2025-26") == "2025-26"


def test_extract_season_stale_page_is_none(soup):
    page = soup("<title>2024-25 Schedule</title><p>Oct 4 vs Maine</p>")
    assert extract_season(page, "2025-26") is None


def test_extract_season_later_season_accepted(soup):
    page = soup("<h2>2026-27 Season</h2>")
    assert extract_season(page, "2025-26") == "2026-27"


def test_extract_season_assumes_target_when_year_mentioned(soup):
    assert extract_season(soup("<p>Opening night October 3, 2025</p>"), "2025-26") == "2025-26"
    assert extract_season(soup("<p>No dates here</p>"), "2025-26") is None
