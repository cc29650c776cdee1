import pytest

from date_parsing import (
    cell_date,
    extract_date,
    find_day_name,
    is_serial_date,
    matches_date,
    matches_day,
    serial_to_iso,
    weekday_name,
)


def test_serial_dates_use_1899_12_30_epoch():
    assert serial_to_iso(45658) == "2025-01-01"
    assert serial_to_iso(45870) == "2025-08-01"
    assert serial_to_iso(45870.75) == "2025-08-01"
    assert weekday_name(serial_to_iso(45870)) == "Friday"


@pytest.mark.parametrize("value, expected", [
    (40000, False),
    (40001, True),
    (45870.5, True),
    (49999, True),
    (50000, False),
    (True, False),
    ("45870", False),
    (None, False),
])
def test_is_serial_date(value, expected):
    assert is_serial_date(value) is expected


@pytest.mark.parametrize("text, expected", [
    ("7/27/2025", "2025-07-27"),
    ("7-27-25", "2025-07-27"),
    ("Sun 7-27", "2024-07-27"),
    ("2025-08-04", "2025-08-04"),
    ("Monday July 28", "2024-07-28"),
    ("Aug 4, 2026", "2026-08-04"),
    ("Sept 5th", "2024-09-05"),
])
def test_extract_date(text, expected):
    assert extract_date(text, 2024) == expected


@pytest.mark.parametrize("text", ["13/45", "no date here", "Feb 30", "Week 1"])
def test_extract_date_rejects_impossible_or_missing_dates(text):
    assert extract_date(text, 2024) is None


def test_cell_date_handles_serials_and_text():
    assert cell_date(45870, 2024) == "2025-08-01"
    assert cell_date("8/4", 2025) == "2025-08-04"
    assert cell_date("", 2025) is None
    assert cell_date(None, 2025) is None
    assert cell_date(12, 2025) is None


def test_find_day_name():
    assert find_day_name("SUNDAY") == "Sunday"
    assert find_day_name("thu 7/31") == "Thursday"
    assert find_day_name("Sat") == "Saturday"
    assert find_day_name("Position") is None


def test_weekday_name():
    assert weekday_name("2025-07-27") == "Sunday"
    assert weekday_name("2025-08-04") == "Monday"


def test_detection_patterns_are_loose():
    assert matches_date("July 31")
    assert matches_date("8/4")
    assert matches_day("Tues")
    assert not matches_day("Cashier")
