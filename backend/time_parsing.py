"""
Time range normalization for schedule cells.

Cells come in a handful of conventions ("9:00 AM - 5:00 PM", "09:00-17:00",
"9AM"). Each convention is one entry in TIME_RANGE_PARSERS and they are tried
in order until one produces a range. Results are always canonical
"H:MM AM/PM" strings.
"""
import re
from typing import Optional, Tuple

DEFAULT_SHIFT_HOURS = 8

DASH = r"[-–—]"

# "9:00 AM - 5:00 PM", "9:00AM-5:00PM", "9:00  am  -  5:00  pm"
RANGE_12H = re.compile(rf"(\d{{1,2}}:\d{{2}}\s*(?:AM|PM))\s*{DASH}\s*(\d{{1,2}}:\d{{2}}\s*(?:AM|PM))", re.IGNORECASE)
# "09:00-18:00"
RANGE_24H = re.compile(rf"(\d{{1,2}}:\d{{2}})\s*{DASH}\s*(\d{{1,2}}:\d{{2}})")
# "9:00 AM", "9AM"
SINGLE_TIME = re.compile(r"(\d{1,2}(?::\d{2})?\s*(?:AM|PM))", re.IGNORECASE)

# Anything that looks like a time of day ("9:30", "9AM")
TIME_OF_DAY = re.compile(r"\d{1,2}:\d{2}|\d{1,2}(?:AM|PM)", re.IGNORECASE)

CLOCK_TIME = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(AM|PM)$", re.IGNORECASE)


def format_time(hour: int, minute: int, period: str) -> str:
    return f"{hour}:{minute:02d} {period.upper()}"


def parse_clock_time(text: str) -> Optional[Tuple[int, int, str]]:
    """'9:05 pm' -> (9, 5, 'PM'). None when it isn't a valid 12-hour time."""
    match = CLOCK_TIME.match(text.strip())
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        return None
    return hour, minute, match.group(3).upper()


def canonical_time(text: str) -> Optional[str]:
    parsed = parse_clock_time(text)
    if not parsed:
        return None
    return format_time(*parsed)


def _from_24_hour(hours24: int, minute: int) -> str:
    period = "PM" if hours24 >= 12 else "AM"
    hours12 = 12 if hours24 == 0 else hours24 - 12 if hours24 > 12 else hours24
    return format_time(hours12, minute, period)


def to_12_hour(text: str) -> Optional[str]:
    """'17:30' -> '5:30 PM'"""
    parts = text.strip().split(":")
    if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
        return None
    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 23 or minutes > 59:
        return None
    return _from_24_hour(hours, minutes)


def add_hours(text: str, hours_to_add: int) -> Optional[str]:
    """Shift a 12-hour time forward, wrapping around midnight."""
    parsed = parse_clock_time(text)
    if not parsed:
        return None
    hour, minute, period = parsed

    hours24 = hour
    if period == "PM" and hour != 12:
        hours24 += 12
    if period == "AM" and hour == 12:
        hours24 = 0

    return _from_24_hour((hours24 + hours_to_add) % 24, minute)


def _parse_12h_range(text, default_hours):
    match = RANGE_12H.search(text)
    if not match:
        return None
    start, end = canonical_time(match.group(1)), canonical_time(match.group(2))
    if start and end:
        return start, end
    return None


def _parse_24h_range(text, default_hours):
    match = RANGE_24H.search(text)
    if not match:
        return None
    start, end = to_12_hour(match.group(1)), to_12_hour(match.group(2))
    if start and end:
        return start, end
    return None


def _parse_single_time(text, default_hours):
    match = SINGLE_TIME.search(text)
    if not match:
        return None
    start = canonical_time(match.group(1))
    if not start:
        return None
    end = add_hours(start, default_hours)
    return start, end


# Tried in order, first hit wins
TIME_RANGE_PARSERS = [
    ("12-hour range", _parse_12h_range),
    ("24-hour range", _parse_24h_range),
    ("single time", _parse_single_time),
]


def normalize_time_range(text, default_hours: int = DEFAULT_SHIFT_HOURS) -> Optional[Tuple[str, str]]:
    """
    Turn a cell's text into a (start, end) pair of "H:MM AM/PM" strings.
    Returns None when no known convention matches.
    """
    if text is None:
        return None
    clean = re.sub(r"\s+", " ", str(text)).strip()
    if not clean:
        return None

    for _name, parse in TIME_RANGE_PARSERS:
        result = parse(clean, default_hours)
        if result:
            return result
    return None


def match_primary_range(text) -> Optional[Tuple[str, str]]:
    """Only the canonical "H:MM AM/PM - H:MM AM/PM" convention."""
    if text is None:
        return None
    return _parse_12h_range(str(text).strip(), DEFAULT_SHIFT_HOURS)
