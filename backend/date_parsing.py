"""
Day-name and date detection for schedule header cells.

Two kinds of helpers live here:
- the loose DETECTION patterns used to score header rows (they must stay
  loose, the header scoring depends on what they count), and
- the stricter EXTRACTION table that turns a header cell into a YYYY-MM-DD
  string.
"""
import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser

from models import DAY_NAMES

# Spreadsheet serial dates: day 0 is 1899-12-30 (keeps the 1900 leap-year quirk)
SERIAL_EPOCH = date(1899, 12, 30)
SERIAL_MIN = 40000  # 2009-07-06
SERIAL_MAX = 50000  # 2036-11-21

# Order matters: first hit names the column
DAY_PATTERNS = [
    ("Sunday", re.compile(r"sun(day)?", re.IGNORECASE)),
    ("Monday", re.compile(r"mon(day)?", re.IGNORECASE)),
    ("Tuesday", re.compile(r"tue(sday)?", re.IGNORECASE)),
    ("Wednesday", re.compile(r"wed(nesday)?", re.IGNORECASE)),
    ("Thursday", re.compile(r"thu(rsday)?", re.IGNORECASE)),
    ("Friday", re.compile(r"fri(day)?", re.IGNORECASE)),
    ("Saturday", re.compile(r"sat(urday)?", re.IGNORECASE)),
]

DATE_DETECTION_PATTERNS = [
    re.compile(r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}"),  # MM/DD/YYYY or MM-DD-YYYY
    re.compile(r"\d{1,2}[-/]\d{1,2}"),  # MM/DD or MM-DD
    re.compile(r"\d{4}-\d{1,2}-\d{1,2}"),  # YYYY-MM-DD
    re.compile(r"\w+\s+\d{1,2}"),  # "July 31"
]

ISO_DATE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")
MDY_DATE = re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})")
MD_DATE = re.compile(r"(\d{1,2})[-/](\d{1,2})")
MONTH_NAME_DATE = re.compile(
    r"\b(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?\s+\d{1,2}(?:st|nd|rd|th)?"
    r"(?:,?\s+\d{4})?\b",
    re.IGNORECASE,
)


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_serial_date(value) -> bool:
    return is_number(value) and SERIAL_MIN < value < SERIAL_MAX


def serial_to_date(serial) -> date:
    return SERIAL_EPOCH + timedelta(days=int(serial))


def serial_to_iso(serial) -> str:
    return serial_to_date(serial).isoformat()


def weekday_name(iso_date: str) -> str:
    d = date.fromisoformat(iso_date)
    # date.weekday(): Monday=0, DAY_NAMES starts on Sunday
    return DAY_NAMES[(d.weekday() + 1) % 7]


def find_day_name(text: str) -> Optional[str]:
    for day, pattern in DAY_PATTERNS:
        if pattern.search(text):
            return day
    return None


def matches_day(text: str) -> bool:
    return any(pattern.search(text) for _day, pattern in DAY_PATTERNS)


def matches_date(text: str) -> bool:
    return any(pattern.search(text) for pattern in DATE_DETECTION_PATTERNS)


def _iso(year, month, day) -> Optional[str]:
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


def _extract_iso(text, reference_year):
    match = ISO_DATE.search(text)
    if match:
        return _iso(*match.groups())
    return None


def _extract_mdy(text, reference_year):
    match = MDY_DATE.search(text)
    if not match:
        return None
    month, day, year = match.groups()
    year = int(year)
    if year < 100:
        year += 2000
    return _iso(year, month, day)


def _extract_md(text, reference_year):
    match = MD_DATE.search(text)
    if match:
        month, day = match.groups()
        return _iso(reference_year, month, day)
    return None


def _extract_month_name(text, reference_year):
    match = MONTH_NAME_DATE.search(text)
    if not match:
        return None
    try:
        parsed = date_parser.parse(match.group(0), default=datetime(reference_year, 1, 1))
    except (ValueError, OverflowError):
        return None
    return parsed.date().isoformat()


# Tried in order, first hit wins
DATE_EXTRACTORS = [
    ("YYYY-MM-DD", _extract_iso),
    ("MM/DD/YYYY", _extract_mdy),
    ("MM/DD", _extract_md),
    ("Month D", _extract_month_name),
]


def extract_date(text: str, reference_year: int) -> Optional[str]:
    """Pull the first recognizable date out of a header cell as YYYY-MM-DD."""
    for _name, extract in DATE_EXTRACTORS:
        result = extract(text, reference_year)
        if result:
            return result
    return None


def cell_date(value, reference_year: int) -> Optional[str]:
    """Date carried by a header cell, serial number or text."""
    if is_serial_date(value):
        return serial_to_iso(value)
    if isinstance(value, str) and value.strip():
        return extract_date(value.strip(), reference_year)
    return None
