"""
Heuristic parser for weekly / biweekly schedule exports.

The input is the raw "array of arrays" view of a spreadsheet: employees are
rows, days are columns, and somewhere near the top there is a header row with
day names, dates or spreadsheet serial dates (sometimes day names on one row
and dates on the next). The parser finds that header, maps columns to dates,
walks the employee rows and emits one ParsedShift per recognizable time cell.

Nothing recognizable is not an error: the result is just an empty list.
Only a grid that isn't a list of rows raises.
"""
import json
import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from date_parsing import (
    cell_date,
    find_day_name,
    is_serial_date,
    matches_date,
    matches_day,
    serial_to_iso,
    weekday_name,
)
from models import Coworker, DayColumn, HeaderMatch, ParsedShift, ScheduleParseResult
from time_parsing import DEFAULT_SHIFT_HOURS, match_primary_range, normalize_time_range, TIME_OF_DAY

logger = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 50
MIN_HEADER_MATCHES = 3

METADATA_PHRASES = ("time period", "executed", "printed")
NON_NAME_KEYWORDS = ("time period", "query", "currency", "executed", "printed", "schedule")
DIVIDER_KEYWORDS = ("employee", "name", "schedule", "week")


class InvalidGridError(TypeError):
    """The grid passed to the parser is not a list of rows."""


def cell_text(value) -> str:
    if value is None or value is False:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _is_row(row) -> bool:
    return isinstance(row, (list, tuple))


def _validate_grid(grid):
    if grid is None:
        raise InvalidGridError("Schedule grid is missing (got None)")
    if isinstance(grid, (str, bytes)) or not isinstance(grid, (list, tuple)):
        raise InvalidGridError(f"Schedule grid must be a list of rows, got {type(grid).__name__}")


# --- Header Locator ---

def count_date_cells(row: Sequence) -> int:
    """Cells that look like a date: date text or a serial date number."""
    count = 0
    for cell in row:
        if isinstance(cell, str) and cell:
            if matches_date(cell.strip()):
                count += 1
        elif is_serial_date(cell):
            count += 1
    return count


def score_header_row(row: Sequence) -> Tuple[int, int, int, bool]:
    """
    Score one candidate header row.

    Returns (score, day_date_count, day_count, has_date). A row is only a
    candidate when day_date_count reaches MIN_HEADER_MATCHES.
    """
    day_date_count = 0
    day_count = 0
    serial_count = 0
    has_date = False

    for cell in row:
        if isinstance(cell, str) and cell:
            text = cell.strip()
            if matches_day(text):
                day_count += 1
                day_date_count += 1
            if matches_date(text):
                day_date_count += 1
                has_date = True
        elif is_serial_date(cell):
            serial_count += 1
            day_date_count += 1
            has_date = True

    score = 0
    if serial_count >= 5:
        score += 100  # a full week of dates
    elif serial_count >= 3:
        score += 50
    elif day_date_count >= MIN_HEADER_MATCHES:
        score += 25

    score += serial_count * 10

    if any(isinstance(cell, str) and any(p in cell.lower() for p in METADATA_PHRASES) for cell in row):
        score -= 75

    return score, day_date_count, day_count, has_date


def looks_like_employee_name(text: str) -> bool:
    lowered = text.lower()
    if any(k in lowered for k in NON_NAME_KEYWORDS):
        return False
    if len(text) >= 50:
        return False
    return "," in text or (len(text.split(" ")) >= 2 and len(text) > 3)


def _has_time_of_day(row: Sequence) -> bool:
    for cell in row[1:]:
        if isinstance(cell, str) and TIME_OF_DAY.search(cell.strip()):
            return True
    return False


def _fallback_header(grid: Sequence) -> Optional[HeaderMatch]:
    first_employee_row = -1
    for i in range(min(len(grid), HEADER_SCAN_ROWS)):
        row = grid[i]
        if not _is_row(row) or len(row) <= 2:
            continue
        first = row[0]
        if not isinstance(first, str) or not first.strip():
            continue
        if looks_like_employee_name(first.strip()) and _has_time_of_day(row):
            first_employee_row = i
            logger.debug("Fallback: first employee-looking row at %d: %r", i, row)
            break

    if first_employee_row <= 0:
        return None

    for i in range(first_employee_row - 1, -1, -1):
        row = grid[i]
        if not _is_row(row) or len(row) <= 2:
            continue
        first = cell_text(row[0]).lower()
        if not first or "name" in first or "employee" in first:
            logger.debug("Fallback: header inferred at row %d: %r", i, row)
            return HeaderMatch(row_index=i, source="fallback")
    return None


def split_date_count(grid: Sequence, row_index: int, day_count: int, has_date: bool) -> int:
    """
    Date cells on the row under a day-names-only header row, or 0 when
    the row at row_index is not the first half of a split header.
    """
    if day_count < MIN_HEADER_MATCHES or has_date or row_index + 1 >= len(grid):
        return 0
    date_row = grid[row_index + 1]
    if not _is_row(date_row):
        return 0
    next_dates = count_date_cells(date_row)
    return next_dates if next_dates >= MIN_HEADER_MATCHES else 0


def locate_header(grid: Sequence) -> Optional[HeaderMatch]:
    """Find the row holding day names / dates for the day columns."""
    best_row = -1
    best_score = 0
    best_split = False

    for i in range(min(len(grid), HEADER_SCAN_ROWS)):
        row = grid[i]
        if not _is_row(row):
            continue

        score, day_date_count, day_count, has_date = score_header_row(row)
        logger.debug("Row %d: score=%d day/date=%d days=%d has_date=%s", i, score, day_date_count, day_count, has_date)

        if score > best_score and day_date_count >= MIN_HEADER_MATCHES:
            best_row, best_score, best_split = i, score, False
            logger.debug("New best header candidate at row %d with score %d", i, score)

        next_dates = split_date_count(grid, i, day_count, has_date)
        if next_dates:
            split_score = 75 + next_dates * 10
            if split_score > best_score:
                best_row, best_score, best_split = i, split_score, True
                logger.debug("Split header: days at row %d, dates at row %d, score %d", i, i + 1, split_score)

    if best_row >= 0:
        return HeaderMatch(row_index=best_row, score=best_score, split=best_split)

    logger.debug("No header row with days/dates found, trying employee-row fallback")
    return _fallback_header(grid)


# --- Column Mapper ---

def map_day_columns(header_row: Sequence, date_row: Optional[Sequence], split_header: bool, reference_year: int) -> List[DayColumn]:
    columns = []
    for index, cell in enumerate(header_row):
        if is_serial_date(cell):
            iso = serial_to_iso(cell)
            columns.append(DayColumn(index=index, day=weekday_name(iso), date=iso))
            logger.debug("Column %d: serial %s -> %s", index, cell, iso)
            continue

        if not isinstance(cell, str) or not cell.strip():
            continue
        text = cell.strip()

        day = find_day_name(text)
        if day:
            if split_header:
                paired = date_row[index] if date_row is not None and index < len(date_row) else None
                iso = cell_date(paired, reference_year) if paired else None
            else:
                iso = cell_date(text, reference_year)
            columns.append(DayColumn(index=index, day=day, date=iso))
            logger.debug("Column %d: %r -> %s %s", index, text, day, iso)
        elif not split_header:
            iso = cell_date(text, reference_year)
            if iso:
                columns.append(DayColumn(index=index, day=weekday_name(iso), date=iso))
                logger.debug("Column %d: date-only %r -> %s", index, text, iso)

    return columns


# --- Employee Row Walker ---

def display_name(raw: str) -> str:
    """'Smith, John' -> 'John Smith'"""
    if "," in raw:
        parts = [p.strip() for p in raw.split(",")]
        if len(parts) >= 2 and parts[0] and parts[1]:
            return f"{parts[1]} {parts[0]}"
    return raw


def is_employee_row(name: str) -> bool:
    if len(name) < 2:
        return False
    lowered = name.lower()
    return not any(k in lowered for k in DIVIDER_KEYWORDS)


def _row_name(row: Sequence) -> str:
    return cell_text(row[0]) if row else ""


def _cell(row: Sequence, index: int):
    return row[index] if index < len(row) else None


# --- Co-worker Aggregator ---

def build_coworker_index(grid: Sequence, day_columns: List[DayColumn], start_row: int) -> Dict[int, List[Tuple[int, Coworker]]]:
    """
    Column index -> [(row index, Coworker)] for every row that has a
    canonical "H:MM AM/PM - H:MM AM/PM" cell in that column.
    """
    index = defaultdict(list)
    for row_index in range(start_row, len(grid)):
        row = grid[row_index]
        if not _is_row(row):
            continue
        name = _row_name(row)
        if not is_employee_row(name):
            continue
        for column in day_columns:
            time_range = match_primary_range(cell_text(_cell(row, column.index)))
            if time_range:
                index[column.index].append(
                    (row_index, Coworker(name=display_name(name), start_time=time_range[0], end_time=time_range[1]))
                )
    return index


def coworkers_for(coworker_index, column_index: int, row_index: int) -> List[Coworker]:
    return [c for r, c in coworker_index.get(column_index, []) if r != row_index]


def serialize_coworkers(coworkers: List[Coworker]) -> str:
    if not coworkers:
        return ""
    return json.dumps([c.model_dump(by_alias=True) for c in coworkers], separators=(",", ":"))


def walk_employee_rows(grid, day_columns, start_row, default_hours=DEFAULT_SHIFT_HOURS) -> List[ParsedShift]:
    shifts = []
    coworker_index = build_coworker_index(grid, day_columns, start_row)
    # Second cell is the position/title unless it is itself a day column
    has_position_column = all(c.index != 1 for c in day_columns)

    for row_index in range(start_row, len(grid)):
        row = grid[row_index]
        if not _is_row(row):
            continue

        employee_name = _row_name(row)
        if not is_employee_row(employee_name):
            if employee_name:
                logger.debug("Skipping row %d (header/divider or short name): %r", row_index, employee_name)
            continue

        name = display_name(employee_name)
        position = cell_text(_cell(row, 1)) if has_position_column else ""

        for column in day_columns:
            text = cell_text(_cell(row, column.index))
            if not text:
                continue

            time_range = normalize_time_range(text, default_hours)
            if not time_range or not column.date:
                logger.debug("No shift for %s on %s (column %d): %r", name, column.date, column.index, text)
                continue

            start_time, end_time = time_range
            shifts.append(ParsedShift(
                date=column.date,
                start_time=start_time,
                end_time=end_time,
                coworkers=serialize_coworkers(coworkers_for(coworker_index, column.index, row_index)),
                notes=f"Position: {position}" if position else "",
                employee_name=name,
            ))

    return shifts


# --- Entry points ---

def parse_schedule_detailed(grid, reference_year: Optional[int] = None, default_hours: int = DEFAULT_SHIFT_HOURS) -> ScheduleParseResult:
    _validate_grid(grid)
    if reference_year is None:
        reference_year = date.today().year

    logger.debug("Parsing grid with %d rows (reference year %d)", len(grid), reference_year)
    if len(grid) < 2:
        return ScheduleParseResult()

    header = locate_header(grid)
    if header is None:
        logger.debug("No valid header row found. First rows: %s", json.dumps(list(grid[:10]), default=str))
        return ScheduleParseResult()

    header_row = grid[header.row_index]
    # Only the locator decides; a 24h cell like "07:00-15:00" also looks like a date
    split_header = header.split
    date_row = grid[header.row_index + 1] if split_header else None

    day_columns = map_day_columns(header_row, date_row, split_header, reference_year)
    if not day_columns:
        logger.debug("Header at row %d produced no day columns: %r", header.row_index, header_row)
        return ScheduleParseResult(header=header, split_header=split_header)

    start_row = header.row_index + (2 if split_header else 1)
    shifts = walk_employee_rows(grid, day_columns, start_row, default_hours)

    logger.info(
        "Parsed %d shifts (header row %d, score %d, split=%s, %d day columns)",
        len(shifts), header.row_index, header.score, split_header, len(day_columns),
    )
    return ScheduleParseResult(
        header=header,
        split_header=split_header,
        day_columns=day_columns,
        employee_start_row=start_row,
        shifts=shifts,
    )


def parse_schedule(grid, reference_year: Optional[int] = None, default_hours: int = DEFAULT_SHIFT_HOURS) -> List[ParsedShift]:
    """Grid in, ordered list of ParsedShift out (empty when nothing is recognizable)."""
    return parse_schedule_detailed(grid, reference_year, default_hours).shifts
