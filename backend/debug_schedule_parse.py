import json
import logging
import sys

from schedule_parser import parse_schedule_detailed
from workbook import GridLoadError, load_grid


def debug_parsing(path, reference_year=None):
    try:
        with open(path, "rb") as f:
            contents = f.read()
    except FileNotFoundError:
        print(f"Error: {path} not found.")
        return

    try:
        grid = load_grid(contents, path)
    except GridLoadError as e:
        print(f"Error: {e}")
        return

    print(f"Loaded {len(grid)} rows.")
    for i, row in enumerate(grid[:10]):
        print(f"  Row {i}: {row}")

    result = parse_schedule_detailed(grid, reference_year=reference_year)

    if not result.header:
        print("\nNo header row found.")
        return

    print(f"\n--- Header: row {result.header.row_index} (score {result.header.score}, {result.header.source}) ---")
    if result.split_header:
        print(f"Split header: dates on row {result.header.row_index + 1}")

    print("\n--- Day Columns ---")
    for col in result.day_columns:
        print(f"  Column {col.index}: {col.day} {col.date or '(no date)'}")

    print(f"\n--- Shifts ({len(result.shifts)}) ---")
    for s in result.shifts:
        print(f"  {s.employee_name}: {s.date} {s.start_time} - {s.end_time} {s.notes}")
        if s.coworkers:
            for c in json.loads(s.coworkers):
                print(f"      with {c['name']} ({c['startTime']} - {c['endTime']})")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python debug_schedule_parse.py <schedule.xlsx|schedule.csv> [reference_year] [-v]")
        sys.exit(1)

    if "-v" in sys.argv:
        logging.basicConfig(level=logging.DEBUG, format="DEBUG: %(message)s")
    args = [a for a in sys.argv[1:] if a != "-v"]
    debug_parsing(args[0], int(args[1]) if len(args) > 1 else None)
