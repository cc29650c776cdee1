from datetime import datetime
from io import BytesIO

import openpyxl
import pytest

from schedule_parser import parse_schedule
from workbook import GridLoadError, load_grid


def make_workbook_bytes(rows):
    wb = openpyxl.Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    out = BytesIO()
    wb.save(out)
    return out.getvalue()


def test_workbook_dates_come_back_as_serial_numbers():
    contents = make_workbook_bytes([
        ["Employee", datetime(2025, 8, 3), datetime(2025, 8, 4), datetime(2025, 8, 5)],
        ["Smith, John", "9:00 AM - 5:00 PM", None, "10:00 AM - 6:00 PM"],
    ])
    grid = load_grid(contents, "Schedule.XLSX")

    assert grid[0][0] == "Employee"
    assert [int(v) for v in grid[0][1:]] == [45872, 45873, 45874]

    shifts = parse_schedule(grid)
    assert [(s.date, s.start_time) for s in shifts] == [("2025-08-03", "9:00 AM"), ("2025-08-05", "10:00 AM")]


def test_workbook_reads_first_sheet():
    wb = openpyxl.Workbook()
    wb.active.append(["first"])
    wb.create_sheet("Other").append(["second"])
    out = BytesIO()
    wb.save(out)

    assert load_grid(out.getvalue(), "s.xlsx")[0][0] == "first"


def test_csv_cells_are_typed():
    contents = "\ufeffName,Sun,Mon,Tue\r\n,45872,45873,45874\r\n\"Doe, Jane\",,9:00 AM - 5:00 PM,\r\n".encode("utf-8")
    grid = load_grid(contents, "export.csv")

    assert grid[0] == ["Name", "Sun", "Mon", "Tue"]
    assert grid[1] == [None, 45872, 45873, 45874]
    assert grid[2][0] == "Doe, Jane"

    shifts = parse_schedule(grid)
    assert len(shifts) == 1
    assert shifts[0].date == "2025-08-04"
    assert shifts[0].employee_name == "Jane Doe"


def test_unsupported_file_type():
    with pytest.raises(GridLoadError):
        load_grid(b"hello", "schedule.txt")


def test_corrupt_workbook():
    with pytest.raises(GridLoadError):
        load_grid(b"not really a zip file", "schedule.xlsx")


def test_non_utf8_csv():
    with pytest.raises(GridLoadError):
        load_grid(b"\xff\xfe\x00bad", "schedule.csv")
