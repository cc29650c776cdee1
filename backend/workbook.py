import csv
import io
import logging
import re
from datetime import date, datetime, time
from io import BytesIO
from zipfile import BadZipFile

import openpyxl
from openpyxl.utils.datetime import to_excel
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)

NUMERIC_TEXT = re.compile(r"^-?\d+(\.\d+)?$")


class GridLoadError(ValueError):
    """Uploaded file could not be turned into a grid."""


def raw_cell_value(value):
    """
    openpyxl hands back datetime/time objects for date-formatted cells; the
    parser expects the raw spreadsheet numbers instead.
    """
    if isinstance(value, (datetime, date, time)):
        return to_excel(value)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def csv_cell_value(text):
    text = text.strip()
    if not text:
        return None
    if NUMERIC_TEXT.match(text):
        return float(text) if "." in text else int(text)
    return text


def load_workbook_grid(contents: bytes) -> list:
    try:
        wb = openpyxl.load_workbook(BytesIO(contents), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise GridLoadError(f"Could not read workbook: {e}") from e

    try:
        if not wb.worksheets:
            raise GridLoadError("Workbook has no worksheets")
        sheet = wb.worksheets[0]  # first sheet, same as the export tools produce
        grid = [[raw_cell_value(v) for v in row] for row in sheet.iter_rows(values_only=True)]
    finally:
        wb.close()

    logger.info("Loaded workbook sheet '%s': %d rows", sheet.title, len(grid))
    return grid


def load_csv_grid(contents: bytes) -> list:
    try:
        text = contents.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise GridLoadError(f"CSV file is not valid UTF-8: {e}") from e

    reader = csv.reader(io.StringIO(text, newline=""))
    grid = [[csv_cell_value(c) for c in row] for row in reader]
    logger.info("Loaded CSV: %d rows", len(grid))
    return grid


def load_grid(contents: bytes, filename: str) -> list:
    """Turn an uploaded schedule file into the rows-of-cells grid the parser reads."""
    name = (filename or "").lower()
    if name.endswith(WORKBOOK_EXTENSIONS):
        return load_workbook_grid(contents)
    if name.endswith(CSV_EXTENSIONS):
        return load_csv_grid(contents)
    raise GridLoadError(f"Unsupported file type: '{filename}'. Upload an .xlsx, .xlsm or .csv export.")
