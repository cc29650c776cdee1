import logging
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

import config
from models import DayColumn, ParsedShift
from name_matching import employee_names, filter_shifts_for_employee
from schedule_parser import parse_schedule_detailed
from workbook import GridLoadError, load_grid

config.configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ScheduleImportResponse(BaseModel):
    message: str
    count: int
    rows: int
    header_row: Optional[int] = None
    split_header: bool = False
    day_columns: List[DayColumn] = []
    employee_names: List[str] = []
    shifts: List[ParsedShift] = []


@app.get("/health/")
def health():
    return {"status": "ok"}


# --- Schedule Import ---
@app.post("/import/schedule/", response_model=ScheduleImportResponse)
async def import_schedule(
    file: UploadFile = File(...),
    employee_name: Optional[str] = Query(default=None, description="Only return this person's shifts"),
    reference_year: Optional[int] = Query(default=None, ge=1900, le=9999, description="Year for dates written without one"),
):
    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(contents) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File is larger than {config.MAX_UPLOAD_BYTES} bytes")

    try:
        grid = load_grid(contents, file.filename)
    except GridLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = parse_schedule_detailed(grid, reference_year=reference_year, default_hours=config.DEFAULT_SHIFT_HOURS)
    all_names = employee_names(result.shifts)
    logger.info("Import of '%s': %d rows, %d shifts, employees: %s", file.filename, len(grid), len(result.shifts), all_names)

    shifts = result.shifts
    if employee_name:
        shifts = filter_shifts_for_employee(result.shifts, employee_name)
        if not shifts:
            raise HTTPException(status_code=400, detail={
                "message": f'No shifts found for "{employee_name}". Please make sure your name in the schedule matches your registered name.',
                "totalShiftsFound": len(result.shifts),
                "allEmployeeNames": all_names,
            })

    return ScheduleImportResponse(
        message="File parsed successfully" if shifts else "No shifts found in file",
        count=len(shifts),
        rows=len(grid),
        header_row=result.header.row_index if result.header else None,
        split_header=result.split_header,
        day_columns=result.day_columns,
        employee_names=all_names,
        shifts=shifts,
    )


def run_server():
    logger.info("Starting schedule import server on %s:%d", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run_server()
