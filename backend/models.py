from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class DayColumn(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(description="Column position in the grid")
    day: str = Field(description="Sunday..Saturday")
    date: Optional[str] = Field(default=None, description="YYYY-MM-DD, absent if only a day name was found")


class Coworker(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")


class ParsedShift(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str = Field(description="YYYY-MM-DD")
    start_time: str = Field(alias="startTime", description="H:MM AM/PM")
    end_time: str = Field(alias="endTime", description="H:MM AM/PM")
    coworkers: str = Field(default="", description="JSON array of coworkers or empty string")
    notes: str = ""
    employee_name: str = Field(alias="employeeName")


class HeaderMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    row_index: int
    score: int = 0
    split: bool = False  # chosen through the day-row + date-row rule
    source: str = "scored"  # "scored" or "fallback"


class ScheduleParseResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: Optional[HeaderMatch] = None
    split_header: bool = False
    day_columns: List[DayColumn] = []
    employee_start_row: Optional[int] = None
    shifts: List[ParsedShift] = []
