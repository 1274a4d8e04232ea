from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class TimetableSnapshotIn(BaseModel):
    """
    What the results page holds: the backend answer plus the curriculum it was
    generated from. `timetable` may still be wrapped as {"timetable": {...}}.
    """

    model_config = ConfigDict(populate_by_name=True)

    timetable: Any = None
    input_data: Optional[Dict[str, Any]] = Field(default=None, alias="inputData")


class BadgeOut(BaseModel):
    name: str
    background: str
    text: str
    border: str


class ClassOut(BaseModel):
    time: str
    discipline: str
    teacher: str
    room: str
    semester: Optional[Union[int, float]] = None
    badge: BadgeOut


class DayOut(BaseModel):
    key: str
    label: str


class WeeklyCellOut(BaseModel):
    day: str
    class_: Optional[ClassOut] = Field(default=None, alias="class")

    model_config = ConfigDict(populate_by_name=True)


class WeeklyRowOut(BaseModel):
    time: str
    cells: List[WeeklyCellOut]


class DailySlotOut(BaseModel):
    time: str
    class_: Optional[ClassOut] = Field(default=None, alias="class")

    model_config = ConfigDict(populate_by_name=True)


class TimetableViewOut(BaseModel):
    empty: bool = False
    message: Optional[str] = None
    semester: Optional[Union[int, float]] = None
    semesters: List[Union[int, float]] = []
    days: List[DayOut] = []
    time_slots: List[str] = []


class WeeklyViewOut(TimetableViewOut):
    mode: str = "weekly"
    rows: List[WeeklyRowOut] = []


class DailyViewOut(TimetableViewOut):
    mode: str = "daily"
    day: Optional[DayOut] = None
    has_classes: bool = False
    slots: List[DailySlotOut] = []
