from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class CourseIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: str
    workload: Union[int, float]
    semester: int
    professor: str
    prerequisites: List[str] = Field(default_factory=list)
    failure_rate: Optional[float] = None
    type: Optional[str] = None


class ProfessorPreferenceIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    professor: str
    preferred_days: List[str] = Field(default_factory=list)


class CurriculumIn(BaseModel):
    """Body sent to the scheduling backend (POST /generate-timetable)."""

    model_config = ConfigDict(extra="allow")

    semesters: List[Union[int, str]] = Field(min_length=1)
    class_days: List[str] = Field(min_length=1)
    time_slots: List[str] = Field(min_length=1)
    courses: List[CourseIn] = Field(min_length=1)
    professor_preferences: Optional[List[ProfessorPreferenceIn]] = None


class CourseLine(BaseModel):
    code: str
    professor: str
    semester: Optional[Union[int, str]] = None


class PreferenceLine(BaseModel):
    professor: str
    preferred_days: List[str]


class InputSummaryOut(BaseModel):
    semesters: List[str] = []
    class_days: List[str] = []
    time_slots: List[str] = []
    course_count: int = 0
    courses: List[CourseLine] = []
    courses_truncated: bool = False
    professor_preferences: Optional[List[PreferenceLine]] = None
    preferences_truncated: bool = False
