from typing import Optional
from fastapi import APIRouter, Query

from grade_horaria.schemas.curriculum import InputSummaryOut
from grade_horaria.schemas.timetable import DailyViewOut, TimetableSnapshotIn, WeeklyViewOut
from grade_horaria.utils.normalize import unwrap_timetable
from grade_horaria.utils.timeslots import collect_semesters
from grade_horaria.utils.views import build_daily_view, build_input_summary, build_weekly_view

router = APIRouter(prefix="/timetable", tags=["Timetable"])


@router.post("/semesters")
def list_semesters(body: TimetableSnapshotIn):
    # 給前端「Filtrar por Período」下拉選單用
    return collect_semesters(unwrap_timetable(body.timetable))


@router.post("/view/weekly", response_model=WeeklyViewOut)
def weekly_view(
    body: TimetableSnapshotIn,
    semester: Optional[str] = Query(None, description="Período, e.g. 1"),
):
    return build_weekly_view(unwrap_timetable(body.timetable), semester)


@router.post("/view/daily", response_model=DailyViewOut)
def daily_view(
    body: TimetableSnapshotIn,
    semester: Optional[str] = Query(None, description="Período, e.g. 1"),
    day: Optional[str] = Query(None, description="Day key as sent by the backend, e.g. Monday"),
):
    return build_daily_view(unwrap_timetable(body.timetable), semester, day)


@router.post("/summary", response_model=InputSummaryOut)
def input_summary(body: TimetableSnapshotIn):
    return build_input_summary(body.input_data)
