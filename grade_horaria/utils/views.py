from __future__ import annotations
from typing import Any, Mapping, Optional

from grade_horaria.schemas.curriculum import CourseLine, InputSummaryOut, PreferenceLine
from grade_horaria.schemas.timetable import (
    BadgeOut, ClassOut, DailySlotOut, DailyViewOut, DayOut,
    WeeklyCellOut, WeeklyRowOut, WeeklyViewOut,
)
from grade_horaria.utils.colors import badge_color
from grade_horaria.utils.grid import day_display_name, filter_semester, project_grid
from grade_horaria.utils.normalize import CanonicalClass, available_days, day_classes, to_semester
from grade_horaria.utils.timeslots import build_time_axis, collect_semesters, semester_key

NO_DATA_MESSAGE = "Nenhum dado de grade horária disponível"
NO_CLASSES_TODAY = "Sem aulas agendadas para este dia"
SUMMARY_PREVIEW = 5


def _class_out(c: CanonicalClass) -> ClassOut:
    return ClassOut(**c.to_dict(), badge=BadgeOut(**badge_color(c.discipline)._asdict()))


def _pick_semester(semesters: list, requested) -> Any:
    """
    Requested semester when given, otherwise the first one available.
    The requested value is kept even if no class has it (empty grid).
    """
    if requested is not None and str(requested).strip() != "":
        for s in semesters:
            if semester_key(s) == semester_key(requested):
                return s
        return to_semester(requested)
    return semesters[0] if semesters else None


def _base(schedule: Mapping, semester):
    days = available_days(schedule)
    semesters = collect_semesters(schedule, days)
    return days, semesters, _pick_semester(semesters, semester), build_time_axis(schedule, days)


def build_weekly_view(schedule: Mapping, semester=None) -> WeeklyViewOut:
    days, semesters, active, axis = _base(schedule, semester)
    if not days:
        return WeeklyViewOut(empty=True, message=NO_DATA_MESSAGE)

    grid = project_grid(schedule, axis, active, days)
    rows = [
        WeeklyRowOut(
            time=slot,
            cells=[
                WeeklyCellOut(day=day, class_=_class_out(grid[day][slot]) if grid[day][slot] else None)
                for day in days
            ],
        )
        for slot in axis
    ]
    return WeeklyViewOut(
        semester=active,
        semesters=semesters,
        days=[DayOut(key=d, label=day_display_name(d)) for d in days],
        time_slots=axis,
        rows=rows,
    )


def build_daily_view(schedule: Mapping, semester=None, day: Optional[str] = None) -> DailyViewOut:
    days, semesters, active, axis = _base(schedule, semester)
    if not days:
        return DailyViewOut(empty=True, message=NO_DATA_MESSAGE)

    if day is None or day == "":
        day = days[0]
    elif day not in days:
        # 大小寫不同也接受 (Monday / monday)
        day = next((d for d in days if d.lower() == day.lower()), day)

    out = DailyViewOut(
        semester=active,
        semesters=semesters,
        days=[DayOut(key=d, label=day_display_name(d)) for d in days],
        time_slots=axis,
        day=DayOut(key=day, label=day_display_name(day)),
    )
    if day not in days:
        out.message = NO_CLASSES_TODAY
        return out

    # any class of the semester counts, even one without a time slot
    out.has_classes = bool(filter_semester(day_classes(schedule, day), active))
    if not out.has_classes:
        out.message = NO_CLASSES_TODAY
        return out

    row = project_grid(schedule, axis, active, [day])[day]
    out.slots = [
        DailySlotOut(time=slot, class_=_class_out(c) if c else None)
        for slot, c in row.items()
    ]
    return out


def _as_list(v) -> list:
    return v if isinstance(v, list) else []


def build_input_summary(input_data: Optional[Mapping]) -> InputSummaryOut:
    """The "Resumo dos Dados de Entrada" block; tolerant to partial input."""
    if not isinstance(input_data, Mapping):
        return InputSummaryOut()

    courses = [c for c in _as_list(input_data.get("courses")) if isinstance(c, Mapping)]
    prefs_raw = input_data.get("professor_preferences")
    prefs = [p for p in _as_list(prefs_raw) if isinstance(p, Mapping)]

    return InputSummaryOut(
        semesters=[str(s) for s in _as_list(input_data.get("semesters"))],
        class_days=[str(d) for d in _as_list(input_data.get("class_days"))],
        time_slots=[str(t) for t in _as_list(input_data.get("time_slots"))],
        course_count=len(courses),
        courses=[
            CourseLine(
                code=str(c.get("code") or ""),
                professor=str(c.get("professor") or ""),
                semester=c.get("semester") if isinstance(c.get("semester"), (int, str)) else None,
            )
            for c in courses[:SUMMARY_PREVIEW]
        ],
        courses_truncated=len(courses) > SUMMARY_PREVIEW,
        professor_preferences=None if prefs_raw is None else [
            PreferenceLine(
                professor=str(p.get("professor") or ""),
                preferred_days=[str(d) for d in _as_list(p.get("preferred_days"))],
            )
            for p in prefs[:SUMMARY_PREVIEW]
        ],
        preferences_truncated=len(prefs) > SUMMARY_PREVIEW,
    )
