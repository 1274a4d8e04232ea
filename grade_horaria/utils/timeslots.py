import re
from typing import Iterable, List, Mapping, Optional

from grade_horaria.utils.normalize import Semester, available_days, day_classes, to_semester

_FIRST_NUMBER = re.compile(r"\d+")


def slot_sort_key(label: str) -> int:
    """
    "07h00-07h50" -> 7, "13h30-14h20" -> 13, "manhã" -> 0
    """
    m = _FIRST_NUMBER.search(label or "")
    return int(m.group()) if m else 0


def build_time_axis(schedule: Mapping, days: Optional[Iterable[str]] = None) -> List[str]:
    """
    All distinct non-empty times of the given days (default: available days),
    sorted by their first number. sorted() is stable, so ties keep discovery order.
    """
    if days is None:
        days = available_days(schedule)

    # 去重但保留第一次出現的順序
    seen = {}
    for day in days:
        for c in day_classes(schedule, day):
            if c.time:
                seen.setdefault(c.time, None)

    return sorted(seen, key=slot_sort_key)


def collect_semesters(schedule: Mapping, days: Optional[Iterable[str]] = None) -> List[Semester]:
    if days is None:
        days = available_days(schedule)

    out = set()
    for day in days:
        for c in day_classes(schedule, day):
            if c.semester is not None:
                out.add(c.semester)
    return sorted(out)


def collect_teachers(schedule: Mapping) -> List[str]:
    """Every teacher of the timetable, in order of first appearance."""
    seen = {}
    for day in available_days(schedule):
        for c in day_classes(schedule, day):
            if c.teacher:
                seen.setdefault(c.teacher, None)
    return list(seen)


def semester_teachers(schedule: Mapping, semester) -> List[str]:
    """Teachers with at least one class in `semester`, in order of first appearance."""
    key = semester_key(semester)
    seen = {}
    for day in available_days(schedule):
        for c in day_classes(schedule, day):
            if c.teacher and semester_key(c.semester) == key:
                seen.setdefault(c.teacher, None)
    return list(seen)


def semester_key(semester) -> Optional[str]:
    """
    Semesters are compared as strings: 1, 1.0 and "1" are the same semester.
    None never matches anything.
    """
    sem = to_semester(semester)
    return None if sem is None else str(sem)
