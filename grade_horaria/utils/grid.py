from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Optional

import logging

from grade_horaria.utils.normalize import CanonicalClass, available_days, day_classes
from grade_horaria.utils.timeslots import semester_key

logger = logging.getLogger("grade_horaria.grid")

# day -> slot -> class (None = 沒課)
Grid = Dict[str, Dict[str, Optional[CanonicalClass]]]

DAY_NAMES = {
    "monday": "Segunda",
    "tuesday": "Terça",
    "wednesday": "Quarta",
    "thursday": "Quinta",
    "friday": "Sexta",
    "segunda": "Segunda",
    "terca": "Terça",
    "quarta": "Quarta",
    "quinta": "Quinta",
    "sexta": "Sexta",
}


def day_display_name(day: str) -> str:
    return DAY_NAMES.get((day or "").lower(), day)


def filter_semester(classes: Iterable[CanonicalClass], semester) -> List[CanonicalClass]:
    key = semester_key(semester)
    if key is None:
        return []
    return [c for c in classes if semester_key(c.semester) == key]


def project_day(
    classes: List[CanonicalClass],
    time_axis: List[str],
    day: str = "",
) -> Dict[str, Optional[CanonicalClass]]:
    """
    One row of the grid: for each slot, the first class at that time.
    Later classes at the same slot are dropped.
    """
    by_time: Dict[str, CanonicalClass] = {}
    for c in classes:
        if c.time in by_time:
            logger.debug(
                "Duplicate class at %s %s: keeping %r, dropping %r",
                day, c.time, by_time[c.time].discipline, c.discipline,
            )
            continue
        by_time[c.time] = c

    return {slot: by_time.get(slot) for slot in time_axis}


def project_grid(
    schedule: Mapping,
    time_axis: List[str],
    semester,
    days: Optional[List[str]] = None,
) -> Grid:
    """
    Grid[day][slot] for one semester over the available days
    (or the given `days`).
    """
    if days is None:
        days = available_days(schedule)

    grid: Grid = {}
    for day in days:
        classes = filter_semester(day_classes(schedule, day), semester)
        grid[day] = project_day(classes, time_axis, day)
    return grid


def occupied_cells(grid: Grid) -> int:
    return sum(1 for row in grid.values() for c in row.values() if c is not None)
