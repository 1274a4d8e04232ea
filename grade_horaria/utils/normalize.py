from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from typing import Any, Callable, Optional, Union

Semester = Union[int, float]


@dataclass(frozen=True)
class CanonicalClass:
    time: str = ""
    discipline: str = ""
    teacher: str = ""
    room: str = ""
    semester: Optional[Semester] = None

    def to_dict(self) -> dict:
        return asdict(self)


def _field(name: str) -> Callable[[Mapping], Any]:
    return lambda raw: raw.get(name)


# 每個欄位的別名，依優先順序（英文欄位優先，再來葡文）
TIME_ACCESSORS = (_field("time"), _field("horario"))
DISCIPLINE_ACCESSORS = (
    _field("course"),
    _field("discipline"),
    _field("disciplina"),
    _field("code"),
    _field("codigo"),
)
TEACHER_ACCESSORS = (_field("teacher"), _field("professor"))
ROOM_ACCESSORS = (_field("room"), _field("sala"))
SEMESTER_ACCESSORS = (_field("semester"), _field("periodo"))


def _to_text(v) -> str:
    if v is None or isinstance(v, bool):
        return ""
    if isinstance(v, (Mapping, list, tuple, set)):
        return ""
    return str(v).strip()


def to_semester(v) -> Optional[Semester]:
    """
    1 -> 1, 2.0 -> 2, "3" -> 3, "1.5" -> 1.5
    anything else (bool, "", "abc", nan) -> None
    """
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        if v != v or v in (float("inf"), float("-inf")):
            return None
        return int(v) if v.is_integer() else v
    if isinstance(v, str):
        s = v.strip()
        if not s:
            return None
        try:
            return int(s)
        except ValueError:
            pass
        try:
            return to_semester(float(s))
        except ValueError:
            return None
    return None


def _first_text(raw: Mapping, accessors) -> str:
    for get in accessors:
        s = _to_text(get(raw))
        if s:
            return s
    return ""


def _first_semester(raw: Mapping) -> Optional[Semester]:
    for get in SEMESTER_ACCESSORS:
        sem = to_semester(get(raw))
        if sem is not None:
            return sem
    return None


def normalize_class(raw: Any) -> CanonicalClass:
    """
    Map one backend entry onto CanonicalClass.
    Never raises: missing or malformed fields become "" / None,
    and a non-mapping entry becomes an all-empty class.
    """
    if not isinstance(raw, Mapping):
        return CanonicalClass()

    return CanonicalClass(
        time=_first_text(raw, TIME_ACCESSORS),
        discipline=_first_text(raw, DISCIPLINE_ACCESSORS),
        teacher=_first_text(raw, TEACHER_ACCESSORS),
        room=_first_text(raw, ROOM_ACCESSORS),
        semester=_first_semester(raw),
    )


def unwrap_timetable(payload: Any) -> dict:
    """
    {"timetable": {...}} -> {...}  (one level only)
    non-dict payload -> {}
    """
    if isinstance(payload, Mapping):
        inner = payload.get("timetable")
        if isinstance(inner, Mapping):
            return dict(inner)
        return dict(payload)
    return {}


def available_days(schedule: Mapping) -> list[str]:
    # 只有非空的 list 才算有課的一天，順序跟 payload 一樣
    if not isinstance(schedule, Mapping):
        return []
    return [day for day, classes in schedule.items() if isinstance(classes, list) and len(classes) > 0]


def day_classes(schedule: Mapping, day: str) -> list[CanonicalClass]:
    classes = schedule.get(day) if isinstance(schedule, Mapping) else None
    if not isinstance(classes, list):
        return []
    return [normalize_class(c) for c in classes]
