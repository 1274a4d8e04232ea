from grade_horaria.utils.timeslots import (
    build_time_axis, collect_semesters, collect_teachers, semester_key, semester_teachers, slot_sort_key,
)


def test_slot_sort_key_uses_first_number() -> None:
    assert slot_sort_key("07h00-07h50") == 7
    assert slot_sort_key("13h30-14h20") == 13
    assert slot_sort_key("manhã") == 0
    assert slot_sort_key("") == 0


def test_time_axis_sorted_by_leading_hour() -> None:
    schedule = {
        "Monday": [{"time": "13h30-14h20"}, {"time": "07h00-07h50"}],
        "Tuesday": [{"horario": "09h50-10h40"}, {"time": "07h00-07h50"}],
    }

    assert build_time_axis(schedule) == ["07h00-07h50", "09h50-10h40", "13h30-14h20"]


def test_time_axis_ties_keep_discovery_order() -> None:
    schedule = {
        "Monday": [{"time": "08h50-09h40"}, {"time": "sem horário"}],
        "Tuesday": [{"time": "08h00-08h50"}, {"time": "a definir"}],
    }

    axis = build_time_axis(schedule)

    assert axis == ["sem horário", "a definir", "08h50-09h40", "08h00-08h50"]
    assert build_time_axis(schedule) == axis


def test_time_axis_skips_empty_times_and_unavailable_days() -> None:
    schedule = {"Monday": [{"course": "X"}, {"time": "08h00"}], "Tuesday": []}

    assert build_time_axis(schedule) == ["08h00"]
    assert build_time_axis(schedule, ["Tuesday"]) == []


def test_collect_semesters_sorted_and_distinct(sample_timetable) -> None:
    assert collect_semesters(sample_timetable) == [1, 2]
    assert collect_semesters({}) == []


def test_collect_teachers_discovery_order(sample_timetable) -> None:
    assert collect_teachers(sample_timetable) == ["A. Smith", "B. Souza", "C. Lima"]


def test_semester_teachers(sample_timetable) -> None:
    assert semester_teachers(sample_timetable, 1) == ["A. Smith", "C. Lima"]
    assert semester_teachers(sample_timetable, "2") == ["B. Souza", "A. Smith"]


def test_semester_key_compares_as_text() -> None:
    assert semester_key(1) == semester_key("1") == semester_key(1.0)
    assert semester_key(None) is None
    assert semester_key("x") is None
