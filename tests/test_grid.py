from grade_horaria.utils.grid import day_display_name, occupied_cells, project_grid
from grade_horaria.utils.timeslots import build_time_axis


def test_single_class_round_trip() -> None:
    schedule = {
        "Monday": [{"time": "08h00-08h50", "course": "Calculus I", "teacher": "A. Smith", "semester": 1}],
    }
    axis = ["07h00-07h50", "08h00-08h50", "09h00-09h50"]

    grid = project_grid(schedule, axis, 1)

    assert grid["Monday"]["08h00-08h50"].discipline == "Calculus I"
    assert grid["Monday"]["08h00-08h50"].teacher == "A. Smith"
    assert grid["Monday"]["07h00-07h50"] is None
    assert grid["Monday"]["09h00-09h50"] is None


def test_end_to_end_semester_filter() -> None:
    schedule = {"Monday": [{"time": "08h00-08h50", "course": "Calculus I", "teacher": "A. Smith", "semester": 1}]}
    axis = build_time_axis(schedule)

    grid_1 = project_grid(schedule, axis, 1)
    grid_2 = project_grid(schedule, axis, 2)

    assert occupied_cells(grid_1) == 1
    assert grid_1["Monday"]["08h00-08h50"].discipline == "Calculus I"
    assert occupied_cells(grid_2) == 0


def test_semester_filter_compares_as_text() -> None:
    schedule = {"Monday": [{"time": "08h00", "course": "X", "periodo": "1"}]}

    assert project_grid(schedule, ["08h00"], "1")["Monday"]["08h00"].discipline == "X"
    assert project_grid(schedule, ["08h00"], 1)["Monday"]["08h00"].discipline == "X"
    assert project_grid(schedule, ["08h00"], None)["Monday"]["08h00"] is None


def test_first_match_wins() -> None:
    schedule = {
        "Monday": [
            {"time": "08h00", "course": "First", "semester": 1},
            {"time": "08h00", "course": "Second", "semester": 1},
        ],
    }

    grid = project_grid(schedule, ["08h00"], 1)

    assert grid["Monday"]["08h00"].discipline == "First"


def test_class_with_empty_fields_is_not_the_empty_marker() -> None:
    schedule = {"Monday": [{"time": "08h00", "semester": 1}]}

    cell = project_grid(schedule, ["08h00"], 1)["Monday"]["08h00"]

    assert cell is not None
    assert cell.discipline == ""


def test_only_available_days_are_projected(sample_timetable) -> None:
    grid = project_grid(sample_timetable, build_time_axis(sample_timetable), 1)

    assert list(grid) == ["Monday", "Tuesday"]
    assert grid["Tuesday"]["07h00-07h50"].discipline == "ALG1"
    assert grid["Tuesday"]["13h30-14h20"] is None


def test_day_display_name() -> None:
    assert day_display_name("Monday") == "Segunda"
    assert day_display_name("terca") == "Terça"
    assert day_display_name("Sábado") == "Sábado"
