import os
import tempfile

import pytest

# keep test runs from writing ./logs
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="grade-horaria-logs-"))


@pytest.fixture
def sample_timetable() -> dict:
    return {
        "Monday": [
            {"time": "08h00-08h50", "course": "Calculus I", "teacher": "A. Smith", "room": "B-101", "semester": 1},
            {"horario": "13h30-14h20", "disciplina": "Física I", "professor": "B. Souza", "sala": "L-02", "periodo": 2},
        ],
        "Tuesday": [
            {"time": "07h00-07h50", "code": "ALG1", "teacher": "C. Lima", "semester": 1},
            {"time": "13h30-14h20", "course": "Programação", "teacher": "A. Smith", "semester": 2},
        ],
        "Wednesday": [],
    }


@pytest.fixture
def sample_input() -> dict:
    return {
        "semesters": ["1", "2"],
        "class_days": ["Monday", "Tuesday", "Wednesday"],
        "time_slots": ["07h00-07h50", "08h00-08h50", "13h30-14h20"],
        "courses": [
            {"code": "Calculus I", "workload": 60, "semester": 1, "professor": "A. Smith",
             "prerequisites": [], "failure_rate": 0.3, "type": "mandatory"},
            {"code": "ALG1", "workload": 60, "semester": 1, "professor": "C. Lima"},
            {"code": "Física I", "workload": 60, "semester": 2, "professor": "B. Souza",
             "prerequisites": ["Calculus I"]},
        ],
        "professor_preferences": [
            {"professor": "A. Smith", "preferred_days": ["Monday", "Tuesday"]},
        ],
    }
