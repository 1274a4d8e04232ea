import asyncio

import pytest
import requests
from fastapi.testclient import TestClient

from grade_horaria.errors import ExportInProgressError, SchedulerTimeoutError, SchedulerUnavailableError
from grade_horaria.main import app
from grade_horaria.routers import generate
from grade_horaria.utils.export_guard import ExportGuard


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def snapshot(sample_timetable, sample_input) -> dict:
    return {"timetable": {"timetable": sample_timetable}, "inputData": sample_input}


def test_root(client) -> None:
    assert client.get("/").status_code == 200


def test_generate_timetable(client, monkeypatch, sample_input, sample_timetable) -> None:
    monkeypatch.setattr(generate, "generate_timetable", lambda body: {"timetable": sample_timetable})

    resp = client.post("/generate-timetable", json=sample_input)

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["timetable"]["timetable"]["Monday"][0]["course"] == "Calculus I"
    assert body["inputData"]["courses"][0]["code"] == "Calculus I"


def test_generate_rejects_missing_fields(client) -> None:
    resp = client.post("/generate-timetable", json={"semesters": ["1"]})

    assert resp.status_code == 422


@pytest.mark.parametrize(
    "error, status",
    [(SchedulerUnavailableError("Erro de conexão. Tente novamente."), 503), (SchedulerTimeoutError("lento"), 504)],
)
def test_generate_backend_failures(client, monkeypatch, sample_input, error, status) -> None:
    def fail(_body):
        raise error

    monkeypatch.setattr(generate, "generate_timetable", fail)

    resp = client.post("/generate-timetable", json=sample_input)

    assert resp.status_code == status
    assert resp.json() == {"error": error.message}


def test_semesters(client, snapshot) -> None:
    assert client.post("/timetable/semesters", json=snapshot).json() == [1, 2]


def test_weekly_view_end_to_end(client) -> None:
    snap = {"timetable": {"Monday": [
        {"time": "08h00-08h50", "course": "Calculus I", "teacher": "A. Smith", "semester": 1},
    ]}}

    view = client.post("/timetable/view/weekly", params={"semester": "1"}, json=snap).json()
    assert view["days"] == [{"key": "Monday", "label": "Segunda"}]
    cell = view["rows"][0]["cells"][0]["class"]
    assert cell["discipline"] == "Calculus I"
    assert cell["teacher"] == "A. Smith"

    view = client.post("/timetable/view/weekly", params={"semester": "2"}, json=snap).json()
    assert all(c["class"] is None for row in view["rows"] for c in row["cells"])


def test_weekly_view_empty_state(client) -> None:
    resp = client.post("/timetable/view/weekly", json={"timetable": {}})

    assert resp.status_code == 200
    assert resp.json()["empty"] is True


def test_daily_view(client, snapshot) -> None:
    view = client.post("/timetable/view/daily", params={"semester": "1", "day": "Tuesday"}, json=snapshot).json()

    assert view["day"]["label"] == "Terça"
    assert view["has_classes"] is True


def test_summary(client, snapshot) -> None:
    summary = client.post("/timetable/summary", json=snapshot).json()

    assert summary["course_count"] == 3
    assert summary["class_days"] == ["Monday", "Tuesday", "Wednesday"]


def test_export_pdf(client, snapshot) -> None:
    resp = client.post("/timetable/export/pdf", json=snapshot)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="horario-academico-' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_export_pdf_empty_timetable(client) -> None:
    resp = client.post("/timetable/export/pdf", json={"timetable": {}})

    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")


def test_export_pdf_requires_timetable(client) -> None:
    assert client.post("/timetable/export/pdf", json={}).status_code == 400


def test_export_xlsx(client, snapshot) -> None:
    resp = client.post("/timetable/export/xlsx", json=snapshot)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/vnd.openxmlformats")


def test_export_raw_json(client, snapshot, sample_timetable, sample_input) -> None:
    resp = client.post("/timetable/export/json", json=snapshot)
    assert resp.status_code == 200
    assert 'filename="grade-horaria.json"' in resp.headers["content-disposition"]
    assert resp.json() == sample_timetable

    resp = client.post("/timetable/export/input", json=snapshot)
    assert 'filename="dados-entrada.json"' in resp.headers["content-disposition"]
    assert resp.json() == sample_input


def test_export_guard_refuses_duplicate_and_releases() -> None:
    guard = ExportGuard()

    async def scenario():
        async with guard.hold("k"):
            assert guard.busy("k")
            with pytest.raises(ExportInProgressError):
                async with guard.hold("k"):
                    pass
            async with guard.hold("other"):
                pass

        with pytest.raises(RuntimeError):
            async with guard.hold("k"):
                raise RuntimeError("render failed")

        assert not guard.busy("k")

    asyncio.run(scenario())


def test_generate_unexpected_request_failure_is_json(client, monkeypatch, sample_input) -> None:
    def fake_post(*_args, **_kwargs):
        raise requests.TooManyRedirects("loop")

    monkeypatch.setattr(requests, "post", fake_post)

    resp = client.post("/generate-timetable", json=sample_input)

    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"error": "Ocorreu um erro inesperado ao gerar o horário."}
