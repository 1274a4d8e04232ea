import json

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response, StreamingResponse

from grade_horaria.schemas.timetable import TimetableSnapshotIn
from grade_horaria.utils.excel_export import compose_workbook
from grade_horaria.utils.export_guard import export_guard, snapshot_key
from grade_horaria.utils.normalize import unwrap_timetable
from grade_horaria.utils.pdf_export import compose_document

import logging
logger = logging.getLogger("grade_horaria.export")


router = APIRouter(prefix="/timetable/export", tags=["Export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


def _require_timetable(body: TimetableSnapshotIn):
    if body.timetable is None:
        raise HTTPException(status_code=400, detail="timetable is required")


@router.post("/pdf")
async def export_pdf(body: TimetableSnapshotIn):
    _require_timetable(body)
    key = snapshot_key("pdf", body.timetable, body.input_data)

    async with export_guard.hold(key):
        filename, pdf = await compose_document(body.timetable, body.input_data)

    return StreamingResponse(
        iter([pdf]),
        media_type="application/pdf",
        headers=_attachment(filename),
    )


@router.post("/xlsx")
async def export_xlsx(body: TimetableSnapshotIn):
    _require_timetable(body)
    key = snapshot_key("xlsx", body.timetable, body.input_data)

    async with export_guard.hold(key):
        filename, xlsx_bytes = await compose_workbook(body.timetable, body.input_data)

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type=XLSX_MEDIA_TYPE,
        headers=_attachment(filename),
    )


@router.post("/json")
def export_timetable_json(body: TimetableSnapshotIn):
    """Timetable exactly as received from the scheduler (unwrapped)."""
    _require_timetable(body)
    data = json.dumps(unwrap_timetable(body.timetable), ensure_ascii=False, indent=2)
    return Response(
        content=data.encode("utf-8"),
        media_type="application/json; charset=utf-8",
        headers=_attachment("grade-horaria.json"),
    )


@router.post("/input")
def export_input_json(body: TimetableSnapshotIn):
    if body.input_data is None:
        raise HTTPException(status_code=400, detail="inputData is required")
    data = json.dumps(body.input_data, ensure_ascii=False, indent=2)
    return Response(
        content=data.encode("utf-8"),
        media_type="application/json; charset=utf-8",
        headers=_attachment("dados-entrada.json"),
    )
