from __future__ import annotations
from typing import Any, List, Mapping, Optional, Tuple
from io import BytesIO
from datetime import datetime

import logging

from fastapi.concurrency import run_in_threadpool
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Alignment, Font, PatternFill

from grade_horaria.errors import DocumentCompositionError
from grade_horaria.utils.colors import HEADER_FILL, TIME_COLUMN_FILL, RGB, rgb_to_hex
from grade_horaria.utils.pdf_export import SemesterPage, layout_document

logger = logging.getLogger("grade_horaria.export")


def _fill(rgb: RGB) -> PatternFill:
    hex_ = rgb_to_hex(rgb)[1:]
    return PatternFill(start_color=hex_, end_color=hex_, fill_type="solid")


def _append_text(ws, values) -> None:
    """ws.append, but strings stay literal text (no "=..." formulas from data)."""
    ws.append(values)
    for cell in ws[ws.max_row]:
        if isinstance(cell.value, str):
            cell.data_type = "s"


def _sheet_title(page: SemesterPage, used: set) -> str:
    base = "Grade" if page.semester is None else f"Semestre {page.semester}"
    # Excel: 最多 31 字、不可重複
    title = base[:31]
    n = 2
    while title in used:
        suffix = f" ({n})"
        title = base[:31 - len(suffix)] + suffix
        n += 1
    used.add(title)
    return title


def timetable_to_xlsx_bytes(pages: List[SemesterPage]) -> bytes:
    """
    pages: output of layout_document, one sheet per page
    """
    wb = Workbook()
    wb.remove(wb.active)
    used = set()

    if not pages:
        ws = wb.create_sheet("Grade")
        ws.append(["No data"])

    for page in pages:
        ws = wb.create_sheet(_sheet_title(page, used))

        if page.empty:
            _append_text(ws, [page.empty_message])
            continue

        _append_text(ws, page.header)

        # header style
        header_font = Font(bold=True, color="FFFFFF")
        for col_idx, _h in enumerate(page.header, start=1):
            cell = ws.cell(row=1, column=col_idx)
            cell.font = header_font
            cell.fill = _fill(HEADER_FILL)
            cell.alignment = Alignment(horizontal="center", vertical="center")

        # data
        for row_idx, (row, fills) in enumerate(zip(page.rows, page.fills), start=2):
            _append_text(ws, row)
            time_cell = ws.cell(row=row_idx, column=1)
            time_cell.font = Font(bold=True)
            time_cell.fill = _fill(TIME_COLUMN_FILL)
            for col_idx, rgb in enumerate(fills, start=2):
                cell = ws.cell(row=row_idx, column=col_idx)
                cell.fill = _fill(rgb)
                cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

        # autosize columns (longest line of each cell)
        for col_idx, h in enumerate(page.header, start=1):
            max_len = len(str(h))
            for row_idx in range(2, ws.max_row + 1):
                v = ws.cell(row=row_idx, column=col_idx).value
                if v is None:
                    continue
                max_len = max(max_len, *(len(line) for line in str(v).split("\n")))
            ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)

        if page.legend:
            ws.append([])
            ws.append(["Legenda de Professores:"])
            ws.cell(row=ws.max_row, column=1).font = Font(bold=True)
            for item in page.legend:
                _append_text(ws, ["", item.teacher])
                ws.cell(row=ws.max_row, column=1).fill = _fill(item.color)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "horario-academico", ext: str = "xlsx") -> str:
    ts = datetime.now().strftime("%d-%m-%Y")
    return f"{prefix}-{ts}.{ext}"


async def compose_workbook(timetable: Any, input_data: Optional[Mapping] = None) -> Tuple[str, bytes]:
    try:
        pages = layout_document(timetable, input_data)
        data = await run_in_threadpool(timetable_to_xlsx_bytes, pages)
    except Exception as e:
        logger.exception("Error generating spreadsheet")
        raise DocumentCompositionError(f"Failed to generate spreadsheet: {e}") from e

    filename = make_filename()
    logger.info("Spreadsheet generated successfully: %s (%d sheets)", filename, len(pages))
    return filename, data
