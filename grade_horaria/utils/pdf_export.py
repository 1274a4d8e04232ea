from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO
from typing import Any, List, Mapping, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

import logging

from fastapi.concurrency import run_in_threadpool
from reportlab.graphics.shapes import Drawing, Rect
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from grade_horaria.errors import DocumentCompositionError
from grade_horaria.utils.colors import (
    EMPTY_FILL, HEADER_FILL, MUTED_TEXT, RGB, TIME_COLUMN_FILL, teacher_color,
)
from grade_horaria.utils.grid import day_display_name, project_grid
from grade_horaria.utils.normalize import CanonicalClass, available_days, to_semester, unwrap_timetable
from grade_horaria.utils.timeslots import (
    build_time_axis, collect_semesters, collect_teachers, semester_teachers,
)

logger = logging.getLogger("grade_horaria.export")

PAGE_SIZE = landscape(A4)
PAGE_WIDTH_MM = PAGE_SIZE[0] / mm
PAGE_HEIGHT_MM = PAGE_SIZE[1] / mm

MARGIN_MM = 15
HEADER_BLOCK_MM = 40        # title + date + gap before the table
BOTTOM_RESERVE_MM = 40      # legend + footer
ROW_HEIGHT_MM = 12
TIME_COLUMN_MM = 25
LEGEND_ITEM_MM = 60

BASE_FONT_SIZE = 8
MIN_FONT_SIZE = 6
BASE_PADDING_MM = 2
MIN_PADDING_MM = 1

PLACEHOLDER = "---"
TIME_LABEL = "Horário"
TITLE = "Horário Acadêmico"
LEGEND_TITLE = "Legenda de Professores:"
NO_CLASSES = "Nenhuma aula encontrada para o Semestre {semester}"
NO_SCHEDULE = "Nenhuma aula encontrada"


@dataclass
class LegendItem:
    teacher: str
    color: RGB


@dataclass
class SemesterPage:
    semester: Any
    header: List[str]
    rows: List[List[str]] = field(default_factory=list)
    # 每列每一天的底色，跟 rows[i][1:] 對齊
    fills: List[List[RGB]] = field(default_factory=list)
    legend: List[LegendItem] = field(default_factory=list)
    font_size: int = BASE_FONT_SIZE
    padding_mm: float = BASE_PADDING_MM

    @property
    def empty(self) -> bool:
        return not self.rows

    @property
    def title(self) -> str:
        if self.semester is None:
            return TITLE
        return f"{TITLE} - Semestre {self.semester}"

    @property
    def empty_message(self) -> str:
        if self.semester is None:
            return NO_SCHEDULE
        return NO_CLASSES.format(semester=self.semester)


def cell_text(c: CanonicalClass) -> str:
    return "\n".join(p for p in (c.discipline, c.teacher, c.room) if p)


def max_rows_per_page(page_height_mm: float = PAGE_HEIGHT_MM) -> int:
    available = page_height_mm - HEADER_BLOCK_MM - BOTTOM_RESERVE_MM
    return max(1, int(available // ROW_HEIGHT_MM))


def fit_rows(row_count: int, page_height_mm: float = PAGE_HEIGHT_MM) -> Tuple[int, float]:
    """
    (font_size, padding_mm) for a table of `row_count` rows.
    Too many rows -> smaller font and padding, never fewer rows.
    """
    max_rows = max_rows_per_page(page_height_mm)
    if row_count <= max_rows:
        return BASE_FONT_SIZE, BASE_PADDING_MM
    font_size = max(MIN_FONT_SIZE, BASE_FONT_SIZE - (row_count - max_rows) // 3)
    padding = max(MIN_PADDING_MM, BASE_PADDING_MM - 1)
    return font_size, padding


def legend_items_per_row(page_width_mm: float = PAGE_WIDTH_MM) -> int:
    return max(1, int((page_width_mm - 2 * MARGIN_MM) // LEGEND_ITEM_MM))


def legend_rows(items: Sequence[LegendItem], page_width_mm: float = PAGE_WIDTH_MM) -> List[List[LegendItem]]:
    per_row = legend_items_per_row(page_width_mm)
    return [list(items[i:i + per_row]) for i in range(0, len(items), per_row)]


def layout_semester_page(
    schedule: Mapping,
    semester,
    time_axis: Optional[List[str]] = None,
    days: Optional[List[str]] = None,
    all_teachers: Optional[List[str]] = None,
) -> SemesterPage:
    """Table rows, fills and legend of one semester page. Pure."""
    if days is None:
        days = available_days(schedule)
    if time_axis is None:
        time_axis = build_time_axis(schedule, days)
    if all_teachers is None:
        all_teachers = collect_teachers(schedule)

    page = SemesterPage(
        semester=semester,
        header=[TIME_LABEL] + [day_display_name(d) for d in days],
    )

    grid = project_grid(schedule, time_axis, semester, days)
    for slot in time_axis:
        row = [slot]
        fills = []
        for day in days:
            c = grid[day][slot]
            if c is None:
                row.append(PLACEHOLDER)
                fills.append(EMPTY_FILL)
            else:
                row.append(cell_text(c))
                fills.append(teacher_color(c.teacher, all_teachers))

        # 整列都沒課就不印
        if any(cell != PLACEHOLDER for cell in row[1:]):
            page.rows.append(row)
            page.fills.append(fills)

    if page.empty:
        return page

    page.font_size, page.padding_mm = fit_rows(len(page.rows))
    page.legend = [
        LegendItem(teacher=t, color=teacher_color(t, all_teachers))
        for t in semester_teachers(schedule, semester)
    ]
    return page


def document_semesters(schedule: Mapping, input_data: Optional[Mapping] = None) -> list:
    """
    One page per semester found in the timetable. Without any, fall back to
    the curriculum's semesters, and finally to a single untitled page.
    """
    semesters = collect_semesters(schedule)
    if semesters:
        return semesters

    declared = input_data.get("semesters") if isinstance(input_data, Mapping) else None
    if isinstance(declared, list):
        found = {to_semester(s) for s in declared} - {None}
        if found:
            return sorted(found)
    return [None]


def layout_document(timetable: Any, input_data: Optional[Mapping] = None) -> List[SemesterPage]:
    schedule = unwrap_timetable(timetable)
    days = available_days(schedule)
    axis = build_time_axis(schedule, days)
    teachers = collect_teachers(schedule)

    pages = [
        layout_semester_page(schedule, sem, axis, days, teachers)
        for sem in document_semesters(schedule, input_data)
    ]
    logger.debug(
        "PDF layout: days=%s semesters=%s slots=%s classes=%d",
        days, [p.semester for p in pages], axis[:5],
        sum(len(schedule[d]) for d in days),
    )
    return pages


# ===== reportlab rendering =====

def _rl(rgb: RGB) -> colors.Color:
    return colors.Color(rgb[0] / 255, rgb[1] / 255, rgb[2] / 255)


class NumberedCanvas(canvas.Canvas):
    """Defers showPage so every page can be stamped "Página i de N"."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for i, state in enumerate(self._saved_page_states, start=1):
            self.__dict__.update(state)
            self._draw_page_number(i, total)
            super().showPage()
        super().save()

    def _draw_page_number(self, page: int, total: int):
        width, _height = self._pagesize
        self.setFont("Helvetica", 8)
        self.setFillColor(_rl(MUTED_TEXT))
        self.drawCentredString(width / 2, 5 * mm, f"Página {page} de {total}")


def _styles():
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "GradeTitle", parent=base["Title"], fontSize=18, leading=22,
            textColor=_rl(HEADER_FILL), alignment=TA_CENTER, spaceAfter=4 * mm,
        ),
        "date": ParagraphStyle(
            "GradeDate", parent=base["Normal"], fontSize=10, leading=12,
            textColor=_rl(MUTED_TEXT), alignment=TA_CENTER,
        ),
        "empty": ParagraphStyle(
            "GradeEmpty", parent=base["Normal"], fontSize=12, leading=14,
            textColor=_rl(MUTED_TEXT), alignment=TA_CENTER,
        ),
        "legend_title": ParagraphStyle(
            "GradeLegendTitle", parent=base["Normal"], fontSize=8, leading=10,
        ),
        "legend": ParagraphStyle(
            "GradeLegend", parent=base["Normal"], fontSize=8, leading=10,
        ),
    }


def _cell_paragraph(text: str, font_size: int) -> Paragraph:
    style = ParagraphStyle(
        f"GradeCell{font_size}", fontName="Helvetica", fontSize=font_size,
        leading=font_size * 1.2, alignment=TA_CENTER,
    )
    return Paragraph("<br/>".join(escape(part) for part in text.split("\n")), style)


def _grid_table(page: SemesterPage, width: float) -> Table:
    n_days = len(page.header) - 1
    day_width = (width - TIME_COLUMN_MM * mm) / max(1, n_days)
    col_widths = [TIME_COLUMN_MM * mm] + [day_width] * n_days

    data = [page.header]
    for row in page.rows:
        data.append([row[0]] + [_cell_paragraph(cell, page.font_size) for cell in row[1:]])

    pad = page.padding_mm * mm
    style = [
        ("GRID", (0, 0), (-1, -1), 0.1 * mm, colors.Color(0.6, 0.6, 0.6)),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), page.font_size),
        ("LEFTPADDING", (0, 0), (-1, -1), pad),
        ("RIGHTPADDING", (0, 0), (-1, -1), pad),
        ("TOPPADDING", (0, 0), (-1, -1), pad),
        ("BOTTOMPADDING", (0, 0), (-1, -1), pad),
        # header
        ("BACKGROUND", (0, 0), (-1, 0), _rl(HEADER_FILL)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), page.font_size + 1),
        # time column
        ("BACKGROUND", (0, 1), (0, -1), _rl(TIME_COLUMN_FILL)),
        ("FONTNAME", (0, 1), (0, -1), "Helvetica-Bold"),
    ]
    for r, fills in enumerate(page.fills, start=1):
        for c, rgb in enumerate(fills, start=1):
            style.append(("BACKGROUND", (c, r), (c, r), _rl(rgb)))

    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle(style))
    return table


def _swatch(rgb: RGB) -> Drawing:
    d = Drawing(3 * mm, 3 * mm)
    d.add(Rect(0, 0, 3 * mm, 3 * mm, fillColor=_rl(rgb), strokeColor=None))
    return d


def _legend_table(page: SemesterPage, styles) -> Table:
    per_row = legend_items_per_row()
    data = []
    for items in legend_rows(page.legend):
        cells = []
        for item in items:
            cells += [_swatch(item.color), Paragraph(escape(item.teacher), styles["legend"])]
        cells += ["", ""] * (per_row - len(items))
        data.append(cells)

    table = Table(data, colWidths=[5 * mm, (LEGEND_ITEM_MM - 5) * mm] * per_row, hAlign="LEFT")
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ("TOPPADDING", (0, 0), (-1, -1), 1),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
    ]))
    return table


def render_pdf(
    pages: List[SemesterPage],
    generated_at: Optional[datetime] = None,
    compress: bool = True,
) -> bytes:
    generated_at = generated_at or datetime.now()
    styles = _styles()

    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=PAGE_SIZE,
        leftMargin=MARGIN_MM * mm,
        rightMargin=MARGIN_MM * mm,
        topMargin=10 * mm,
        bottomMargin=12 * mm,
        title=TITLE,
        pageCompression=int(compress),
    )

    story = []
    for i, page in enumerate(pages):
        if i > 0:
            story.append(PageBreak())
        story.append(Paragraph(escape(page.title), styles["title"]))
        story.append(Paragraph(f"Gerado em: {generated_at.strftime('%d/%m/%Y')}", styles["date"]))
        story.append(Spacer(1, 8 * mm))

        if page.empty:
            story.append(Spacer(1, 40 * mm))
            story.append(Paragraph(escape(page.empty_message), styles["empty"]))
            continue

        story.append(_grid_table(page, doc.width))
        story.append(Spacer(1, 8 * mm))
        story.append(Paragraph(LEGEND_TITLE, styles["legend_title"]))
        if page.legend:
            story.append(Spacer(1, 2 * mm))
            story.append(_legend_table(page, styles))

    doc.build(story, canvasmaker=NumberedCanvas)
    return buf.getvalue()


def make_pdf_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"horario-academico-{now.strftime('%d-%m-%Y')}.pdf"


async def compose_document(
    timetable: Any,
    input_data: Optional[Mapping] = None,
    now: Optional[datetime] = None,
) -> Tuple[str, bytes]:
    """
    Build the printable timetable: one landscape page per semester.
    Rendering runs in the thread pool; any failure comes back as a single
    DocumentCompositionError and no partial file is returned.
    """
    now = now or datetime.now()
    try:
        pages = layout_document(timetable, input_data)
        pdf = await run_in_threadpool(render_pdf, pages, now)
    except Exception as e:
        logger.exception("Error generating PDF")
        raise DocumentCompositionError(f"Failed to generate PDF: {e}") from e

    filename = make_pdf_filename(now)
    logger.info("PDF generated successfully: %s (%d semester pages)", filename, len(pages))
    return filename, pdf
