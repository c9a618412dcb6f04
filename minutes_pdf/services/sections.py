"""
Section-level drawing primitives: banded titles, cell rows, paragraph blocks
and grid tables. Every primitive reserves its height through PageFlow before
drawing.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

from ..core.config import settings
from ..core.logger import get_logger
from ..obs.events import record_event
from ..utils.pdf import Surface
from .cell_layout import Cell, RowLayout, layout_row
from .page_flow import PageFlow
from .text_metrics import clamp_to_height, measure

log = get_logger("sections")

BAND_HEIGHT = 22.0
BAND_ALLOWANCE = 60.0
HEADER_HEIGHT = 24.0
ROW_MIN_HEIGHT = 24.0
PARAGRAPH_FONT_SIZE = 9.5
PARAGRAPH_MIN_HEIGHT = 34.0
PARAGRAPH_PAD_X = 7.0
PARAGRAPH_PAD_Y = 6.0
TRUNCATION_MARKER = "\n\n[Content truncated for PDF layout]"
CELL_CLAMP_MARKER = "[...]"


@dataclass
class Column:
    label: str
    width: float


def header_cell(label: str, width: float) -> Cell:
    return Cell(
        text=label, width=width, bold=True, fill="#e2e8f0", stroke="#cbd5e1",
        text_color="#0f172a", min_height=HEADER_HEIGHT, font_size=10, padding_x=8, padding_y=6,
    )


def body_cell(value: str, width: float) -> Cell:
    return Cell(
        text=value, width=width, fill=None, stroke="#e5e7eb",
        min_height=ROW_MIN_HEIGHT, font_size=10, padding_x=8, padding_y=6,
    )


class SectionRenderer:
    def __init__(self, surface: Surface, flow: PageFlow, margin: float) -> None:
        self.surface = surface
        self.flow = flow
        self.left = margin
        self.total_width = surface.page_width - 2 * margin
        self.truncated: List[str] = []

    def band(self, title: str, allowance: float = BAND_ALLOWANCE) -> None:
        """Shaded title band; `allowance` keeps it on the same page as its first content."""
        y = self.flow.ensure_space(BAND_HEIGHT + allowance)
        self.surface.rect(self.left, y, self.total_width, BAND_HEIGHT, fill="#e5e7eb", stroke="#94a3b8")
        self.surface.text(
            title, self.left, y + 6, self.total_width,
            font_size=10.5, bold=True, color="#334155", align="center",
        )
        self.flow.advance(BAND_HEIGHT)

    def _fit_cell(self, cell: Cell) -> Cell:
        limit = self.flow.usable_height - 2 * cell.padding_y
        text, clamped = clamp_to_height(
            cell.display_text, cell.text_width, cell.font_size, limit, CELL_CLAMP_MARKER, cell.bold,
        )
        return replace(cell, text=text) if clamped else cell

    def cell_row(self, cells: Sequence[Cell]) -> RowLayout:
        cells = [self._fit_cell(c) for c in cells]
        layout = layout_row(cells)
        y = self.flow.ensure_space(layout.row_height)
        x = self.left
        for cell in cells:
            self.surface.rect(x, y, cell.width, layout.row_height, fill=cell.fill, stroke=cell.stroke)
            self.surface.text(
                cell.display_text, x + cell.padding_x, y + cell.padding_y, cell.text_width,
                font_size=cell.font_size, bold=cell.bold, color=cell.text_color, align=cell.align,
            )
            x += cell.width
        self.flow.advance(layout.row_height)
        return layout

    def paragraph(self, title: str, body: str) -> bool:
        """Titled free-text box. Returns True when the body had to be cut."""
        text = (body or "").strip() or "-"
        truncated = False
        limit = settings.paragraph_char_limit
        if len(text) > limit:
            text = text[:limit].rstrip() + TRUNCATION_MARKER
            truncated = True

        text_width = self.total_width - 2 * PARAGRAPH_PAD_X
        max_text = self.flow.usable_height - BAND_HEIGHT - 2 * PARAGRAPH_PAD_Y
        text, clamped = clamp_to_height(text, text_width, PARAGRAPH_FONT_SIZE, max_text, TRUNCATION_MARKER)
        truncated = truncated or clamped
        if truncated:
            self.truncated.append(title)
            log.info("Truncated %r from %d chars for PDF layout", title, len(body or ""))
            record_event("pdf_truncate", {"section": title, "chars": len(body or "")})

        box_height = max(
            PARAGRAPH_MIN_HEIGHT,
            measure(text, text_width, PARAGRAPH_FONT_SIZE) + 2 * PARAGRAPH_PAD_Y,
        )
        self.band(title, allowance=box_height)
        y = self.flow.ensure_space(box_height)
        self.surface.rect(self.left, y, self.total_width, box_height, fill="#ffffff", stroke="#cbd5e1")
        self.surface.text(
            text, self.left + PARAGRAPH_PAD_X, y + PARAGRAPH_PAD_Y, text_width,
            font_size=PARAGRAPH_FONT_SIZE,
        )
        self.flow.advance(box_height)
        return truncated

    def table(
        self,
        title: str,
        columns: Sequence[Column],
        rows: Sequence[Sequence[str]],
        empty_row: Sequence[Tuple[str, float]],
    ) -> int:
        """
        Band, header and one line per row. With no rows a single sentinel row
        (`empty_row`, pairs of text and width) is drawn instead. Returns the
        number of data rows drawn, the sentinel included.
        """
        header = [header_cell(c.label, c.width) for c in columns]
        if rows:
            body = [[body_cell(v, c.width) for v, c in zip(row, columns)] for row in rows]
        else:
            body = [[body_cell(text, width) for text, width in empty_row]]

        header_h = layout_row(header).row_height
        first_h = layout_row([self._fit_cell(c) for c in body[0]]).row_height
        first_h = min(first_h, self.flow.usable_height - BAND_HEIGHT - header_h)
        self.band(title, allowance=header_h + first_h)
        self.cell_row(header)
        for cells in body:
            self.cell_row(cells)
        return len(body)
