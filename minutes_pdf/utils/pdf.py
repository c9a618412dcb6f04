"""
Drawing surfaces used by the report composer.

Coordinates are top-down layout units (points): `y=0` is the top edge of the
page. `ReportLabSurface` flips them onto the ReportLab canvas; the recording
surface keeps them as-is so tests can reason about page positions.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Dict, List, Protocol, Tuple

from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas

from ..services.text_metrics import font_name, line_height, wrap_lines


class Surface(Protocol):
    page_width: float
    page_height: float

    def rect(self, x: float, y: float, w: float, h: float, *, fill: str | None, stroke: str) -> None: ...

    def text(
        self, text: str, x: float, y: float, width: float, *,
        font_size: float, bold: bool = False, color: str = "#111827", align: str = "left",
    ) -> None: ...

    def add_page(self) -> None: ...

    def watermark(self, text: str, *, opacity: float, font_size: float = 42, angle: float = 30) -> None: ...

    def finish(self) -> bytes: ...

    def abort(self) -> None: ...


class ReportLabSurface:
    """Renders straight onto a ReportLab canvas backed by an in-memory buffer."""

    def __init__(self, pagesize: Tuple[float, float], title: str = "") -> None:
        self.page_width, self.page_height = pagesize
        self._buf = BytesIO()
        self._c = canvas.Canvas(self._buf, pagesize=pagesize)
        if title:
            self._c.setTitle(title)
        self.page_count = 1

    def rect(self, x, y, w, h, *, fill, stroke) -> None:
        c = self._c
        c.setStrokeColor(HexColor(stroke))
        c.setLineWidth(0.75)
        if fill:
            c.setFillColor(HexColor(fill))
        c.rect(x, self.page_height - y - h, w, h, stroke=1, fill=1 if fill else 0)

    def text(self, text, x, y, width, *, font_size, bold=False, color="#111827", align="left") -> None:
        c = self._c
        c.setFont(font_name(bold), font_size)
        c.setFillColor(HexColor(color))
        lead = line_height(font_size)
        # first baseline sits one font size below the top of the text box
        baseline = self.page_height - y - font_size
        for line in wrap_lines(text, width, font_size, bold):
            if align == "center":
                c.drawCentredString(x + width / 2, baseline, line)
            elif align == "right":
                c.drawRightString(x + width, baseline, line)
            else:
                c.drawString(x, baseline, line)
            baseline -= lead

    def add_page(self) -> None:
        self._c.showPage()
        self.page_count += 1

    def watermark(self, text, *, opacity, font_size=42, angle=30) -> None:
        c = self._c
        c.saveState()
        c.setFillColor(HexColor("#94a3b8"))
        c.setFillAlpha(opacity)
        c.setFont(font_name(True), font_size)
        c.translate(self.page_width / 2, self.page_height / 2)
        c.rotate(angle)
        c.drawCentredString(0, 0, text)
        c.restoreState()

    def finish(self) -> bytes:
        self._c.save()
        return self._buf.getvalue()

    def abort(self) -> None:
        self._buf.close()


@dataclass
class DrawOp:
    kind: str  # rect | text | page | watermark
    page: int
    args: Dict[str, Any] = field(default_factory=dict)


class RecordingSurface:
    """
    Keeps the ordered drawing instructions instead of producing PDF bytes.
    Text is wrapped with the same routine the PDF surface uses, so each
    text op carries the lines that would be drawn.
    """

    def __init__(self, pagesize: Tuple[float, float]) -> None:
        self.page_width, self.page_height = pagesize
        self.ops: List[DrawOp] = []
        self.page_count = 1
        self.finished = False
        self.aborted = False

    def _add(self, kind: str, **args: Any) -> None:
        self.ops.append(DrawOp(kind=kind, page=self.page_count, args=args))

    def rect(self, x, y, w, h, *, fill, stroke) -> None:
        self._add("rect", x=x, y=y, w=w, h=h, fill=fill, stroke=stroke)

    def text(self, text, x, y, width, *, font_size, bold=False, color="#111827", align="left") -> None:
        lines = wrap_lines(text, width, font_size, bold)
        self._add(
            "text", text=text, x=x, y=y, width=width, font_size=font_size, bold=bold,
            align=align, lines=lines, height=len(lines) * line_height(font_size),
        )

    def add_page(self) -> None:
        self.page_count += 1
        self._add("page")

    def watermark(self, text, *, opacity, font_size=42, angle=30) -> None:
        self._add("watermark", text=text, opacity=opacity, font_size=font_size, angle=angle)

    def finish(self) -> bytes:
        self.finished = True
        return b""

    def abort(self) -> None:
        self.aborted = True

    # helpers for inspection
    def texts(self, page: int | None = None) -> List[str]:
        return [op.args["text"] for op in self.ops if op.kind == "text" and (page is None or op.page == page)]

    def of_kind(self, kind: str) -> List[DrawOp]:
        return [op for op in self.ops if op.kind == kind]
