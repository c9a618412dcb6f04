from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence

from .text_metrics import measure

DEFAULT_MIN_HEIGHT = 22.0
DEFAULT_FONT_SIZE = 9.2


@dataclass
class Cell:
    text: str
    width: float
    bold: bool = False
    align: str = "left"  # left | center | right
    fill: str | None = "#ffffff"
    stroke: str = "#cbd5e1"
    text_color: str = "#111827"
    min_height: float = DEFAULT_MIN_HEIGHT
    font_size: float = DEFAULT_FONT_SIZE
    padding_x: float = 5.0
    padding_y: float = 4.0

    @property
    def display_text(self) -> str:
        return self.text or "-"

    @property
    def text_width(self) -> float:
        return self.width - 2 * self.padding_x

    def height(self) -> float:
        measured = measure(self.display_text, self.text_width, self.font_size, self.bold)
        return max(self.min_height, measured + 2 * self.padding_y)


@dataclass
class RowLayout:
    row_height: float
    cell_heights: List[float] = field(default_factory=list)


def layout_row(cells: Sequence[Cell]) -> RowLayout:
    """Every cell of a row shares the height of its tallest cell."""
    if not cells:
        raise ValueError("layout_row needs at least one cell")
    heights = [c.height() for c in cells]
    return RowLayout(row_height=max(heights), cell_heights=heights)
