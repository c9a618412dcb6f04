"""
Text wrapping and measurement with ReportLab font metrics.

`wrap_lines` is the single wrapping routine: the PDF surface draws exactly the
lines returned here, so a measured height is always the drawn height.
"""
from __future__ import annotations
from typing import List, Tuple

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
LEADING_RATIO = 1.2


def font_name(bold: bool = False) -> str:
    return BOLD_FONT if bold else REGULAR_FONT


def line_height(font_size: float) -> float:
    return font_size * LEADING_RATIO


def _break_long_word(word: str, font: str, font_size: float, max_width: float) -> List[str]:
    parts: List[str] = []
    current = ""
    for ch in word:
        if current and stringWidth(current + ch, font, font_size) > max_width:
            parts.append(current)
            current = ch
        else:
            current += ch
    if current:
        parts.append(current)
    return parts


def wrap_lines(text: str, max_width: float, font_size: float, bold: bool = False) -> List[str]:
    font = font_name(bold)
    max_width = max(1.0, max_width)
    lines: List[str] = []
    for para in (text or "").replace("\r\n", "\n").split("\n"):
        if not para.strip():
            lines.append("")
            continue
        for line in simpleSplit(para, font, font_size, max_width):
            # simpleSplit leaves a single overlong word on its own line
            if " " not in line and stringWidth(line, font, font_size) > max_width:
                lines.extend(_break_long_word(line, font, font_size, max_width))
            else:
                lines.append(line)
    return lines or [""]


def measure(text: str, max_width: float, font_size: float, bold: bool = False) -> float:
    """Height of `text` once wrapped at `max_width`."""
    return len(wrap_lines(text, max_width, font_size, bold)) * line_height(font_size)


def clamp_to_height(
    text: str,
    max_width: float,
    font_size: float,
    max_height: float,
    marker: str,
    bold: bool = False,
) -> Tuple[str, bool]:
    """
    Trim wrapped lines from the end until the text (plus `marker`) fits in
    `max_height`. Returns the text and whether anything was removed.
    """
    if measure(text, max_width, font_size, bold) <= max_height:
        return text, False
    lines = wrap_lines(text, max_width, font_size, bold)
    marker_lines = wrap_lines(marker, max_width, font_size, bold)
    keep = int(max_height // line_height(font_size)) - len(marker_lines)
    kept = lines[: max(0, keep)]
    return "\n".join(kept + marker_lines), True
