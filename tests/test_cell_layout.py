import pytest

from minutes_pdf.services.cell_layout import Cell, layout_row
from minutes_pdf.services.text_metrics import measure

def test_short_row_uses_min_height():
    layout = layout_row([Cell("a", 100), Cell("b", 100)])
    assert layout.row_height == 22
    assert layout.cell_heights == [22, 22]

def test_row_height_covers_tallest_cell():
    long_text = "the committee agreed to revisit the vendor shortlist " * 6
    cells = [Cell("1", 36), Cell(long_text, 120), Cell("short", 200, min_height=30)]
    layout = layout_row(cells)
    assert layout.row_height == max(layout.cell_heights)
    for cell in cells:
        assert layout.row_height >= cell.min_height
        assert layout.row_height >= measure(cell.display_text, cell.text_width, cell.font_size) + 2 * cell.padding_y

def test_empty_cell_measures_placeholder():
    assert Cell("", 80).display_text == "-"

def test_empty_row_rejected():
    with pytest.raises(ValueError):
        layout_row([])
