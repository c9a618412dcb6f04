from reportlab.pdfbase.pdfmetrics import stringWidth

from minutes_pdf.services.text_metrics import clamp_to_height, line_height, measure, wrap_lines

def test_blank_text_is_one_line():
    assert wrap_lines("", 100, 10) == [""]
    assert measure("", 100, 10) == line_height(10)

def test_explicit_newlines_are_kept():
    assert wrap_lines("alpha\n\nbeta", 200, 10) == ["alpha", "", "beta"]

def test_long_text_wraps_within_width():
    text = "minutes of meeting " * 40
    lines = wrap_lines(text, 120, 9.5)
    assert len(lines) > 1
    assert all(stringWidth(l, "Helvetica", 9.5) <= 120 + 1e-6 for l in lines)
    assert measure(text, 120, 9.5) == len(lines) * line_height(9.5)

def test_overlong_word_is_broken():
    lines = wrap_lines("x" * 300, 50, 10)
    assert len(lines) > 1
    assert "".join(lines) == "x" * 300
    assert all(stringWidth(l, "Helvetica", 10) <= 50 + 1e-6 for l in lines)

def test_bold_measures_wider():
    text = "WWWW " * 30
    assert measure(text, 100, 10, bold=True) >= measure(text, 100, 10)

def test_measure_is_idempotent():
    text = "Decision to move the offsite to March, pending budget approval."
    assert measure(text, 90, 9.2) == measure(text, 90, 9.2)

def test_clamp_to_height_fits():
    text = "budget line item " * 100
    out, clamped = clamp_to_height(text, 100, 10, 60, "[cut]")
    assert clamped
    assert out.endswith("[cut]")
    assert measure(out, 100, 10) <= 60

def test_clamp_to_height_keeps_short_text():
    out, clamped = clamp_to_height("short", 100, 10, 60, "[cut]")
    assert out == "short"
    assert not clamped
