import threading

import pytest

from minutes_pdf.core.exceptions import RenderCancelled
from minutes_pdf.services.page_flow import PageFlow
from minutes_pdf.utils.pdf import RecordingSurface

def _flow(**kw):
    surface = RecordingSurface((200, 300))
    return surface, PageFlow(surface, top_margin=20, bottom_margin=20, **kw)

def test_fits_without_page_break():
    surface, flow = _flow()
    assert flow.ensure_space(100) == 20
    assert surface.page_count == 1

def test_overflow_adds_page_and_resets_cursor():
    surface, flow = _flow()
    seen = []
    flow.on_new_page(seen.append)
    flow.advance(250)
    assert flow.ensure_space(20) == 20
    assert surface.page_count == 2
    assert flow.cursor.page_number == 2
    assert seen == [2]
    assert [op.kind for op in surface.ops] == ["page"]

def test_exact_fit_stays_on_page():
    surface, flow = _flow()
    flow.advance(160)  # y=180, bottom=280
    assert flow.ensure_space(100) == 180
    assert surface.page_count == 1

def test_oversized_unit_on_fresh_page_does_not_loop():
    surface, flow = _flow()
    assert flow.ensure_space(1000) == 20
    assert surface.page_count == 1

def test_cancelled_flow_raises():
    ev = threading.Event()
    surface, flow = _flow(cancel_event=ev)
    flow.ensure_space(10)
    ev.set()
    with pytest.raises(RenderCancelled):
        flow.ensure_space(10)
