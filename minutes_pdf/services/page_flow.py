"""
Vertical flow across fixed-size pages.

A PageFlow belongs to exactly one document build. Every drawing unit (band,
table row, paragraph box) asks `ensure_space` first, so a unit is never split
across a page boundary.
"""
from __future__ import annotations
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.exceptions import RenderCancelled
from ..core.logger import get_logger
from ..utils.pdf import Surface

log = get_logger("page_flow")

PageListener = Callable[[int], None]


@dataclass
class PageCursor:
    y: float
    page_height: float
    top_margin: float
    bottom_margin: float
    page_number: int = 1

    @property
    def bottom(self) -> float:
        return self.page_height - self.bottom_margin

    @property
    def at_top(self) -> bool:
        return self.y <= self.top_margin


class PageFlow:
    def __init__(
        self,
        surface: Surface,
        top_margin: float,
        bottom_margin: float,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.surface = surface
        self.cursor = PageCursor(
            y=top_margin,
            page_height=surface.page_height,
            top_margin=top_margin,
            bottom_margin=bottom_margin,
        )
        self.cancel_event = cancel_event
        self._listeners: List[PageListener] = []

    @property
    def y(self) -> float:
        return self.cursor.y

    @property
    def usable_height(self) -> float:
        return self.cursor.bottom - self.cursor.top_margin

    def on_new_page(self, listener: PageListener) -> None:
        self._listeners.append(listener)

    def ensure_space(self, needed: float) -> float:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise RenderCancelled("Render cancelled by caller")
        cur = self.cursor
        if cur.y + needed > cur.bottom:
            if cur.at_top:
                # a fresh page is as good as it gets
                log.warning("Unit of %.1f exceeds usable page height %.1f", needed, self.usable_height)
                return cur.y
            self.surface.add_page()
            cur.page_number += 1
            cur.y = cur.top_margin
            for listener in self._listeners:
                listener(cur.page_number)
        return cur.y

    def advance(self, height: float) -> float:
        self.cursor.y += height
        return self.cursor.y
