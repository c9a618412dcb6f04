"""
Logger factory shared by services and the CLI.
"""
from __future__ import annotations
import logging

from .config import settings

_ROOT = "minutes_pdf"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(settings.log_level.upper())
    return root


def get_logger(name: str) -> logging.Logger:
    _configure_root()
    return logging.getLogger(f"{_ROOT}.{name}")
