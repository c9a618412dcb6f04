"""
Lightweight event sink → JSONL at <events_log_dir>/events.jsonl
"""
from __future__ import annotations
import json
import time
from typing import Any, Dict

from ..core.config import settings

def record_event(kind: str, payload: Dict[str, Any]) -> None:
    log_dir = settings.events_log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    rec = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()),
        "kind": kind,
        "payload": payload,
    }
    with (log_dir / "events.jsonl").open("a", encoding="utf-8") as f:
        f.write(json.dumps(rec, ensure_ascii=False, default=str) + "\n")
