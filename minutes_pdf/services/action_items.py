"""
Action items arrive in whatever shape the minutes generator produced:
a bare string, {task, assignee, dueDate}, {task, owner, due}, or something
worse. Everything is folded into CanonicalActionItem before rendering.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, List, Mapping, Sequence

NO_TASK = "-"
NO_OWNER = "Unassigned"
NO_DUE = "-"

TASK_KEYS = ("task", "action", "title")
OWNER_KEYS = ("assignee", "owner", "assignedTo", "responsible")
DUE_KEYS = ("dueDate", "due", "deadline")


@dataclass(frozen=True)
class CanonicalActionItem:
    task: str
    owner: str = NO_OWNER
    due: str = NO_DUE


def _probe(raw: Mapping[str, Any], keys: Sequence[str], default: str) -> str:
    for k in keys:
        v = raw.get(k)
        if v is not None:
            return str(v).strip() or default
    return default


def normalize_action_item(raw: Any) -> CanonicalActionItem:
    if isinstance(raw, CanonicalActionItem):
        raw = asdict(raw)
    if isinstance(raw, str):
        return CanonicalActionItem(task=raw.strip() or NO_TASK)
    if isinstance(raw, Mapping):
        return CanonicalActionItem(
            task=_probe(raw, TASK_KEYS, NO_TASK),
            owner=_probe(raw, OWNER_KEYS, NO_OWNER),
            due=_probe(raw, DUE_KEYS, NO_DUE),
        )
    if raw is None or isinstance(raw, (list, tuple, set)):
        return CanonicalActionItem(task=NO_TASK)
    return CanonicalActionItem(task=str(raw).strip() or NO_TASK)


def normalize_action_items(raw_items: Any) -> List[CanonicalActionItem]:
    """Normalize every entry; entries without a task are dropped."""
    if not isinstance(raw_items, (list, tuple)):
        return []
    items = [normalize_action_item(r) for r in raw_items]
    return [a for a in items if a.task != NO_TASK]
