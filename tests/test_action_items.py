import pytest

from minutes_pdf.services.action_items import CanonicalActionItem, normalize_action_item, normalize_action_items

SHAPES = [
    "Finalize budget",
    {"task": "Book venue", "assignee": "Ann", "dueDate": "2026-04-01"},
    {"task": "Draft memo", "owner": "Bob", "due": "Friday"},
    {"action": "Call vendor", "assignedTo": "Cy", "deadline": "next week"},
    {"title": "Review contract", "responsible": "Di"},
    {"task": "  ", "owner": " "},
    {"unexpected": True},
    None,
    42,
    ["nested", "list"],
]

def test_bare_string_gets_defaults():
    assert normalize_action_item("Finalize budget") == CanonicalActionItem("Finalize budget", "Unassigned", "-")

def test_assignee_due_date_shape():
    item = normalize_action_item({"task": "Book venue", "assignee": "Ann", "dueDate": "2026-04-01"})
    assert item == CanonicalActionItem("Book venue", "Ann", "2026-04-01")

def test_owner_due_shape():
    item = normalize_action_item({"task": "Draft memo", "owner": "Bob", "due": "Friday"})
    assert item == CanonicalActionItem("Draft memo", "Bob", "Friday")

def test_alternate_keys_and_precedence():
    item = normalize_action_item({"action": "Call vendor", "title": "ignored", "assignee": None,
                                  "owner": "Cy", "deadline": "soon"})
    assert item == CanonicalActionItem("Call vendor", "Cy", "soon")

def test_blank_fields_fall_back_to_defaults():
    item = normalize_action_item({"task": "Ship", "assignee": "", "dueDate": "   "})
    assert item == CanonicalActionItem("Ship", "Unassigned", "-")

def test_non_string_values_are_stringified():
    item = normalize_action_item({"task": "Pay invoice", "owner": 7, "due": 2026})
    assert item == CanonicalActionItem("Pay invoice", "7", "2026")

@pytest.mark.parametrize("raw", [None, {"unexpected": True}, ["a"], {"task": None}])
def test_malformed_items_degrade(raw):
    assert normalize_action_item(raw).task == "-"

@pytest.mark.parametrize("raw", SHAPES)
def test_normalize_is_idempotent(raw):
    once = normalize_action_item(raw)
    assert normalize_action_item(once) == once

def test_list_drops_taskless_items():
    items = normalize_action_items(SHAPES)
    assert [a.task for a in items] == [
        "Finalize budget", "Book venue", "Draft memo", "Call vendor", "Review contract", "42",
    ]
    assert all(a.owner and a.due for a in items)

def test_non_list_input_is_empty():
    assert normalize_action_items("Finalize budget") == []
    assert normalize_action_items(None) == []
