import copy

import pytest

from minutes_pdf.core.config import settings
from minutes_pdf.services.records import load_meeting, load_minutes

BOARD_REVIEW = {
    "id": "meeting-0001-abcdef",
    "title": "Board Review",
    "description": None,
    "visibility": "PRIVATE",
    "dateTime": "2026-03-05T14:30:00",
    "createdBy": "u1",
    "notes": "Participants: Jane Doe (ADMIN), John Smith",
    "organization": {"name": "Acme", "category": "Finance", "members": []},
    "creator": {"id": "u1", "name": "Carol Creator", "email": "carol@acme.test", "role": "HEAD"},
    "participants": [],
}

BOARD_REVIEW_MINUTES = {
    "id": "minutes-0001-xyz",
    "mom": "The board reviewed the quarterly budget.",
    "decisions": [],
    "actionItems": ["Finalize budget"],
    "tags": ["budget", "board"],
    "isSensitive": False,
    "sensitivityReason": None,
    "updatedAt": "2026-03-05T16:00:00",
}


@pytest.fixture(autouse=True)
def _events_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "events_log_dir", tmp_path / "logs")


@pytest.fixture
def meeting_payload():
    return copy.deepcopy(BOARD_REVIEW)


@pytest.fixture
def minutes_payload():
    return copy.deepcopy(BOARD_REVIEW_MINUTES)


@pytest.fixture
def make_meeting(meeting_payload):
    def _make(**overrides):
        data = copy.deepcopy(meeting_payload)
        data.update(overrides)
        return load_meeting(data)
    return _make


@pytest.fixture
def make_minutes(minutes_payload):
    def _make(**overrides):
        data = copy.deepcopy(minutes_payload)
        data.update(overrides)
        return load_minutes(data)
    return _make
