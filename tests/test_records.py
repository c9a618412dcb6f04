import pytest

from minutes_pdf.core.exceptions import InvalidRecord
from minutes_pdf.services.records import Visibility, load_meeting, load_minutes

def test_meeting_accepts_camel_case_contract(meeting_payload):
    meeting = load_meeting(meeting_payload)
    assert meeting.visibility == Visibility.PRIVATE
    assert meeting.is_private
    assert meeting.creator_id == "u1"
    assert meeting.date_time.year == 2026

def test_public_org_alias(meeting_payload):
    meeting_payload["visibility"] = "PUBLIC_ORG"
    assert load_meeting(meeting_payload).visibility == Visibility.ORG_WIDE

def test_org_users_alias(meeting_payload):
    meeting_payload["organization"] = {"name": "Acme", "users": [{"id": "u5", "name": "Eve"}]}
    assert load_meeting(meeting_payload).organization.members[0].name == "Eve"

def test_creator_id_falls_back_to_creator(meeting_payload):
    meeting_payload.pop("createdBy")
    assert load_meeting(meeting_payload).creator_id == "u1"

def test_participant_links(meeting_payload):
    meeting_payload["participants"] = [{"userId": "u2"}, {"userId": "u3", "user": {"id": "u3", "name": "Jo"}}]
    links = load_meeting(meeting_payload).participants
    assert [p.user_id for p in links] == ["u2", "u3"]
    assert links[0].user is None

def test_minutes_defensive_lists(minutes_payload):
    minutes_payload.update(decisions=["Go", None, "  ", 3], actionItems="oops", tags=None)
    minutes = load_minutes(minutes_payload)
    assert minutes.decisions == ["Go", "3"]
    assert minutes.action_items == []
    assert minutes.tags == []

def test_minutes_tags_are_stringified(minutes_payload):
    minutes_payload["tags"] = ["budget", None, 2026, "  "]
    assert load_minutes(minutes_payload).tags == ["budget", "2026"]

def test_missing_minutes_is_none():
    assert load_minutes(None) is None

def test_invalid_meeting_raises(meeting_payload):
    meeting_payload.pop("id")
    with pytest.raises(InvalidRecord):
        load_meeting(meeting_payload)

def test_invalid_minutes_raises(minutes_payload):
    minutes_payload["updatedAt"] = "not a date"
    with pytest.raises(InvalidRecord):
        load_minutes(minutes_payload)
