"""
Participant roster reconciliation.

Three sources disagree about who attended a meeting:
- the meeting creator (always present, always the Organizer),
- relational participant links (may be empty, may point at deleted users),
- a "Participants:" / "Attendees:" line in the free-text notes.

The roster is an ordered map keyed by a normalized identity. Text extraction
only runs when the relational sources produced at most one entry, and it can
fill blanks on an existing entry but never overwrite it.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .records import MeetingRecord, UserRecord

MISSING = "-"
ORGANIZER = "Organizer"
PARTICIPANT = "Participant"
TEXT_KEY_PREFIX = "text-"

PARTICIPANTS_LINE_RE = re.compile(r"(?:Participants|Attendees)\s*:\s*(.+)", re.I)
PAREN_RE = re.compile(r"\([^)]*\)")
NON_ALNUM_RE = re.compile(r"[^a-z0-9]+", re.I)
TRAILING_ROLE_RE = re.compile(r"\(([^)]+)\)\s*$")


@dataclass
class ParticipantRow:
    name: str
    email: str = MISSING
    role: str = MISSING
    remarks: str = PARTICIPANT


def normalize_name_key(value: str) -> str:
    """'Jane  Doe (ADMIN)' and 'jane doe' share the key 'jane doe'."""
    text = PAREN_RE.sub("", value or "")
    return NON_ALNUM_RE.sub(" ", text).strip().lower()


def split_participant_label(raw: str) -> Tuple[str, str]:
    """Split 'Name (Role)' into ('Name', 'Role'); a bare name has role ''."""
    text = (raw or "").strip()
    m = TRAILING_ROLE_RE.search(text)
    role = m.group(1).strip() if m else ""
    name = TRAILING_ROLE_RE.sub("", text).strip() or text or MISSING
    return name, role


def extract_participants_from_text(text: str) -> List[str]:
    m = PARTICIPANTS_LINE_RE.search(text or "")
    if not m:
        return []
    return [s.strip() for s in m.group(1).split(",") if s.strip()]


def _or_missing(value: Optional[str]) -> str:
    return (value or "").strip() or MISSING


def _row_from_user(user: UserRecord, remarks: str) -> ParticipantRow:
    return ParticipantRow(
        name=_or_missing(user.name),
        email=_or_missing(user.email),
        role=_or_missing(user.role),
        remarks=remarks,
    )


def notes_participant_labels(meeting: MeetingRecord) -> List[str]:
    """Names from the notes line, or the description line when notes have none."""
    return (
        extract_participants_from_text(meeting.notes or "")
        or extract_participants_from_text(meeting.description or "")
    )


class ParticipantReconciler:
    def __init__(self, meeting: MeetingRecord) -> None:
        self.meeting = meeting
        members = meeting.organization.members
        self._members_by_id: Dict[str, UserRecord] = {str(u.id): u for u in members}
        self._members_by_name: Dict[str, UserRecord] = {}
        for u in members:
            key = normalize_name_key(u.name or u.email or "")
            if key and key not in self._members_by_name:
                self._members_by_name[key] = u
        # insertion-ordered; creator goes in first
        self._roster: Dict[str, ParticipantRow] = {}

    def _find_by_name(self, key: str) -> Optional[str]:
        for roster_key, row in self._roster.items():
            if normalize_name_key(row.name) == key:
                return roster_key
        return None

    def _seed_creator(self) -> None:
        creator = self.meeting.creator
        if creator is not None:
            self._roster[f"uid-{creator.id}"] = _row_from_user(creator, ORGANIZER)

    def _merge_links(self) -> None:
        for link in self.meeting.participants:
            roster_key = f"uid-{link.user_id}"
            existing = self._roster.get(roster_key)
            remarks = existing.remarks if existing else PARTICIPANT
            user = link.user
            if user is None:
                member = self._members_by_id.get(str(link.user_id))
                if member is not None:
                    row = _row_from_user(member, remarks)
                else:
                    row = ParticipantRow(name=_or_missing(link.user_id), remarks=remarks)
            else:
                row = _row_from_user(user, remarks)
            self._roster[roster_key] = row

    def _merge_text(self) -> None:
        for i, label in enumerate(notes_participant_labels(self.meeting)):
            name, role_from_label = split_participant_label(label)
            key = normalize_name_key(name)
            member = self._members_by_name.get(key)
            existing_key = self._find_by_name(key) if key else None
            if existing_key is not None:
                row = self._roster[existing_key]
                if row.email == MISSING and member is not None:
                    row.email = _or_missing(member.email)
                if row.role == MISSING:
                    row.role = _or_missing((member.role if member else None) or role_from_label)
                continue
            self._roster[f"{TEXT_KEY_PREFIX}{i}-{key or label.lower()}"] = ParticipantRow(
                name=member.name if member and member.name else name,
                email=_or_missing(member.email if member else None),
                role=_or_missing((member.role if member else None) or role_from_label),
                remarks=PARTICIPANT,
            )

    def reconcile(self) -> List[ParticipantRow]:
        self._roster = {}
        self._seed_creator()
        self._merge_links()
        # org-wide meetings keep no relational links; fall back to the notes
        if len(self._roster) <= 1:
            self._merge_text()
        return list(self._roster.values())

    def notes_rows(self) -> List[ParticipantRow]:
        """Rows added from the notes line by the last `reconcile` call."""
        return [row for key, row in self._roster.items() if key.startswith(TEXT_KEY_PREFIX)]


def reconcile_participants(meeting: MeetingRecord) -> List[ParticipantRow]:
    return ParticipantReconciler(meeting).reconcile()
