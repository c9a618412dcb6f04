"""
Input records consumed by the report composer.

Field names follow Python style; the camelCase names of the upstream JSON
contract are accepted as aliases, so `MeetingRecord.model_validate(payload)`
works on the raw payload.
"""
from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.exceptions import InvalidRecord


class Visibility(str, Enum):
    PRIVATE = "PRIVATE"
    ORG_WIDE = "ORG_WIDE"


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UserRecord(_Record):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class OrganizationRecord(_Record):
    name: str = ""
    category: Optional[str] = None
    members: List[UserRecord] = Field(default_factory=list, validation_alias=AliasChoices("members", "users"))


class ParticipantLink(_Record):
    user_id: str = Field(validation_alias=AliasChoices("user_id", "userId"))
    user: Optional[UserRecord] = None


class MeetingRecord(_Record):
    id: str
    title: str = ""
    description: Optional[str] = None
    visibility: Visibility = Visibility.ORG_WIDE
    date_time: datetime = Field(validation_alias=AliasChoices("date_time", "dateTime"))
    created_by: Optional[str] = Field(default=None, validation_alias=AliasChoices("created_by", "createdBy"))
    notes: Optional[str] = None
    organization: OrganizationRecord = Field(default_factory=OrganizationRecord)
    creator: Optional[UserRecord] = None
    participants: List[ParticipantLink] = Field(default_factory=list)

    @field_validator("visibility", mode="before")
    @classmethod
    def _legacy_visibility(cls, v: Any) -> Any:
        # older payloads spell org-wide meetings PUBLIC_ORG
        if isinstance(v, str) and v.upper() == "PUBLIC_ORG":
            return Visibility.ORG_WIDE
        return v

    @property
    def creator_id(self) -> Optional[str]:
        if self.created_by:
            return self.created_by
        return self.creator.id if self.creator else None

    @property
    def is_private(self) -> bool:
        return self.visibility == Visibility.PRIVATE


class MinutesRecord(_Record):
    id: str
    mom: str = ""
    decisions: List[str] = Field(default_factory=list)
    # heterogeneous upstream shapes; see services.action_items
    action_items: List[Any] = Field(default_factory=list, validation_alias=AliasChoices("action_items", "actionItems"))
    tags: List[str] = Field(default_factory=list)
    is_sensitive: bool = Field(default=False, validation_alias=AliasChoices("is_sensitive", "isSensitive"))
    sensitivity_reason: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("sensitivity_reason", "sensitivityReason")
    )
    updated_at: datetime = Field(validation_alias=AliasChoices("updated_at", "updatedAt"))

    @field_validator("mom", mode="before")
    @classmethod
    def _mom_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("decisions", "tags", mode="before")
    @classmethod
    def _clean_strings(cls, v: Any) -> List[str]:
        """Drop null/blank entries and stringify the rest."""
        if not isinstance(v, list):
            return []
        out = []
        for d in v:
            if d is None:
                continue
            s = str(d).strip()
            if s:
                out.append(s)
        return out

    @field_validator("action_items", mode="before")
    @classmethod
    def _list_or_empty(cls, v: Any) -> List[Any]:
        return v if isinstance(v, list) else []


def load_meeting(payload: dict) -> MeetingRecord:
    try:
        return MeetingRecord.model_validate(payload)
    except ValidationError as e:
        raise InvalidRecord(f"Invalid meeting record: {e}") from e


def load_minutes(payload: dict | None) -> MinutesRecord | None:
    if payload is None:
        return None
    try:
        return MinutesRecord.model_validate(payload)
    except ValidationError as e:
        raise InvalidRecord(f"Invalid minutes record: {e}") from e
