# backend/campboard/schemas/submission.py
from __future__ import annotations
import datetime as dt
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from campboard.schemas.people import _strip_required

SubmissionStatus = Literal["submitted", "approved", "rejected", "edit_requested"]


def dedupe(ids: List[str]) -> List[str]:
    out, seen = [], set()
    for x in ids or []:
        x = (x or "").strip()
        if x and x not in seen:
            seen.add(x); out.append(x)
    return out


class SubmissionOut(BaseModel):
    id: str
    camper_id: str
    camper_name: str
    camper_code: str
    bunk_id: str
    bunk_name: str
    date: date
    missions: List[str]
    mission_count: int
    status: SubmissionStatus
    submitted_at: datetime
    edit_request_reason: Optional[str] = None
    edit_requested_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    rejected_at: Optional[datetime] = None
    rejected_by: Optional[str] = None
    session_id: Optional[str] = None


class SubmitRequest(BaseModel):
    # None = submit the camper's working set
    missions: Optional[List[str]] = None

    @field_validator("missions")
    @classmethod
    def _dedupe(cls, v):
        return dedupe(v) if v is not None else v


class ActorIn(BaseModel):
    actor: str = Field(..., min_length=1, max_length=128)

    @field_validator("actor")
    @classmethod
    def _actor(cls, v):
        return _strip_required(v)


class EditRequestIn(BaseModel):
    reason: str = Field(..., min_length=1)

    @field_validator("reason")
    @classmethod
    def _reason(cls, v):
        return _strip_required(v)


class SubmissionEdit(ActorIn):
    """Staff correction of an existing submission; it stays approved."""
    missions: List[str] = Field(..., min_length=1)
    # dt.date: a bare `date` would resolve to this field's default
    date: Optional[dt.date] = None

    @field_validator("missions")
    @classmethod
    def _dedupe(cls, v):
        v = dedupe(v)
        if not v:
            raise ValueError("at least one mission is required")
        return v


class BulkCompleteIn(SubmissionEdit):
    camper_ids: List[str] = Field(..., min_length=1)

    @field_validator("camper_ids")
    @classmethod
    def _campers(cls, v):
        v = dedupe(v)
        if not v:
            raise ValueError("at least one camper is required")
        return v


class WorkingMissionsIn(BaseModel):
    missions: List[str] = Field(default_factory=list)

    @field_validator("missions")
    @classmethod
    def _dedupe(cls, v):
        return dedupe(v)


class ToggleIn(BaseModel):
    mission_id: str = Field(..., min_length=1)


class WorkingMissionsOut(BaseModel):
    camper_id: str
    missions: List[str]
