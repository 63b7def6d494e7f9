# backend/campboard/lifecycle.py
"""
Submission lifecycle.

    working (WorkingMissions row only)
      -> submitted -> approved | rejected | edit_requested
    edit_requested -> approved | rejected

A submit upserts the camper's row for the camp day; whether it lands as
``submitted`` or ``approved`` is the ``auto_approve_submissions`` setting.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campboard.camp_settings import get_settings, today_for
from campboard.models.camp_session import CampSession
from campboard.models.camper import Camper
from campboard.models.submission import (
    Submission,
    SUBMITTED,
    APPROVED,
    REJECTED,
    EDIT_REQUESTED,
    PENDING_STATUSES,
)
from campboard.models.working_missions import WorkingMissions
from campboard.schemas.submission import SubmissionOut, dedupe

logger = logging.getLogger(__name__)

AUTO_APPROVER = "auto"


class SubmissionError(Exception):
    pass


class SubmissionNotFound(SubmissionError):
    pass


class CamperNotFound(SubmissionError):
    pass


class InvalidTransition(SubmissionError):
    pass


class NotEnoughMissions(SubmissionError):
    pass


def _now() -> datetime:
    return datetime.now(timezone.utc)


def to_view(sub: Submission) -> SubmissionOut:
    camper = sub.camper
    return SubmissionOut(
        id=sub.id,
        camper_id=sub.camper_id,
        camper_name=camper.name if camper else "Unknown",
        camper_code=camper.access_code if camper else "",
        bunk_id=camper.bunk_id if camper else "",
        bunk_name=camper.bunk_name if camper else "Unknown",
        date=sub.date,
        missions=list(sub.missions or []),
        mission_count=sub.mission_count,
        status=sub.status,
        submitted_at=sub.submitted_at,
        edit_request_reason=sub.edit_request_reason,
        edit_requested_at=sub.edit_requested_at,
        approved_at=sub.approved_at,
        approved_by=sub.approved_by,
        rejected_at=sub.rejected_at,
        rejected_by=sub.rejected_by,
        session_id=sub.session_id,
    )


# ----------------------------------------------------------------------
# Working missions
# ----------------------------------------------------------------------
def get_working_missions(db: Session, camper_id: str) -> List[str]:
    row = db.scalar(select(WorkingMissions).where(WorkingMissions.camper_id == camper_id))
    if row is None:
        return []
    return list(row.missions or [])


def save_working_missions(db: Session, camper_id: str, missions: List[str]) -> List[str]:
    """Replace the whole working set (last write wins)."""
    missions = dedupe(missions)
    row = db.scalar(select(WorkingMissions).where(WorkingMissions.camper_id == camper_id))
    if row is None:
        db.add(WorkingMissions(camper_id=camper_id, missions=missions))
    else:
        row.missions = missions
        row.updated_at = _now()
    db.commit()
    return missions


def toggle_working_mission(db: Session, camper_id: str, mission_id: str) -> List[str]:
    current = get_working_missions(db, camper_id)
    if mission_id in current:
        current = [m for m in current if m != mission_id]
    else:
        current = current + [mission_id]
    return save_working_missions(db, camper_id, current)


def clear_working_missions(db: Session, camper_id: str, commit: bool = True) -> None:
    db.execute(delete(WorkingMissions).where(WorkingMissions.camper_id == camper_id))
    if commit:
        db.commit()


# ----------------------------------------------------------------------
# Submissions
# ----------------------------------------------------------------------
def _session_for(db: Session, day: date) -> Optional[str]:
    sess = db.scalar(
        select(CampSession)
        .where(CampSession.start_date <= day, CampSession.end_date >= day)
        .order_by(CampSession.is_active.desc(), CampSession.start_date.desc())
    )
    return sess.id if sess else None


def find_submission(db: Session, camper_id: str, day: date) -> Optional[Submission]:
    return db.scalar(
        select(Submission).where(Submission.camper_id == camper_id, Submission.date == day)
    )


def _apply(sub: Submission, missions: List[str], status: str, actor: Optional[str], now: datetime) -> None:
    """Write a fresh mission set and status, clearing earlier review state."""
    sub.missions = missions
    sub.status = status
    sub.submitted_at = now
    sub.edit_request_reason = None
    sub.edit_requested_at = None
    sub.rejected_at = None
    sub.rejected_by = None
    if status == APPROVED:
        sub.approved_at = now
        sub.approved_by = actor or AUTO_APPROVER
    else:
        sub.approved_at = None
        sub.approved_by = None


def upsert_submission(
    db: Session,
    camper_id: str,
    day: date,
    missions: List[str],
    status: str = SUBMITTED,
    actor: Optional[str] = None,
) -> Submission:
    """
    The single write path for one camper on one day. A second call for the
    same camper+date replaces the mission set on the existing row.
    """
    missions = dedupe(missions)
    now = _now()
    sub = find_submission(db, camper_id, day)
    if sub is None:
        sub = Submission(
            id=Submission.make_id(camper_id, day, now),
            camper_id=camper_id,
            date=day,
            session_id=_session_for(db, day),
        )
        db.add(sub)
    _apply(sub, missions, status, actor, now)

    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent insert for the same day; update that row instead
        db.rollback()
        existing = find_submission(db, camper_id, day)
        if existing is None:
            raise
        _apply(existing, missions, status, actor, now)
        db.commit()
        sub = existing
    db.refresh(sub)
    return sub


def submit_for_camper(
    db: Session,
    camper_id: str,
    missions: Optional[List[str]] = None,
    now: Optional[datetime] = None,
) -> Submission:
    camper = db.get(Camper, camper_id)
    if camper is None:
        raise CamperNotFound(camper_id)

    settings = get_settings(db)
    if missions is None:
        missions = get_working_missions(db, camper_id)
    missions = dedupe(missions)
    if len(missions) < settings.daily_required_missions:
        raise NotEnoughMissions(
            f"{len(missions)} missions selected, {settings.daily_required_missions} required"
        )

    day = today_for(db, now)
    existing = find_submission(db, camper_id, day)
    if existing is not None and existing.status == APPROVED:
        raise InvalidTransition("Today's submission is already approved")

    status = APPROVED if settings.auto_approve_submissions else SUBMITTED
    sub = upsert_submission(db, camper_id, day, missions, status=status)
    clear_working_missions(db, camper_id)
    logger.info(
        "[submissions] %s submitted %d missions for %s (%s)",
        camper_id, len(missions), day.isoformat(), status,
    )
    return sub


def _get(db: Session, submission_id: str) -> Submission:
    sub = db.get(Submission, submission_id)
    if sub is None:
        raise SubmissionNotFound(submission_id)
    return sub


def approve(db: Session, submission_id: str, actor: str) -> Submission:
    sub = _get(db, submission_id)
    if sub.status not in PENDING_STATUSES:
        raise InvalidTransition(f"Cannot approve a submission that is {sub.status}")
    sub.status = APPROVED
    sub.approved_at = _now()
    sub.approved_by = actor
    db.commit()
    logger.info("[submissions] %s approved by %s", submission_id, actor)
    return sub


def reject(db: Session, submission_id: str, actor: str) -> Submission:
    sub = _get(db, submission_id)
    if sub.status not in PENDING_STATUSES:
        raise InvalidTransition(f"Cannot reject a submission that is {sub.status}")
    sub.status = REJECTED
    sub.rejected_at = _now()
    sub.rejected_by = actor
    # camper starts over from an empty working set
    clear_working_missions(db, sub.camper_id, commit=False)
    db.commit()
    logger.info("[submissions] %s rejected by %s", submission_id, actor)
    return sub


def request_edit(db: Session, submission_id: str, reason: str) -> Submission:
    sub = _get(db, submission_id)
    if sub.status != SUBMITTED:
        raise InvalidTransition(f"Cannot request an edit on a submission that is {sub.status}")
    sub.status = EDIT_REQUESTED
    sub.edit_request_reason = reason.strip()
    sub.edit_requested_at = _now()
    db.commit()
    logger.info("[submissions] edit requested on %s", submission_id)
    return sub


def edit_submission(
    db: Session,
    submission_id: str,
    missions: List[str],
    actor: str,
    day: Optional[date] = None,
) -> Submission:
    """
    Staff correction of the mission set and, optionally, the date.
    The row ends up approved by ``actor`` whatever its status was.
    """
    sub = _get(db, submission_id)
    missions = dedupe(missions)
    if not missions:
        raise NotEnoughMissions("At least one mission is required")

    if day is not None and day != sub.date:
        if find_submission(db, sub.camper_id, day) is not None:
            raise InvalidTransition(f"{sub.camper_id} already has a submission on {day.isoformat()}")
        sub.date = day
        sub.session_id = _session_for(db, day)

    now = _now()
    sub.missions = missions
    sub.status = APPROVED
    sub.approved_at = now
    sub.approved_by = actor
    sub.edit_request_reason = None
    sub.edit_requested_at = None
    sub.rejected_at = None
    sub.rejected_by = None
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidTransition(f"{sub.camper_id} already has a submission on that date")
    db.refresh(sub)
    logger.info("[submissions] %s edited by %s", submission_id, actor)
    return sub


def bulk_complete(
    db: Session,
    camper_ids: List[str],
    missions: List[str],
    actor: str,
    day: Optional[date] = None,
) -> List[Submission]:
    """
    Mark ``missions`` done for every camper on ``day`` (default: the camp day).
    Missions already recorded that day are kept; the rows end up approved.
    """
    missing = [cid for cid in camper_ids if db.get(Camper, cid) is None]
    if missing:
        raise CamperNotFound(", ".join(missing))

    day = day or today_for(db)
    out: List[Submission] = []
    for camper_id in camper_ids:
        existing = find_submission(db, camper_id, day)
        merged = list(existing.missions or []) + list(missions) if existing else list(missions)
        out.append(upsert_submission(db, camper_id, day, merged, status=APPROVED, actor=actor))
    logger.info(
        "[submissions] %s completed %d missions for %d campers on %s",
        actor, len(missions), len(camper_ids), day.isoformat(),
    )
    return out
