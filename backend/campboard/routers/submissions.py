# backend/campboard/routers/submissions.py
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from campboard import lifecycle
from campboard.camp_settings import today_for
from campboard.csv_export import csv_response, to_csv
from campboard.db import get_db
from campboard.filters import filter_submissions
from campboard.models.mission import Mission
from campboard.models.submission import Submission, PENDING_STATUSES
from campboard.schemas.submission import (
    ActorIn,
    BulkCompleteIn,
    EditRequestIn,
    SubmissionEdit,
    SubmissionOut,
)

router = APIRouter(prefix="/submissions", tags=["submissions"])
logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    ("Submission ID", "id"),
    ("Camper Code", "camper_code"),
    ("Camper Name", "camper_name"),
    ("Bunk", "bunk_name"),
    ("Date", "date"),
    ("Status", "status"),
    ("Missions Count", "mission_count"),
    ("Missions", "mission_titles"),
    ("Submitted At", "submitted_at"),
    ("Approved At", "approved_at"),
    ("Edit Reason", "edit_request_reason"),
]


def raise_for(exc: lifecycle.SubmissionError):
    """Map lifecycle errors onto HTTP status codes."""
    if isinstance(exc, lifecycle.CamperNotFound):
        raise HTTPException(status_code=404, detail="Camper not found")
    if isinstance(exc, lifecycle.SubmissionNotFound):
        raise HTTPException(status_code=404, detail="Submission not found")
    if isinstance(exc, lifecycle.NotEnoughMissions):
        raise HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, lifecycle.InvalidTransition):
        raise HTTPException(status_code=409, detail=str(exc))
    raise HTTPException(status_code=400, detail=str(exc))


def _load_views(
    db: Session,
    camper_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    statuses: Optional[tuple] = None,
) -> List[SubmissionOut]:
    q = select(Submission)
    if camper_id:
        q = q.where(Submission.camper_id == camper_id)
    if start_date:
        q = q.where(Submission.date >= start_date)
    if end_date:
        q = q.where(Submission.date <= end_date)
    if statuses:
        q = q.where(Submission.status.in_(statuses))
    rows = db.scalars(q.order_by(Submission.submitted_at.desc())).all()
    return [lifecycle.to_view(s) for s in rows]


def _filtered(
    db: Session,
    search: Optional[str],
    status: Optional[str],
    bunk: Optional[str],
    date_filter: Optional[str],
    camper_id: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
) -> List[SubmissionOut]:
    views = _load_views(db, camper_id=camper_id, start_date=start_date, end_date=end_date)
    return filter_submissions(
        views,
        search=search,
        status=status,
        bunk=bunk,
        date_filter=date_filter,
        today=today_for(db),
    )


@router.get("", response_model=List[SubmissionOut])
def list_submissions(
    search: Optional[str] = Query(None, description="camper name / code / bunk substring"),
    status: Optional[str] = Query(None),
    bunk: Optional[str] = Query(None, description="bunk id or display name"),
    date_filter: Optional[str] = Query(None, pattern="^(all|today|yesterday|week)$"),
    camper_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    return _filtered(db, search, status, bunk, date_filter, camper_id, start_date, end_date)


@router.get("/pending", response_model=List[SubmissionOut])
def list_pending(db: Session = Depends(get_db)):
    return _load_views(db, statuses=PENDING_STATUSES)


@router.get("/export.csv")
def export_submissions(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    bunk: Optional[str] = Query(None),
    date_filter: Optional[str] = Query(None, pattern="^(all|today|yesterday|week)$"),
    camper_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    views = _filtered(db, search, status, bunk, date_filter, camper_id, start_date, end_date)
    titles = {m.id: m.title for m in db.scalars(select(Mission)).all()}
    rows = []
    for v in views:
        row = v.model_dump()
        row["mission_titles"] = ", ".join(titles.get(m, m) for m in v.missions)
        rows.append(row)
    filename = f"submissions-export-{today_for(db).isoformat()}.csv"
    return csv_response(to_csv(rows, EXPORT_COLUMNS), filename)


@router.post("/bulk", response_model=List[SubmissionOut])
def bulk_complete(payload: BulkCompleteIn, db: Session = Depends(get_db)):
    """Mark the same missions done for several campers on one day."""
    try:
        subs = lifecycle.bulk_complete(db, payload.camper_ids, payload.missions, payload.actor, payload.date)
    except lifecycle.SubmissionError as exc:
        raise_for(exc)
    return [lifecycle.to_view(s) for s in subs]


@router.get("/{submission_id}", response_model=SubmissionOut)
def get_submission(submission_id: str, db: Session = Depends(get_db)):
    sub = db.get(Submission, submission_id)
    if not sub:
        raise HTTPException(status_code=404, detail="Submission not found")
    return lifecycle.to_view(sub)


@router.patch("/{submission_id}", response_model=SubmissionOut)
def edit_submission(submission_id: str, payload: SubmissionEdit, db: Session = Depends(get_db)):
    try:
        sub = lifecycle.edit_submission(db, submission_id, payload.missions, payload.actor, payload.date)
    except lifecycle.SubmissionError as exc:
        raise_for(exc)
    return lifecycle.to_view(sub)


@router.post("/{submission_id}/approve", response_model=SubmissionOut)
def approve_submission(submission_id: str, payload: ActorIn, db: Session = Depends(get_db)):
    try:
        sub = lifecycle.approve(db, submission_id, payload.actor.strip())
    except lifecycle.SubmissionError as exc:
        raise_for(exc)
    return lifecycle.to_view(sub)


@router.post("/{submission_id}/reject", response_model=SubmissionOut)
def reject_submission(submission_id: str, payload: ActorIn, db: Session = Depends(get_db)):
    try:
        sub = lifecycle.reject(db, submission_id, payload.actor.strip())
    except lifecycle.SubmissionError as exc:
        raise_for(exc)
    return lifecycle.to_view(sub)


@router.post("/{submission_id}/request-edit", response_model=SubmissionOut)
def request_edit(submission_id: str, payload: EditRequestIn, db: Session = Depends(get_db)):
    try:
        sub = lifecycle.request_edit(db, submission_id, payload.reason)
    except lifecycle.SubmissionError as exc:
        raise_for(exc)
    return lifecycle.to_view(sub)


@router.delete("/{submission_id}", status_code=204)
def delete_submission(submission_id: str, db: Session = Depends(get_db)):
    sub = db.get(Submission, submission_id)
    if not sub:
        raise HTTPException(status_code=404, detail="Submission not found")
    db.delete(sub)
    db.commit()
    logger.info("[submissions] Deleted %s", submission_id)
    return None
