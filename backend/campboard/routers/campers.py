# backend/campboard/routers/campers.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campboard import lifecycle
from campboard.camp_settings import today_for
from campboard.db import get_db
from campboard.filters import filter_people
from campboard.models.camp_session import CampSession
from campboard.models.camper import Camper
from campboard.models.camper_session_stats import CamperSessionStats
from campboard.models.camper_weekly_points import CamperWeeklyPoints
from campboard.models.submission import Submission
from campboard.models.working_missions import WorkingMissions
from campboard.routers.people_common import (
    ensure_bunk,
    ensure_code_free,
    new_code_for,
    regenerated_code,
    serialize,
)
from campboard.routers.submissions import raise_for
from campboard.schemas.people import CamperCreate, PersonOut, PersonUpdate
from campboard.schemas.points import StatsOverrideIn, StatsOverrideOut
from campboard.schemas.submission import (
    SubmissionOut,
    SubmitRequest,
    ToggleIn,
    WorkingMissionsIn,
    WorkingMissionsOut,
)

router = APIRouter(prefix="/campers", tags=["campers"])
logger = logging.getLogger(__name__)


def _get_or_404(db: Session, camper_id: str) -> Camper:
    camper = db.get(Camper, camper_id)
    if not camper:
        raise HTTPException(status_code=404, detail="Camper not found")
    return camper


# ----------------------------------------------------------------------
# Campers CRUD
# ----------------------------------------------------------------------
@router.get("", response_model=List[PersonOut])
def list_campers(
    search: Optional[str] = Query(None, description="name / code / bunk substring"),
    bunk_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    rows = db.scalars(select(Camper).order_by(Camper.name)).all()
    return [serialize(c) for c in filter_people(rows, search=search, bunk=bunk_id)]


@router.get("/{camper_id}", response_model=PersonOut)
def get_camper(camper_id: str, db: Session = Depends(get_db)):
    return serialize(_get_or_404(db, camper_id))


@router.post("", response_model=PersonOut, status_code=201)
def create_camper(payload: CamperCreate, db: Session = Depends(get_db)):
    ensure_bunk(db, payload.bunk_id)
    if payload.access_code:
        ensure_code_free(db, payload.access_code)
    code = payload.access_code or new_code_for(db, payload.name, payload.bunk_id)
    camper = Camper(id=payload.id, name=payload.name, bunk_id=payload.bunk_id, access_code=code)
    db.add(camper)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Camper id already exists")
    logger.info("[campers] Created camper %s in %s", camper.id, camper.bunk_id)
    db.refresh(camper)
    return serialize(camper)


@router.patch("/{camper_id}", response_model=PersonOut)
def update_camper(camper_id: str, payload: PersonUpdate, db: Session = Depends(get_db)):
    camper = _get_or_404(db, camper_id)
    if payload.bunk_id is not None:
        ensure_bunk(db, payload.bunk_id)
        camper.bunk_id = payload.bunk_id
    if payload.name is not None and payload.name.strip():
        camper.name = payload.name.strip()
    if payload.access_code:
        ensure_code_free(db, payload.access_code, exclude_id=camper.id)
        camper.access_code = payload.access_code
    db.commit()
    db.refresh(camper)
    return serialize(camper)


@router.post("/{camper_id}/regenerate-code", response_model=PersonOut)
def regenerate_camper_code(camper_id: str, db: Session = Depends(get_db)):
    camper = _get_or_404(db, camper_id)
    camper.access_code = regenerated_code(db, camper_id)
    db.commit()
    logger.info("[campers] Regenerated access code for %s", camper_id)
    return serialize(camper)


@router.delete("/{camper_id}", status_code=204)
def delete_camper(camper_id: str, db: Session = Depends(get_db)):
    """
    Deletes a camper together with everything hanging off it
    (working set, submissions, stats overrides, weekly points).
    """
    _get_or_404(db, camper_id)
    db.execute(delete(WorkingMissions).where(WorkingMissions.camper_id == camper_id))
    db.execute(delete(Submission).where(Submission.camper_id == camper_id))
    db.execute(delete(CamperSessionStats).where(CamperSessionStats.camper_id == camper_id))
    db.execute(delete(CamperWeeklyPoints).where(CamperWeeklyPoints.camper_id == camper_id))
    db.execute(delete(Camper).where(Camper.id == camper_id))
    db.commit()
    return None


# ----------------------------------------------------------------------
# Working missions
# ----------------------------------------------------------------------
@router.get("/{camper_id}/working-missions", response_model=WorkingMissionsOut)
def get_working_missions(camper_id: str, db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    return WorkingMissionsOut(camper_id=camper_id, missions=lifecycle.get_working_missions(db, camper_id))


@router.put("/{camper_id}/working-missions", response_model=WorkingMissionsOut)
def save_working_missions(camper_id: str, payload: WorkingMissionsIn, db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    missions = lifecycle.save_working_missions(db, camper_id, payload.missions)
    return WorkingMissionsOut(camper_id=camper_id, missions=missions)


@router.post("/{camper_id}/working-missions/toggle", response_model=WorkingMissionsOut)
def toggle_working_mission(camper_id: str, payload: ToggleIn, db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    missions = lifecycle.toggle_working_mission(db, camper_id, payload.mission_id.strip())
    return WorkingMissionsOut(camper_id=camper_id, missions=missions)


@router.delete("/{camper_id}/working-missions", status_code=204)
def clear_working_missions(camper_id: str, db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    lifecycle.clear_working_missions(db, camper_id)
    return None


# ----------------------------------------------------------------------
# Submissions (camper side)
# ----------------------------------------------------------------------
@router.post("/{camper_id}/submit", response_model=SubmissionOut, status_code=201)
def submit_missions(camper_id: str, payload: Optional[SubmitRequest] = None, db: Session = Depends(get_db)):
    missions = payload.missions if payload else None
    try:
        sub = lifecycle.submit_for_camper(db, camper_id, missions)
    except lifecycle.SubmissionError as exc:
        raise_for(exc)
    return lifecycle.to_view(sub)


@router.get("/{camper_id}/submissions/today", response_model=Optional[SubmissionOut])
def get_today_submission(camper_id: str, db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    sub = lifecycle.find_submission(db, camper_id, today_for(db))
    return lifecycle.to_view(sub) if sub else None


@router.get("/{camper_id}/submissions", response_model=List[SubmissionOut])
def list_camper_submissions(camper_id: str, db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    rows = db.scalars(
        select(Submission)
        .where(Submission.camper_id == camper_id)
        .order_by(Submission.date.desc())
    ).all()
    return [lifecycle.to_view(s) for s in rows]


# ----------------------------------------------------------------------
# Manual stats override
# ----------------------------------------------------------------------
@router.put("/{camper_id}/stats-override", response_model=StatsOverrideOut)
def set_stats_override(camper_id: str, payload: StatsOverrideIn, db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    if payload.session_id is not None and db.get(CampSession, payload.session_id) is None:
        raise HTTPException(status_code=400, detail="session_id does not exist")
    q = select(CamperSessionStats).where(CamperSessionStats.camper_id == camper_id)
    if payload.session_id is None:
        q = q.where(CamperSessionStats.session_id.is_(None))
    else:
        q = q.where(CamperSessionStats.session_id == payload.session_id)
    row = db.scalar(q)
    if row is None:
        row = CamperSessionStats(camper_id=camper_id, session_id=payload.session_id)
        db.add(row)
    row.total_missions = payload.total_missions
    row.total_qualified_days = payload.total_qualified_days
    db.commit()
    db.refresh(row)
    logger.info("[campers] Stats override set for %s", camper_id)
    return row


@router.delete("/{camper_id}/stats-override", status_code=204)
def clear_stats_override(camper_id: str, session_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    _get_or_404(db, camper_id)
    q = delete(CamperSessionStats).where(CamperSessionStats.camper_id == camper_id)
    if session_id is not None:
        q = q.where(CamperSessionStats.session_id == session_id)
    db.execute(q)
    db.commit()
    return None
