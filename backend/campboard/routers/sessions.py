# backend/campboard/routers/sessions.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from campboard.db import get_db
from campboard.models.camp_session import CampSession
from campboard.models.camper_session_stats import CamperSessionStats
from campboard.models.submission import Submission
from campboard.schemas.camp_session import SessionCreate, SessionOut, SessionUpdate

router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = logging.getLogger(__name__)


def _deactivate_all(db: Session) -> None:
    db.execute(update(CampSession).values(is_active=False))


@router.get("", response_model=List[SessionOut])
def list_sessions(db: Session = Depends(get_db)):
    return db.scalars(select(CampSession).order_by(CampSession.start_date.desc())).all()


@router.get("/active", response_model=Optional[SessionOut])
def get_active_session(db: Session = Depends(get_db)):
    return db.scalar(select(CampSession).where(CampSession.is_active.is_(True)))


@router.post("", response_model=SessionOut, status_code=201)
def create_session(payload: SessionCreate, db: Session = Depends(get_db)):
    if payload.is_active:
        _deactivate_all(db)
    sess = CampSession(
        name=payload.name.strip(),
        start_date=payload.start_date,
        end_date=payload.end_date,
        is_active=payload.is_active,
    )
    db.add(sess)
    db.commit()
    logger.info("[sessions] Created session %s (%s..%s)", sess.name, sess.start_date, sess.end_date)
    return sess


@router.patch("/{session_id}", response_model=SessionOut)
def update_session(session_id: str, payload: SessionUpdate, db: Session = Depends(get_db)):
    sess = db.get(CampSession, session_id)
    if not sess:
        raise HTTPException(status_code=404, detail="Session not found")

    start = payload.start_date or sess.start_date
    end = payload.end_date or sess.end_date
    if end < start:
        raise HTTPException(status_code=400, detail="end_date must be on/after start_date")

    if payload.name is not None and payload.name.strip():
        sess.name = payload.name.strip()
    sess.start_date = start
    sess.end_date = end
    db.commit()
    return sess


@router.post("/{session_id}/activate", response_model=SessionOut)
def activate_session(session_id: str, db: Session = Depends(get_db)):
    """Make this the one active session."""
    sess = db.get(CampSession, session_id)
    if not sess:
        raise HTTPException(status_code=404, detail="Session not found")
    _deactivate_all(db)
    sess.is_active = True
    db.commit()
    db.refresh(sess)
    logger.info("[sessions] Activated session %s", sess.name)
    return sess


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, db: Session = Depends(get_db)):
    """Delete a session; submissions stay but lose their session link."""
    sess = db.get(CampSession, session_id)
    if not sess:
        raise HTTPException(status_code=404, detail="Session not found")
    db.execute(update(Submission).where(Submission.session_id == session_id).values(session_id=None))
    db.execute(
        CamperSessionStats.__table__.delete().where(CamperSessionStats.session_id == session_id)
    )
    db.delete(sess)
    db.commit()
    return None
