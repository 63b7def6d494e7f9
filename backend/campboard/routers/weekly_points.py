# backend/campboard/routers/weekly_points.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from campboard.db import get_db
from campboard.models.camper import Camper
from campboard.models.camper_weekly_points import CamperWeeklyPoints
from campboard.schemas.points import WeeklyPointsIn, WeeklyPointsOut

router = APIRouter(prefix="/weekly-points", tags=["weekly-points"])


@router.get("", response_model=List[WeeklyPointsOut])
def list_weekly_points(
    camper_id: Optional[str] = Query(None),
    session_number: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    q = select(CamperWeeklyPoints)
    if camper_id is not None:
        q = q.where(CamperWeeklyPoints.camper_id == camper_id)
    if session_number is not None:
        q = q.where(CamperWeeklyPoints.session_number == session_number)
    q = q.order_by(
        CamperWeeklyPoints.camper_id,
        CamperWeeklyPoints.session_number,
        CamperWeeklyPoints.week_number,
    )
    return db.scalars(q).all()


@router.put("", response_model=WeeklyPointsOut)
def upsert_weekly_points(payload: WeeklyPointsIn, db: Session = Depends(get_db)):
    """One row per camper/session/week; writing again overwrites it."""
    if db.get(Camper, payload.camper_id) is None:
        raise HTTPException(status_code=400, detail="camper_id does not exist")
    row = db.scalar(
        select(CamperWeeklyPoints).where(
            CamperWeeklyPoints.camper_id == payload.camper_id,
            CamperWeeklyPoints.session_number == payload.session_number,
            CamperWeeklyPoints.week_number == payload.week_number,
        )
    )
    if row is None:
        row = CamperWeeklyPoints(
            camper_id=payload.camper_id,
            session_number=payload.session_number,
            week_number=payload.week_number,
        )
        db.add(row)
    row.missions_completed = payload.missions_completed
    row.total_points = payload.total_points
    db.commit()
    db.refresh(row)
    return row
