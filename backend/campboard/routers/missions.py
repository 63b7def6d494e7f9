# backend/campboard/routers/missions.py
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, Depends
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campboard.db import get_db
from campboard.models.mission import Mission
from campboard.schemas.mission import MissionCreate, MissionUpdate, MissionOut, MissionReorder

router = APIRouter(prefix="/missions", tags=["missions"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[MissionOut])
def list_missions(include_inactive: bool = Query(False), db: Session = Depends(get_db)):
    """Active missions in display order (all of them for the admin editor)."""
    q = select(Mission)
    if not include_inactive:
        q = q.where(Mission.is_active.is_(True))
    return db.scalars(q.order_by(Mission.sort_order, Mission.id)).all()


@router.post("", response_model=MissionOut, status_code=201)
def create_mission(payload: MissionCreate, db: Session = Depends(get_db)):
    """Create a mission; without sort_order it goes to the end of the list."""
    sort_order = payload.sort_order
    if sort_order is None:
        sort_order = (db.scalar(select(func.max(Mission.sort_order))) or 0) + 1
    mission = Mission(
        id=payload.id.strip(),
        title=payload.title.strip(),
        type=payload.type.strip(),
        icon=payload.icon,
        is_mandatory=payload.is_mandatory,
        is_active=payload.is_active,
        sort_order=sort_order,
    )
    db.add(mission)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Mission id already exists")
    logger.info("[missions] Created mission %s", mission.id)
    return mission


@router.patch("/{mission_id}", response_model=MissionOut)
def update_mission(mission_id: str, payload: MissionUpdate, db: Session = Depends(get_db)):
    mission = db.get(Mission, mission_id)
    if not mission:
        raise HTTPException(status_code=404, detail="Mission not found")

    values = payload.model_dump(exclude_unset=True)
    for key, value in values.items():
        if value is None:
            continue
        setattr(mission, key, value.strip() if isinstance(value, str) and key != "icon" else value)
    db.commit()
    return mission


@router.post("/reorder", response_model=List[MissionOut])
def reorder_missions(payload: MissionReorder, db: Session = Depends(get_db)):
    """Set sort_order from the position of each id in the given list."""
    by_id = {m.id: m for m in db.scalars(select(Mission)).all()}
    missing = [mid for mid in payload.mission_ids if mid not in by_id]
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown mission ids: {', '.join(missing)}")
    for idx, mid in enumerate(payload.mission_ids, start=1):
        by_id[mid].sort_order = idx
    db.commit()
    return db.scalars(select(Mission).order_by(Mission.sort_order, Mission.id)).all()


@router.delete("/{mission_id}", status_code=204)
def delete_mission(mission_id: str, db: Session = Depends(get_db)):
    """
    Delete a mission. Past submissions keep the id in their mission list;
    deactivate instead to hide it from campers but keep titles in reports.
    """
    mission = db.get(Mission, mission_id)
    if not mission:
        raise HTTPException(status_code=404, detail="Mission not found")
    db.delete(mission)
    db.commit()
    return None
