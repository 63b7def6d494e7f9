# backend/campboard/routers/bunks.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campboard.db import get_db
from campboard.models.bunk import Bunk
from campboard.models.camper import Camper
from campboard.models.staff import Staff
from campboard.schemas.people import BunkIn, BunkOut, BunkUpdate

router = APIRouter(prefix="/bunks", tags=["bunks"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[BunkOut])
def list_bunks(db: Session = Depends(get_db)):
    return db.scalars(select(Bunk).order_by(Bunk.display_name)).all()


@router.post("", response_model=BunkOut, status_code=201)
def create_bunk(payload: BunkIn, db: Session = Depends(get_db)):
    bunk = Bunk(id=payload.id, name=payload.name, display_name=payload.display_name)
    db.add(bunk)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Bunk id already exists")
    logger.info("[bunks] Created bunk %s", bunk.id)
    return bunk


@router.patch("/{bunk_id}", response_model=BunkOut)
def update_bunk(bunk_id: str, payload: BunkUpdate, db: Session = Depends(get_db)):
    bunk = db.get(Bunk, bunk_id)
    if not bunk:
        raise HTTPException(status_code=404, detail="Bunk not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None and value.strip():
            setattr(bunk, key, value.strip())
    db.commit()
    return bunk


@router.delete("/{bunk_id}", status_code=204)
def delete_bunk(bunk_id: str, db: Session = Depends(get_db)):
    bunk = db.get(Bunk, bunk_id)
    if not bunk:
        raise HTTPException(status_code=404, detail="Bunk not found")
    used = db.scalar(select(func.count()).select_from(Camper).where(Camper.bunk_id == bunk_id))
    used += db.scalar(select(func.count()).select_from(Staff).where(Staff.bunk_id == bunk_id))
    if used:
        raise HTTPException(status_code=400, detail="Bunk has campers or staff; move them first")
    db.delete(bunk)
    db.commit()
    return None
