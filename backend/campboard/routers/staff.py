# backend/campboard/routers/staff.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campboard.db import get_db
from campboard.filters import filter_people
from campboard.models.staff import Staff
from campboard.routers.people_common import (
    ensure_bunk,
    ensure_code_free,
    new_code_for,
    regenerated_code,
    serialize,
)
from campboard.schemas.people import PersonOut, PersonUpdate, StaffCreate

router = APIRouter(prefix="/staff", tags=["staff"])
logger = logging.getLogger(__name__)


def _get_or_404(db: Session, staff_id: str) -> Staff:
    member = db.get(Staff, staff_id)
    if not member:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return member


@router.get("", response_model=List[PersonOut])
def list_staff(
    search: Optional[str] = Query(None),
    bunk_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    rows = db.scalars(select(Staff).order_by(Staff.name)).all()
    return [serialize(s) for s in filter_people(rows, search=search, bunk=bunk_id)]


@router.get("/{staff_id}", response_model=PersonOut)
def get_staff(staff_id: str, db: Session = Depends(get_db)):
    return serialize(_get_or_404(db, staff_id))


@router.post("", response_model=PersonOut, status_code=201)
def create_staff(payload: StaffCreate, db: Session = Depends(get_db)):
    ensure_bunk(db, payload.bunk_id)
    if payload.access_code:
        ensure_code_free(db, payload.access_code)
    code = payload.access_code or new_code_for(db, payload.name, payload.bunk_id)
    member = Staff(id=payload.id, name=payload.name, bunk_id=payload.bunk_id, access_code=code)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Staff id already exists")
    logger.info("[staff] Created staff member %s", member.id)
    db.refresh(member)
    return serialize(member)


@router.patch("/{staff_id}", response_model=PersonOut)
def update_staff(staff_id: str, payload: PersonUpdate, db: Session = Depends(get_db)):
    member = _get_or_404(db, staff_id)
    if payload.bunk_id is not None:
        ensure_bunk(db, payload.bunk_id)
        member.bunk_id = payload.bunk_id
    if payload.name is not None and payload.name.strip():
        member.name = payload.name.strip()
    if payload.access_code:
        ensure_code_free(db, payload.access_code, exclude_id=member.id)
        member.access_code = payload.access_code
    db.commit()
    db.refresh(member)
    return serialize(member)


@router.post("/{staff_id}/regenerate-code", response_model=PersonOut)
def regenerate_staff_code(staff_id: str, db: Session = Depends(get_db)):
    member = _get_or_404(db, staff_id)
    member.access_code = regenerated_code(db, staff_id)
    db.commit()
    return serialize(member)


@router.delete("/{staff_id}", status_code=204)
def delete_staff(staff_id: str, db: Session = Depends(get_db)):
    member = _get_or_404(db, staff_id)
    db.delete(member)
    db.commit()
    return None
