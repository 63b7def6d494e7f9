# backend/campboard/routers/people_common.py
"""Shared plumbing for the camper and staff routers (same row shape)."""
from typing import Set, Union

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from campboard.codes import assign_code, generate_unique_code
from campboard.models.bunk import Bunk
from campboard.models.camper import Camper
from campboard.models.staff import Staff
from campboard.schemas.people import PersonOut

Person = Union[Camper, Staff]


def serialize(p: Person) -> PersonOut:
    return PersonOut(
        id=p.id,
        name=p.name,
        code=p.access_code,
        bunk_id=p.bunk_id,
        bunk_name=p.bunk_name,
    )


def ensure_bunk(db: Session, bunk_id: str) -> None:
    if db.get(Bunk, bunk_id) is None:
        raise HTTPException(status_code=400, detail="bunk_id does not exist")


def existing_codes(db: Session, exclude_id: str | None = None) -> Set[str]:
    codes: Set[str] = set()
    for model in (Camper, Staff):
        q = select(model.access_code)
        if exclude_id is not None:
            q = q.where(model.id != exclude_id)
        codes.update(c for c in db.scalars(q).all() if c)
    return codes


def new_code_for(db: Session, name: str, bunk_id: str) -> str:
    return assign_code(name, bunk_id, existing_codes(db))


def regenerated_code(db: Session, person_id: str) -> str:
    return generate_unique_code(existing_codes(db, exclude_id=person_id))


def ensure_code_free(db: Session, code: str, exclude_id: str | None = None) -> None:
    """Access codes are login credentials, unique across campers and staff."""
    if code in existing_codes(db, exclude_id=exclude_id):
        raise HTTPException(status_code=409, detail="Access code already in use")
