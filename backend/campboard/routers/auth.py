# backend/campboard/routers/auth.py
import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from campboard.camp_settings import check_admin_password, get_settings
from campboard.db import get_db
from campboard.models.camper import Camper
from campboard.models.staff import Staff
from campboard.routers.people_common import serialize
from campboard.schemas.people import PersonOut
from campboard.schemas.settings import AdminLogin

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


class CamperLogin(BaseModel):
    camper_id: str
    access_code: str


class StaffLogin(BaseModel):
    staff_id: str
    access_code: str


class CodeLogin(BaseModel):
    access_code: str


def _same(a: str, b: str) -> bool:
    # bytes, since compare_digest rejects non-ASCII str
    return hmac.compare_digest(
        (a or "").strip().upper().encode("utf-8"),
        (b or "").strip().upper().encode("utf-8"),
    )


@router.post("/camper", response_model=PersonOut)
def camper_login(payload: CamperLogin, db: Session = Depends(get_db)):
    camper = db.get(Camper, payload.camper_id)
    if not camper or not _same(camper.access_code, payload.access_code):
        logger.warning("[auth] Failed camper login for %s", payload.camper_id)
        raise HTTPException(status_code=401, detail="Invalid access code")
    return serialize(camper)


@router.post("/camper/by-code", response_model=PersonOut)
def camper_login_by_code(payload: CodeLogin, db: Session = Depends(get_db)):
    code = payload.access_code.strip().upper()
    camper = db.scalar(select(Camper).where(Camper.access_code == code))
    if not camper:
        raise HTTPException(status_code=401, detail="Invalid access code")
    return serialize(camper)


@router.post("/staff", response_model=PersonOut)
def staff_login(payload: StaffLogin, db: Session = Depends(get_db)):
    member = db.get(Staff, payload.staff_id)
    if not member or not _same(member.access_code, payload.access_code):
        logger.warning("[auth] Failed staff login for %s", payload.staff_id)
        raise HTTPException(status_code=401, detail="Invalid access code")
    return serialize(member)


@router.post("/admin")
def admin_login(payload: AdminLogin, db: Session = Depends(get_db)):
    settings = get_settings(db)
    if not check_admin_password(settings, payload.password):
        logger.warning("[auth] Failed admin login")
        raise HTTPException(status_code=401, detail="Invalid password")
    return {"ok": True}
