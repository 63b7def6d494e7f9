# backend/campboard/routers/settings.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campboard.camp_settings import get_settings, set_admin_password, today_for
from campboard.db import get_db
from campboard.schemas.settings import SettingsOut, SettingsUpdate

router = APIRouter(prefix="/settings", tags=["settings"])
logger = logging.getLogger(__name__)


@router.get("", response_model=SettingsOut)
def read_settings(db: Session = Depends(get_db)):
    return get_settings(db)


@router.patch("", response_model=SettingsOut)
def update_settings(payload: SettingsUpdate, db: Session = Depends(get_db)):
    row = get_settings(db)
    changed = []
    values = payload.model_dump(exclude_unset=True)
    password = values.pop("admin_password", None)
    if password:
        set_admin_password(row, password)
        changed.append("admin_password")
    for key, value in values.items():
        if value is None:
            continue
        setattr(row, key, value)
        changed.append(key)
    db.commit()
    if changed:
        # never log the password itself
        logger.info("[settings] Updated: %s", ", ".join(sorted(changed)))
    return row


@router.get("/today")
def read_camp_today(db: Session = Depends(get_db)):
    """The current camp day (timezone + reset hour applied)."""
    return {"today": today_for(db).isoformat()}
