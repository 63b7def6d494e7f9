# backend/campboard/camp_settings.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from campboard import config
from campboard.camp_day import settings_today
from campboard.models.system_settings import SystemSettings, SETTINGS_ID

logger = logging.getLogger(__name__)

# shared by the settings API and the legacy migration
MIN_DAILY_REQUIRED = 1
MAX_DAILY_REQUIRED = 50


def get_settings(db: Session) -> SystemSettings:
    """The singleton settings row, created from the env defaults on first use."""
    row = db.get(SystemSettings, SETTINGS_ID)
    if row is None:
        row = SystemSettings(
            id=SETTINGS_ID,
            daily_required_missions=config.DAILY_REQUIRED_MISSIONS,
            admin_password_hash=generate_password_hash(config.DEFAULT_ADMIN_PASSWORD),
            timezone=config.APP_TZ,
            daily_reset_hour=config.DAILY_RESET_HOUR,
            auto_approve_submissions=config.AUTO_APPROVE_SUBMISSIONS,
        )
        db.add(row)
        db.commit()
        logger.info("[settings] Created default system settings row")
    return row


def set_admin_password(settings: SystemSettings, password: str) -> None:
    settings.admin_password_hash = generate_password_hash(password)


def check_admin_password(settings: SystemSettings, password: str) -> bool:
    return check_password_hash(settings.admin_password_hash, password or "")


def today_for(db: Session, now: Optional[datetime] = None) -> date:
    return settings_today(get_settings(db), now)
