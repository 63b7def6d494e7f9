# backend/campboard/models/system_settings.py
from datetime import datetime, timezone
from sqlalchemy import Boolean, Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from campboard.db import Base

SETTINGS_ID = 1


class SystemSettings(Base):
    __tablename__ = "system_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ID)
    daily_required_missions: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    # werkzeug hash, never the plain password
    admin_password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    daily_reset_hour: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # auto-approve on submit vs. staff review
    auto_approve_submissions: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
