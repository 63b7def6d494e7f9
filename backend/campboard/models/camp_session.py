# backend/campboard/models/camp_session.py
import uuid
from datetime import datetime, date, timezone
from sqlalchemy import Boolean, String, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from campboard.db import Base

class CampSession(Base):
    """A camp session (date range). Named to stay clear of the ORM Session."""
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
