# backend/campboard/models/camper_session_stats.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from campboard.db import Base

class CamperSessionStats(Base):
    """Admin-entered totals that override the ones computed from submissions."""
    __tablename__ = "camper_session_stats"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    camper_id: Mapped[str] = mapped_column(ForeignKey("campers.id"), nullable=False)
    # NULL = applies to every session
    session_id: Mapped[str | None] = mapped_column(ForeignKey("sessions.id"), nullable=True)
    total_missions: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_qualified_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("camper_id", "session_id", name="uq_session_stats_camper_session"),
    )
