# backend/campboard/models/camper_weekly_points.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from campboard.db import Base

class CamperWeeklyPoints(Base):
    __tablename__ = "camper_weekly_points"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    camper_id = Column(String(64), ForeignKey("campers.id"), nullable=False)
    session_number = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)
    missions_completed = Column(Integer, nullable=False, default=0)
    total_points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("camper_id", "session_number", "week_number", name="uq_weekly_points_camper_week"),
    )
