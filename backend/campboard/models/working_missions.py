# backend/campboard/models/working_missions.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from campboard.db import Base

class WorkingMissions(Base):
    """In-progress mission selection for a camper, before submission."""
    __tablename__ = "working_missions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    camper_id = Column(String(64), ForeignKey("campers.id"), nullable=False, unique=True)
    missions = Column(JSON, nullable=False, default=list)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
