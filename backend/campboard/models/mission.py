# backend/campboard/models/mission.py
from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from campboard.db import Base

class Mission(Base):
    __tablename__ = "missions"

    id = Column(String(64), primary_key=True)
    title = Column(String, nullable=False)
    type = Column(String(32), nullable=False)
    icon = Column(String(16), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    is_mandatory = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
