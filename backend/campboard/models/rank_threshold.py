# backend/campboard/models/rank_threshold.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Boolean, Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from campboard.db import Base

class RankThreshold(Base):
    __tablename__ = "rank_thresholds"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    rank_name: Mapped[str] = mapped_column(String(64), nullable=False)
    missions_required: Mapped[int] = mapped_column(Integer, nullable=False)
    qualified_days_required: Mapped[int] = mapped_column(Integer, nullable=False)
    rank_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
