# backend/campboard/models/staff.py
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from campboard.db import Base

class Staff(Base):
    __tablename__ = "staff"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    access_code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, index=True)
    bunk_id: Mapped[str] = mapped_column(ForeignKey("bunks.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    bunk = relationship("Bunk", lazy="joined")

    @property
    def bunk_name(self) -> str:
        return self.bunk.display_name if self.bunk else "Unknown"
