# backend/campboard/models/submission.py
import datetime as dt
from datetime import datetime, timezone
from sqlalchemy import String, Date, DateTime, ForeignKey, JSON, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from campboard.db import Base


SUBMITTED = "submitted"
APPROVED = "approved"
REJECTED = "rejected"
EDIT_REQUESTED = "edit_requested"

STATUSES = (SUBMITTED, APPROVED, REJECTED, EDIT_REQUESTED)
PENDING_STATUSES = (SUBMITTED, EDIT_REQUESTED)


class Submission(Base):
    __tablename__ = "submissions"

    __table_args__ = (
        # one submission per camper per camp day
        UniqueConstraint("camper_id", "date", name="uq_submissions_camper_date"),
        Index("ix_submissions_date_status", "date", "status"),
    )

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    camper_id: Mapped[str] = mapped_column(ForeignKey("campers.id"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    # ordered mission ids, as completed
    missions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=SUBMITTED)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    edit_request_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    edit_requested_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_by: Mapped[str | None] = mapped_column(String(128), nullable=True)

    session_id: Mapped[str | None] = mapped_column(ForeignKey("sessions.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    camper = relationship("Camper", lazy="joined")

    @staticmethod
    def make_id(camper_id: str, day: dt.date, now: datetime) -> str:
        return f"sub_{camper_id}_{day.isoformat()}_{int(now.timestamp() * 1000)}"

    @property
    def mission_count(self) -> int:
        return len(self.missions or [])
