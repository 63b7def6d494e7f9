# backend/campboard/routers/data_io.py
from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campboard import lifecycle
from campboard.camp_settings import get_settings
from campboard.db import get_db
from campboard.legacy import LegacyMigration, MemoryLegacyStore, MigrationResult
from campboard.models.bunk import Bunk
from campboard.models.camp_session import CampSession
from campboard.models.camper import Camper
from campboard.models.mission import Mission
from campboard.models.rank_threshold import RankThreshold
from campboard.models.staff import Staff
from campboard.models.submission import Submission, APPROVED
from campboard.routers.people_common import serialize
from campboard.schemas.camp_session import SessionOut
from campboard.schemas.mission import MissionOut
from campboard.schemas.people import BunkOut, PersonOut
from campboard.schemas.rank import RankOut
from campboard.schemas.settings import SettingsOut
from campboard.schemas.submission import SubmissionOut


router = APIRouter(prefix="/data", tags=["data-transfer"])
logger = logging.getLogger(__name__)

IMPORT_HEADERS = ("date", "camper_name", "camper_id", "missions")
IMPORT_ACTOR = "csv-import"


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Full export
# ---------------------------------------------------------------------------


class FullExport(BaseModel):
    kind: str = Field(default="camp-complete-data")
    version: str = Field(default="1.0")
    exported_at: datetime
    settings: SettingsOut
    bunks: List[BunkOut] = Field(default_factory=list)
    campers: List[PersonOut] = Field(default_factory=list)
    staff: List[PersonOut] = Field(default_factory=list)
    missions: List[MissionOut] = Field(default_factory=list)
    sessions: List[SessionOut] = Field(default_factory=list)
    ranks: List[RankOut] = Field(default_factory=list)
    submissions: List[SubmissionOut] = Field(default_factory=list)


@router.get("/export/full", response_model=FullExport)
def export_full(db: Session = Depends(get_db)) -> FullExport:
    return FullExport(
        exported_at=_now(),
        settings=SettingsOut.model_validate(get_settings(db)),
        bunks=[BunkOut.model_validate(b) for b in db.scalars(select(Bunk).order_by(Bunk.id)).all()],
        campers=[serialize(c) for c in db.scalars(select(Camper).order_by(Camper.id)).all()],
        staff=[serialize(s) for s in db.scalars(select(Staff).order_by(Staff.id)).all()],
        missions=[MissionOut.model_validate(m) for m in db.scalars(select(Mission).order_by(Mission.sort_order)).all()],
        sessions=[SessionOut.model_validate(s) for s in db.scalars(select(CampSession).order_by(CampSession.start_date)).all()],
        ranks=[RankOut.model_validate(r) for r in db.scalars(select(RankThreshold).order_by(RankThreshold.rank_order)).all()],
        submissions=[
            lifecycle.to_view(s)
            for s in db.scalars(select(Submission).order_by(Submission.date, Submission.camper_id)).all()
        ],
    )


# ---------------------------------------------------------------------------
# Submissions CSV import
# ---------------------------------------------------------------------------


class ImportRowError(BaseModel):
    line: int
    error: str


class SubmissionsImportResult(BaseModel):
    imported: int = 0
    failed: int = 0
    errors: List[ImportRowError] = Field(default_factory=list)


def _parse_rows(text: str, campers: List[Camper]):
    """Yield (line, camper, day, missions) for valid rows, or (line, error) tuples."""
    reader = csv.DictReader(io.StringIO(text))
    headers = [(h or "").strip().lower() for h in (reader.fieldnames or [])]
    missing = [h for h in IMPORT_HEADERS if h not in headers]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required columns: {', '.join(missing)}")
    reader.fieldnames = headers

    by_id = {c.id: c for c in campers}
    by_name = {c.name: c for c in campers}

    for line, row in enumerate(reader, start=2):
        row = {k: (v or "").strip() for k, v in row.items() if k}
        if not any(row.values()):
            continue
        missions = [m.strip() for m in row.get("missions", "").split(";") if m.strip()]
        try:
            day = date.fromisoformat(row.get("date", ""))
        except ValueError:
            yield line, "Invalid date format"
            continue
        if not row.get("camper_name"):
            yield line, "Missing camper name"
        elif not row.get("camper_id"):
            yield line, "Missing camper ID"
        elif not missions:
            yield line, "No missions specified"
        else:
            camper = by_id.get(row["camper_id"]) or by_name.get(row["camper_name"])
            if camper is None:
                yield line, "Camper not found in system"
            else:
                yield line, camper, day, missions


def _import_rows(db: Session, text: str) -> SubmissionsImportResult:
    result = SubmissionsImportResult()
    campers = db.scalars(select(Camper)).all()
    for parsed in _parse_rows(text, campers):
        if len(parsed) == 2:
            line, error = parsed
            result.failed += 1
            result.errors.append(ImportRowError(line=line, error=error))
            continue
        line, camper, day, missions = parsed
        try:
            lifecycle.upsert_submission(db, camper.id, day, missions, status=APPROVED, actor=IMPORT_ACTOR)
            result.imported += 1
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("[data] Import of line %d failed: %s", line, exc)
            result.failed += 1
            result.errors.append(ImportRowError(line=line, error="Could not save submission"))

    logger.info("[data] Imported %d submissions, %d errors", result.imported, result.failed)
    return result


@router.post("/import/submissions", response_model=SubmissionsImportResult)
async def import_submissions(request: Request, db: Session = Depends(get_db)):
    """
    CSV with columns date, camper_name, camper_id, missions (';'-separated),
    sent as a multipart ``file`` field or as the raw request body.
    Each valid row becomes that camper's approved submission for that date.
    """
    if request.headers.get("content-type", "").startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("file")
        if upload is None or isinstance(upload, str):
            raise HTTPException(status_code=400, detail="Expected a CSV file in the 'file' field")
        raw = await upload.read()
    else:
        raw = await request.body()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded CSV")

    return await run_in_threadpool(_import_rows, db, text)


# ---------------------------------------------------------------------------
# Legacy storage snapshot
# ---------------------------------------------------------------------------


class LegacySnapshot(BaseModel):
    # browser-storage dump: key -> JSON-encoded string
    items: Dict[str, str]
    force: bool = False


class LegacyImportResult(BaseModel):
    migrated: bool
    reason: Optional[str] = None
    result: Optional[MigrationResult] = None
    remaining_keys: List[str] = Field(default_factory=list)


@router.post("/import/legacy", response_model=LegacyImportResult)
def import_legacy(payload: LegacySnapshot, db: Session = Depends(get_db)):
    store = MemoryLegacyStore(payload.items)
    migration = LegacyMigration(store, db)
    if migration.is_completed() and not payload.force:
        return LegacyImportResult(migrated=False, reason="Snapshot was already migrated", remaining_keys=store.keys())
    if not payload.force and not migration.needs_migration():
        return LegacyImportResult(migrated=False, reason="Nothing to migrate", remaining_keys=store.keys())
    result = migration.run()
    return LegacyImportResult(migrated=True, result=result, remaining_keys=sorted(store.keys()))
