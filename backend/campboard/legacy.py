# backend/campboard/legacy.py
"""
Legacy key-value persistence and its one-way migration into the database.

The old dashboard kept JSON-encoded strings under per-entity keys in browser
storage. ``LegacyStore`` is that storage as an explicit, injectable interface;
``LegacyMigration`` moves what it holds into the relational tables and removes
the migrated keys.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from campboard.camp_settings import (
    MAX_DAILY_REQUIRED,
    MIN_DAILY_REQUIRED,
    get_settings,
    set_admin_password,
)
from campboard.lifecycle import find_submission, save_working_missions
from campboard.models.camper import Camper
from campboard.models.submission import Submission, STATUSES, SUBMITTED
from campboard.schemas.submission import dedupe

logger = logging.getLogger(__name__)

SUBMISSIONS_KEY = "master_submissions"
WORKING_PREFIX = "working_missions_"
ADMIN_PASSWORD_KEY = "admin_password"
DAILY_REQUIRED_KEY = "daily_required_missions"
COMPLETED_KEY = "supabase_migration_completed"
VERSION_KEY = "data_version"
MIGRATED_VERSION = "5.0.0"


class LegacyStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
    def keys(self) -> List[str]: ...


class MemoryLegacyStore:
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileLegacyStore(MemoryLegacyStore):
    """A dump of browser storage as one JSON object of string values."""

    def __init__(self, path: str):
        self.path = path
        data: Dict[str, str] = {}
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            data = {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in raw.items()}
        super().__init__(data)

    def _flush(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, ensure_ascii=False, indent=2)

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._flush()

    def remove(self, key: str) -> None:
        super().remove(key)
        self._flush()


class LegacySubmission(BaseModel):
    """One entry of the old ``master_submissions`` list (camelCase on disk)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    camper_id: str = Field(alias="camperId")
    date: date
    missions: List[str] = Field(default_factory=list)
    status: str = SUBMITTED
    submitted_at: Optional[datetime] = Field(default=None, alias="submittedAt")
    edit_request_reason: Optional[str] = Field(default=None, alias="editRequestReason")
    edit_requested_at: Optional[datetime] = Field(default=None, alias="editRequestedAt")
    approved_at: Optional[datetime] = Field(default=None, alias="approvedAt")
    approved_by: Optional[str] = Field(default=None, alias="approvedBy")
    rejected_at: Optional[datetime] = Field(default=None, alias="rejectedAt")
    rejected_by: Optional[str] = Field(default=None, alias="rejectedBy")


class MigrationResult(BaseModel):
    submissions_migrated: int = 0
    submissions_skipped: int = 0
    working_sets_migrated: int = 0
    settings_migrated: List[str] = Field(default_factory=list)


class LegacyMigration:
    def __init__(self, store: LegacyStore, db: Session):
        self.store = store
        self.db = db
        self.result = MigrationResult()

    def _read_json(self, key: str):
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("[legacy] Key %s does not hold JSON, leaving it in place", key)
            return None

    def has_legacy_data(self) -> bool:
        return any(
            k in (SUBMISSIONS_KEY, ADMIN_PASSWORD_KEY, DAILY_REQUIRED_KEY) or k.startswith(WORKING_PREFIX)
            for k in self.store.keys()
        )

    def is_completed(self) -> bool:
        return self.store.get(COMPLETED_KEY) == "true"

    def needs_migration(self) -> bool:
        """Legacy keys present and the database has no submissions yet."""
        if not self.has_legacy_data():
            return False
        count = self.db.scalar(select(func.count()).select_from(Submission)) or 0
        return count == 0

    def migrate_submissions(self) -> None:
        raw = self._read_json(SUBMISSIONS_KEY)
        if raw is None:
            return
        known = set(self.db.scalars(select(Camper.id)).all())
        for item in raw if isinstance(raw, list) else []:
            try:
                entry = LegacySubmission.model_validate(item)
            except ValidationError as exc:
                logger.warning("[legacy] Skipping malformed submission: %s", exc.errors()[:1])
                self.result.submissions_skipped += 1
                continue
            if (
                entry.camper_id not in known
                or self.db.get(Submission, entry.id) is not None
                or find_submission(self.db, entry.camper_id, entry.date) is not None
            ):
                self.result.submissions_skipped += 1
                continue
            status = entry.status if entry.status in STATUSES else SUBMITTED
            self.db.add(Submission(
                id=entry.id,
                camper_id=entry.camper_id,
                date=entry.date,
                missions=dedupe(entry.missions),
                status=status,
                submitted_at=entry.submitted_at or datetime.now(timezone.utc),
                edit_request_reason=entry.edit_request_reason,
                edit_requested_at=entry.edit_requested_at,
                approved_at=entry.approved_at,
                approved_by=entry.approved_by,
                rejected_at=entry.rejected_at,
                rejected_by=entry.rejected_by,
            ))
            self.db.flush()
            self.result.submissions_migrated += 1
        self.db.commit()
        self.store.remove(SUBMISSIONS_KEY)
        logger.info("[legacy] Migrated %d submissions", self.result.submissions_migrated)

    def migrate_working_missions(self) -> None:
        for camper_id in self.db.scalars(select(Camper.id)).all():
            key = f"{WORKING_PREFIX}{camper_id}"
            missions = self._read_json(key)
            if missions is None:
                continue
            if isinstance(missions, list) and missions:
                save_working_missions(self.db, camper_id, [str(m) for m in missions])
                self.result.working_sets_migrated += 1
            self.store.remove(key)

    def migrate_system_settings(self) -> None:
        settings = get_settings(self.db)
        password = self.store.get(ADMIN_PASSWORD_KEY)
        if password:
            set_admin_password(settings, password)
            self.result.settings_migrated.append("admin_password")
        daily = self.store.get(DAILY_REQUIRED_KEY)
        if daily:
            try:
                required = int(daily)
            except ValueError:
                required = None
            if required is None or not MIN_DAILY_REQUIRED <= required <= MAX_DAILY_REQUIRED:
                logger.warning("[legacy] Ignoring invalid daily requirement %r", daily)
            else:
                settings.daily_required_missions = required
                self.result.settings_migrated.append("daily_required_missions")
        self.db.commit()
        self.store.remove(ADMIN_PASSWORD_KEY)
        self.store.remove(DAILY_REQUIRED_KEY)

    def run(self) -> MigrationResult:
        logger.info("[legacy] Starting migration from legacy storage")
        try:
            self.migrate_submissions()
            self.migrate_working_missions()
            self.migrate_system_settings()
        except Exception:
            self.db.rollback()
            logger.exception("[legacy] Migration failed")
            raise
        self.store.set(COMPLETED_KEY, "true")
        self.store.set(VERSION_KEY, MIGRATED_VERSION)
        logger.info("[legacy] Migration completed: %s", self.result.model_dump())
        return self.result
