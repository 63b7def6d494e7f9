import json

from sqlalchemy import func, select

from campboard.camp_settings import check_admin_password, get_settings
from campboard.legacy import (
    COMPLETED_KEY,
    JsonFileLegacyStore,
    LegacyMigration,
    MemoryLegacyStore,
)
from campboard.models import Submission


def _snapshot():
    return {
        "master_submissions": json.dumps([
            {"id": "old-1", "camperId": "c1", "date": "2025-06-01", "missions": ["m1", "m1", "m2"],
             "status": "pending", "submittedAt": "2025-06-01T09:00:00Z"},
            {"id": "old-2", "camperId": "c2", "date": "2025-06-01", "missions": ["m3"],
             "status": "approved", "approvedBy": "kim", "approvedAt": "2025-06-01T12:00:00Z"},
            {"camperId": "c3"},
        ]),
        "admin_password": "letmein",
        "unrelated": "keep me",
    }


def test_needs_migration_only_with_legacy_keys(seeded):
    assert LegacyMigration(MemoryLegacyStore({"other": "1"}), seeded).needs_migration() is False
    assert LegacyMigration(MemoryLegacyStore(_snapshot()), seeded).needs_migration() is True


def test_run_moves_rows_and_marks_store(seeded):
    store = MemoryLegacyStore(_snapshot())
    migration = LegacyMigration(store, seeded)
    result = migration.run()

    assert result.submissions_migrated == 2
    assert result.submissions_skipped == 1
    assert result.settings_migrated == ["admin_password"]
    assert migration.is_completed()
    assert sorted(store.keys()) == ["data_version", COMPLETED_KEY, "unrelated"]

    old1 = seeded.get(Submission, "old-1")
    assert old1.status == "submitted"
    assert old1.missions == ["m1", "m2"]
    assert seeded.get(Submission, "old-2").approved_by == "kim"
    assert check_admin_password(get_settings(seeded), "letmein")
    assert get_settings(seeded).admin_password_hash != "letmein"


def test_run_twice_does_not_duplicate(seeded):
    LegacyMigration(MemoryLegacyStore(_snapshot()), seeded).run()
    second = LegacyMigration(MemoryLegacyStore(_snapshot()), seeded)
    assert second.needs_migration() is False
    result = second.run()
    assert result.submissions_migrated == 0
    assert seeded.scalar(select(func.count()).select_from(Submission)) == 2


def test_json_file_store_persists(tmp_path, seeded):
    path = tmp_path / "legacy_store.json"
    path.write_text(json.dumps({
        "working_missions_c1": ["m1", "m2"],
        "daily_required_missions": "5",
    }))
    store = JsonFileLegacyStore(str(path))
    assert json.loads(store.get("working_missions_c1")) == ["m1", "m2"]

    LegacyMigration(store, seeded).run()

    on_disk = json.loads(path.read_text())
    assert on_disk[COMPLETED_KEY] == "true"
    assert "working_missions_c1" not in on_disk
    assert get_settings(seeded).daily_required_missions == 5


def test_out_of_range_daily_requirement_is_skipped(seeded):
    for raw in ("0", "-2", "51", "lots"):
        store = MemoryLegacyStore({"daily_required_missions": raw})
        migration = LegacyMigration(store, seeded)
        migration.migrate_system_settings()
        assert migration.result.settings_migrated == []
        assert get_settings(seeded).daily_required_missions == 3
        assert store.get("daily_required_missions") is None

    migration = LegacyMigration(MemoryLegacyStore({"daily_required_missions": "50"}), seeded)
    migration.migrate_system_settings()
    assert get_settings(seeded).daily_required_missions == 50
