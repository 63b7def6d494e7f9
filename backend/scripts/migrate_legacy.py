# backend/scripts/migrate_legacy.py
"""
One-off move of a legacy browser-storage dump into the database.

    python scripts/migrate_legacy.py [path/to/legacy_store.json] [--force]
"""
import logging
import sys

from campboard import config
from campboard.db import SessionLocal
from campboard.legacy import JsonFileLegacyStore, LegacyMigration

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("migrate_legacy")


def main(argv) -> int:
    args = [a for a in argv if not a.startswith("--")]
    force = "--force" in argv
    path = args[0] if args else config.LEGACY_STORE_PATH

    store = JsonFileLegacyStore(path)
    with SessionLocal() as db:
        migration = LegacyMigration(store, db)
        if migration.is_completed() and not force:
            logger.info("[legacy] %s was already migrated; pass --force to rerun", path)
            return 0
        if not force and not migration.needs_migration():
            logger.info("[legacy] Nothing to migrate in %s", path)
            return 0
        result = migration.run()
    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
