# backend/campboard/config.py
import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql+psycopg://campboard:devpass@db:5432/campboard",
)

# Seed values for the system_settings row; the row wins once it exists
APP_TZ = os.getenv("APP_TZ", "UTC")
DAILY_RESET_HOUR = int(os.getenv("DAILY_RESET_HOUR", "0"))
DAILY_REQUIRED_MISSIONS = int(os.getenv("DAILY_REQUIRED_MISSIONS", "3"))
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
AUTO_APPROVE_SUBMISSIONS = _flag("AUTO_APPROVE_SUBMISSIONS", "true")

FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LEGACY_STORE_PATH = os.getenv("LEGACY_STORE_PATH", "legacy_store.json")
