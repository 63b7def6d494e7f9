# backend/campboard/camp_day.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

logger = logging.getLogger(__name__)


def _zone(tz_name: str):
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("[camp_day] Unknown timezone %r, falling back to UTC", tz_name)
        return timezone.utc


def camp_today(tz_name: str = "UTC", reset_hour: int = 0, now: Optional[datetime] = None) -> date:
    """
    The camp's current day in the configured timezone.
    Before the reset hour the previous calendar day is still "today".
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(_zone(tz_name))
    if local.hour < reset_hour:
        return local.date() - timedelta(days=1)
    return local.date()


def settings_today(settings, now: Optional[datetime] = None) -> date:
    return camp_today(settings.timezone, settings.daily_reset_hour, now)


def week_days(week_start: date) -> list[date]:
    return [week_start + timedelta(days=i) for i in range(7)]
