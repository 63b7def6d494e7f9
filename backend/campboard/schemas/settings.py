# backend/campboard/schemas/settings.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from campboard.camp_settings import MAX_DAILY_REQUIRED, MIN_DAILY_REQUIRED


class SettingsOut(BaseModel):
    daily_required_missions: int
    timezone: str
    daily_reset_hour: int
    auto_approve_submissions: bool

    model_config = ConfigDict(from_attributes=True)


class SettingsUpdate(BaseModel):
    daily_required_missions: Optional[int] = Field(default=None, ge=MIN_DAILY_REQUIRED, le=MAX_DAILY_REQUIRED)
    admin_password: Optional[str] = Field(default=None, min_length=1)
    timezone: Optional[str] = None
    daily_reset_hour: Optional[int] = Field(default=None, ge=0, le=23)
    auto_approve_submissions: Optional[bool] = None

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, v):
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone {v!r}")
        return v


class AdminLogin(BaseModel):
    password: str
