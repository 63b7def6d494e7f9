# backend/campboard/schemas/camp_session.py
from __future__ import annotations
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class SessionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    start_date: date
    end_date: date
    is_active: bool = False

    @field_validator("end_date")
    @classmethod
    def _not_before_start(cls, end, info):
        start = info.data.get("start_date")
        if start and end < start:
            raise ValueError("end_date must be on/after start_date")
        return end


class SessionUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SessionOut(BaseModel):
    id: str
    name: str
    start_date: date
    end_date: date
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
