# backend/campboard/schemas/points.py
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class WeeklyPointsIn(BaseModel):
    camper_id: str
    session_number: int = Field(..., ge=1)
    week_number: int = Field(..., ge=1)
    missions_completed: int = Field(default=0, ge=0)
    total_points: int = Field(default=0, ge=0)


class WeeklyPointsOut(WeeklyPointsIn):
    id: str

    model_config = ConfigDict(from_attributes=True)


class StatsOverrideIn(BaseModel):
    session_id: Optional[str] = None
    total_missions: Optional[int] = Field(default=None, ge=0)
    total_qualified_days: Optional[int] = Field(default=None, ge=0)


class StatsOverrideOut(StatsOverrideIn):
    id: str
    camper_id: str

    model_config = ConfigDict(from_attributes=True)
