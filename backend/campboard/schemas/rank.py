# backend/campboard/schemas/rank.py
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

class RankCreate(BaseModel):
    rank_name: str = Field(..., min_length=1, max_length=64)
    missions_required: int = Field(..., gt=0)
    qualified_days_required: int = Field(..., gt=0)
    rank_order: int = 0
    is_active: bool = True

class RankUpdate(BaseModel):
    rank_name: Optional[str] = None
    missions_required: Optional[int] = Field(default=None, gt=0)
    qualified_days_required: Optional[int] = Field(default=None, gt=0)
    rank_order: Optional[int] = None
    is_active: Optional[bool] = None

class RankOut(BaseModel):
    id: str
    rank_name: str
    missions_required: int
    qualified_days_required: int
    rank_order: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
