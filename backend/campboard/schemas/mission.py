# backend/campboard/schemas/mission.py
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

class MissionBase(BaseModel):
    title: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    icon: str = ""
    is_mandatory: bool = False
    is_active: bool = True
    sort_order: Optional[int] = None

class MissionCreate(MissionBase):
    id: str = Field(..., min_length=1, max_length=64)

class MissionUpdate(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    icon: Optional[str] = None
    is_mandatory: Optional[bool] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None

class MissionOut(BaseModel):
    id: str
    title: str
    type: str
    icon: str
    is_mandatory: bool
    is_active: bool
    sort_order: int

    model_config = ConfigDict(from_attributes=True)

class MissionReorder(BaseModel):
    mission_ids: List[str]
