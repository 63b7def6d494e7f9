# backend/campboard/schemas/people.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def _strip_required(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class BunkIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str
    display_name: str

    @field_validator("id", "name", "display_name")
    @classmethod
    def _required(cls, v):
        return _strip_required(v)


class BunkUpdate(BaseModel):
    name: Optional[str] = None
    display_name: Optional[str] = None


class BunkOut(BaseModel):
    id: str
    name: str
    display_name: str

    model_config = ConfigDict(from_attributes=True)


class PersonCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=128)
    bunk_id: str
    access_code: Optional[str] = Field(default=None, max_length=16)

    @field_validator("id", "name", "bunk_id")
    @classmethod
    def _required(cls, v):
        return _strip_required(v)

    @field_validator("access_code")
    @classmethod
    def _upper_code(cls, v):
        if v is None:
            return v
        v = v.strip().upper()
        return v or None


class PersonUpdate(BaseModel):
    name: Optional[str] = None
    bunk_id: Optional[str] = None
    access_code: Optional[str] = Field(default=None, max_length=16)

    @field_validator("access_code")
    @classmethod
    def _upper_code(cls, v):
        return v.strip().upper() if v else v


class PersonOut(BaseModel):
    id: str
    name: str
    code: str
    bunk_id: str
    bunk_name: str


class CamperCreate(PersonCreate):
    pass


class StaffCreate(PersonCreate):
    pass
