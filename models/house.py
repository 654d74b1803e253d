# models/house.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class HouseBase(BaseModel):
    name: str
    address: Optional[str] = None
    postcode: Optional[str] = None


class HouseCreate(HouseBase):
    """No ID supplied; Supabase generates the UUID."""
    pass


class HouseUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    postcode: Optional[str] = None
    active: Optional[bool] = None


class HouseRead(HouseBase):
    id: str
    active: bool = True
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def normalize_id(cls, v):
        return str(v)
