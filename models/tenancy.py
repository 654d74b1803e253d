# models/tenancy.py

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .enums import LEGACY_PENDING_STATUS, RoomSlot, TenancyStatus


class TenancyCreate(BaseModel):
    room_id: str
    tenant_user_id: str
    start_date: date
    end_date: Optional[date] = None
    slot: Optional[RoomSlot] = None
    rental_price: Optional[float] = Field(None, ge=0)

    # New tenant must sign a move-in acknowledgement before OCCUPIED
    requires_move_in_signature: bool = False


class TenancyRead(BaseModel):
    id: str
    room_id: str
    tenant_user_id: str
    slot: Optional[RoomSlot] = None
    start_date: date
    end_date: Optional[date] = None
    status: TenancyStatus
    rental_price: Optional[float] = None
    keys_received: bool = False
    keys_received_at: Optional[datetime] = None

    model_config = {"extra": "allow"}

    @field_validator("status", mode="before")
    def map_legacy_status(cls, v):
        if v == LEGACY_PENDING_STATUS:
            return TenancyStatus.move_in_pending_signature
        return v
