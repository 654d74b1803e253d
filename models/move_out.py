# models/move_out.py

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from .enums import ReviewDecision, SignOffStatus


class MoveOutIntentionCreate(BaseModel):
    """Tenant self-report. Photos are uploaded first; only URLs arrive here."""
    tenancy_id: str
    planned_move_out_date: date
    notes: Optional[str] = None

    key_area_photos: List[str] = Field(default_factory=list)
    damage_photos: List[str] = Field(default_factory=list)

    rent_paid_up: bool = False
    areas_cleaned: bool = False
    has_damage: bool = False
    damage_description: Optional[str] = None


class MoveOutReview(BaseModel):
    decision: ReviewDecision
    coordinator_notes: str = ""


class MoveOutIntentionRead(BaseModel):
    id: str
    tenancy_id: str
    planned_move_out_date: date
    notes: Optional[str] = None
    key_area_photos: List[str] = []
    damage_photos: List[str] = []
    rent_paid_up: bool = False
    areas_cleaned: bool = False
    has_damage: bool = False
    damage_description: Optional[str] = None
    sign_off_status: SignOffStatus
    coordinator_notes: Optional[str] = None
    coordinator_signed_off_by: Optional[str] = None
    coordinator_signed_off_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None

    model_config = {"extra": "allow"}
