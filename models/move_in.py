# models/move_in.py

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class MoveInComplete(BaseModel):
    # PNG data URL (data:image/png;base64,...) or bare base64
    signature_image: str = ""


class MoveInAcknowledgementRead(BaseModel):
    id: str
    tenancy_id: str
    inspection_id: Optional[str] = None
    signed_by: str
    signed_at: datetime
    signature_image_url: str
    audit_json: Optional[dict] = None


class PreviousTenantEvidence(BaseModel):
    tenancy_id: str
    intention_id: str
    key_area_photos: List[str] = Field(default_factory=list)
    damage_photos: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    damage_description: Optional[str] = None
    inspection_id: Optional[str] = None
