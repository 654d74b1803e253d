# models/inspection.py

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel

from .enums import ChecklistKey, InspectionStatus


class InspectionCreate(BaseModel):
    tenancy_id: str
    room_id: str


class ChecklistItemInput(BaseModel):
    yes_no: bool = True
    description: str = ""


class ChecklistPayload(BaseModel):
    items: Dict[ChecklistKey, ChecklistItemInput]


class ChecklistItemRead(BaseModel):
    key: ChecklistKey
    label: str
    yes_no: bool
    description: str = ""


class InspectionRead(BaseModel):
    id: str
    tenancy_id: str
    room_id: str
    created_by: str
    status: InspectionStatus
    finalised_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"extra": "allow"}


class InspectionDetail(InspectionRead):
    checklist: List[ChecklistItemRead] = []
