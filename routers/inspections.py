# routers/inspections.py

from fastapi import APIRouter, Body, Depends
from typing import List, Optional

from core.permission_helpers import requires_permission
from dependencies.auth import CurrentUser
from models.inspection import ChecklistPayload, InspectionCreate, InspectionDetail, InspectionRead
from services import inspections as inspection_service


router = APIRouter(
    prefix="/inspections",
    tags=["Inspections"],
)

CAN_READ = requires_permission("inspections:read")
CAN_WRITE = requires_permission("inspections:write")


@router.get("", response_model=List[InspectionRead])
def list_inspections(current_user: CurrentUser = Depends(CAN_READ)):
    return inspection_service.list_inspections(current_user)


@router.post("", response_model=InspectionRead, status_code=201)
def create_inspection(payload: InspectionCreate, current_user: CurrentUser = Depends(CAN_WRITE)):
    return inspection_service.create_inspection(
        current_user, payload.tenancy_id, payload.room_id
    )


@router.get("/{inspection_id}", response_model=InspectionDetail)
def get_inspection(inspection_id: str, current_user: CurrentUser = Depends(CAN_READ)):
    return inspection_service.get_inspection(current_user, inspection_id)


# -------------------------------------------------------------
# Save draft checklist (full replace)
# -------------------------------------------------------------
@router.put("/{inspection_id}/checklist")
def save_checklist(
    inspection_id: str,
    payload: ChecklistPayload,
    current_user: CurrentUser = Depends(CAN_WRITE),
):
    rows = inspection_service.save_checklist(current_user, inspection_id, payload.items)
    return {"success": True, "items": rows}


# -------------------------------------------------------------
# Finalize (locks the inspection)
# -------------------------------------------------------------
@router.post("/{inspection_id}/finalize", response_model=InspectionRead)
def finalize_inspection(
    inspection_id: str,
    payload: Optional[ChecklistPayload] = Body(None),
    current_user: CurrentUser = Depends(CAN_WRITE),
):
    return inspection_service.finalize_inspection(
        current_user, inspection_id, payload.items if payload else None
    )
