# routers/move_out.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import CurrentUser, requires_role
from core.permission_helpers import requires_permission
from models.enums import SignOffStatus
from models.move_out import MoveOutIntentionCreate, MoveOutIntentionRead, MoveOutReview
from services import move_out as move_out_service


router = APIRouter(
    prefix="/move-out",
    tags=["Move-Out"],
)


# -------------------------------------------------------------
# Tenant submits intention (photos already uploaded)
# -------------------------------------------------------------
@router.post("", response_model=MoveOutIntentionRead, status_code=201)
def submit_intention(
    payload: MoveOutIntentionCreate,
    current_user: CurrentUser = Depends(requires_role(["TENANT"])),
):
    return move_out_service.submit_move_out_intention(
        current_user,
        tenancy_id=payload.tenancy_id,
        planned_move_out_date=payload.planned_move_out_date,
        notes=payload.notes,
        key_area_photos=payload.key_area_photos,
        damage_photos=payload.damage_photos,
        rent_paid_up=payload.rent_paid_up,
        areas_cleaned=payload.areas_cleaned,
        has_damage=payload.has_damage,
        damage_description=payload.damage_description,
    )


# -------------------------------------------------------------
# Coordinator review queue
# -------------------------------------------------------------
@router.get("", response_model=List[MoveOutIntentionRead])
def list_intentions(
    status: Optional[SignOffStatus] = Query(None, description="PENDING, APPROVED or REJECTED"),
    current_user: CurrentUser = Depends(requires_permission("move_out:read")),
):
    return move_out_service.list_move_out_intentions(
        current_user, status.value if status else None
    )


@router.post("/{intention_id}/review", response_model=MoveOutIntentionRead)
def review_intention(
    intention_id: str,
    payload: MoveOutReview,
    current_user: CurrentUser = Depends(requires_permission("move_out:review")),
):
    return move_out_service.review_move_out_intention(
        current_user, intention_id, payload.decision, payload.coordinator_notes
    )
