# routers/rooms.py

from fastapi import APIRouter, Depends
from typing import Optional

from dependencies.auth import CurrentUser, get_current_user, requires_role
from models.move_in import PreviousTenantEvidence
from models.room import RoomRead, RoomUpdate
from services import houses as house_service
from services.move_in import get_previous_tenant_evidence


router = APIRouter(
    prefix="/rooms",
    tags=["Rooms"],
)


@router.patch("/{room_id}", response_model=RoomRead)
def update_room(
    room_id: str,
    payload: RoomUpdate,
    current_user: CurrentUser = Depends(requires_role(["ADMIN"])),
):
    return house_service.update_room(room_id, payload)


@router.delete("/{room_id}")
def delete_room(room_id: str, current_user: CurrentUser = Depends(requires_role(["ADMIN"]))):
    house_service.delete_room(room_id)
    return {"success": True}


# -------------------------------------------------------------
# Evidence the previous tenant left for this room (None if none)
# -------------------------------------------------------------
@router.get("/{room_id}/previous-evidence", response_model=Optional[PreviousTenantEvidence])
def previous_evidence(room_id: str, current_user: CurrentUser = Depends(get_current_user)):
    return get_previous_tenant_evidence(current_user, room_id)
