# routers/houses.py

from fastapi import APIRouter, Depends
from typing import List

from dependencies.auth import CurrentUser, requires_role
from core.permission_helpers import requires_permission
from models.house import HouseCreate, HouseUpdate, HouseRead
from models.room import RoomCreate, RoomRead, RoomWithTenancies
from models.user import CoordinatorAssign
from services import houses as house_service


router = APIRouter(
    prefix="/houses",
    tags=["Houses"],
)

ADMIN_ONLY = requires_role(["ADMIN"])


# -------------------------------------------------------------
# LIST Houses (admins: all, coordinators: assigned houses)
# -------------------------------------------------------------
@router.get("", response_model=List[HouseRead])
def list_houses(current_user: CurrentUser = Depends(requires_permission("houses:read"))):
    return house_service.list_houses(current_user)


@router.get("/{house_id}", response_model=HouseRead)
def get_house(house_id: str, current_user: CurrentUser = Depends(requires_permission("houses:read"))):
    return house_service.get_house(current_user, house_id)


@router.post("", response_model=HouseRead, status_code=201)
def create_house(payload: HouseCreate, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return house_service.create_house(payload)


@router.patch("/{house_id}", response_model=HouseRead)
def update_house(house_id: str, payload: HouseUpdate, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return house_service.update_house(house_id, payload)


@router.delete("/{house_id}")
def delete_house(house_id: str, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    house_service.delete_house(house_id)
    return {"success": True}


# -------------------------------------------------------------
# Rooms within a house
# -------------------------------------------------------------
@router.get("/{house_id}/rooms", response_model=List[RoomWithTenancies])
def list_rooms(house_id: str, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return house_service.list_rooms_with_tenancies(house_id)


@router.post("/{house_id}/rooms", response_model=RoomRead, status_code=201)
def create_room(house_id: str, payload: RoomCreate, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return house_service.create_room(house_id, payload)


# -------------------------------------------------------------
# Coordinators assigned to a house
# -------------------------------------------------------------
@router.get("/{house_id}/coordinators")
def list_coordinators(house_id: str, current_user: CurrentUser = Depends(ADMIN_ONLY)):
    return house_service.list_house_coordinators(house_id)


@router.post("/{house_id}/coordinators", status_code=201)
def assign_coordinator(
    house_id: str,
    payload: CoordinatorAssign,
    current_user: CurrentUser = Depends(ADMIN_ONLY),
):
    return house_service.assign_coordinator(house_id, payload.user_id)


@router.delete("/{house_id}/coordinators/{assignment_id}")
def remove_coordinator(
    house_id: str,
    assignment_id: str,
    current_user: CurrentUser = Depends(ADMIN_ONLY),
):
    house_service.remove_coordinator(assignment_id, house_id)
    return {"success": True}
