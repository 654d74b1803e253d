# services/houses.py

"""Houses, rooms and coordinator assignments (administrator surface)."""

from typing import List, Optional

from core.errors import NotFoundError, ValidationError
from core.logging_config import logger
from core.permission_helpers import get_coordinated_house_ids, require_house_coordinator
from core.supabase_helpers import (
    delete_rows,
    get_by_id,
    insert_row,
    select_rows,
    update_rows,
)
from core.utils import sanitize
from dependencies.auth import CurrentUser
from models.enums import TenancyStatus, UserRole
from models.house import HouseCreate, HouseUpdate
from models.room import RoomCreate, RoomUpdate
from services.tenancies import attach_tenants


# =====================================================
# HOUSES
# =====================================================
def list_houses(user: CurrentUser) -> List[dict]:
    house_ids = get_coordinated_house_ids(user)
    if house_ids is None:
        return select_rows("houses", order="name")
    if not house_ids:
        return []
    return select_rows("houses", {"id": house_ids}, order="name")


def get_house(user: CurrentUser, house_id: str) -> dict:
    require_house_coordinator(user, house_id)
    return get_by_id("houses", house_id, "House")


def create_house(payload: HouseCreate) -> dict:
    data = sanitize(payload.model_dump())
    if not data.get("name"):
        raise ValidationError("House name is required")
    house = insert_row("houses", data)
    logger.info(f"House {house['id']} created: {house.get('name')}")
    return house


def update_house(house_id: str, payload: HouseUpdate) -> dict:
    data = sanitize(payload.model_dump(exclude_unset=True))
    rows = update_rows("houses", {"id": house_id}, data)
    if not rows:
        raise NotFoundError("House not found")
    return rows[0]


def delete_house(house_id: str):
    get_by_id("houses", house_id, "House")
    delete_rows("houses", {"id": house_id})
    logger.info(f"House {house_id} deleted")


# =====================================================
# ROOMS
# =====================================================
def list_rooms_with_tenancies(house_id: str) -> List[dict]:
    """
    Rooms ordered by label; each carries its OCCUPIED tenancies, or the
    latest tenancy when none is occupied.
    """
    rooms = select_rows("rooms", {"house_id": house_id}, order="label")
    if not rooms:
        return []

    tenancies = attach_tenants(
        select_rows(
            "tenancies",
            {"room_id": [r["id"] for r in rooms]},
            order="created_at",
            desc=True,
        )
    )

    by_room = {}
    for t in tenancies:
        by_room.setdefault(t["room_id"], []).append(t)

    result = []
    for room in rooms:
        room_tenancies = by_room.get(room["id"], [])
        occupied = [t for t in room_tenancies if t.get("status") == TenancyStatus.occupied.value]
        if not room_tenancies:
            logger.debug(f"[Room {room.get('label')}] No tenancies found")
        elif not occupied:
            logger.debug(
                f"[Room {room.get('label')}] No OCCUPIED tenancies, showing latest: "
                f"{room_tenancies[0].get('status')}"
            )
        result.append({**room, "tenancies": occupied or room_tenancies[:1]})
    return result


def create_room(house_id: str, payload: RoomCreate) -> dict:
    get_by_id("houses", house_id, "House")
    data = sanitize(payload.model_dump())
    if not data.get("label"):
        raise ValidationError("Room label is required")
    data["house_id"] = house_id
    return insert_row("rooms", data)


def update_room(room_id: str, payload: RoomUpdate) -> dict:
    data = sanitize(payload.model_dump(exclude_unset=True))
    rows = update_rows("rooms", {"id": room_id}, data)
    if not rows:
        raise NotFoundError("Room not found")
    return rows[0]


def delete_room(room_id: str):
    get_by_id("rooms", room_id, "Room")
    delete_rows("rooms", {"id": room_id})


# =====================================================
# COORDINATORS
# =====================================================
def list_house_coordinators(house_id: str) -> List[dict]:
    assignments = select_rows("house_coordinators", {"house_id": house_id})
    user_ids = [a["user_id"] for a in assignments]
    profiles = {}
    if user_ids:
        profiles = {
            p["id"]: p
            for p in select_rows("profiles", {"id": user_ids}, columns="id, name, email")
        }
    return [{**a, "user": profiles.get(a["user_id"])} for a in assignments]


def assign_coordinator(house_id: str, user_id: str) -> dict:
    get_by_id("houses", house_id, "House")
    profile = get_by_id("profiles", user_id, "User")
    if profile.get("role") != UserRole.coordinator.value:
        raise ValidationError("Only COORDINATOR users can be assigned to a house")

    existing = select_rows("house_coordinators", {"house_id": house_id, "user_id": user_id})
    if existing:
        return existing[0]

    assignment = insert_row("house_coordinators", {"house_id": house_id, "user_id": user_id})
    logger.info(f"Coordinator {user_id} assigned to house {house_id}")
    return assignment


def remove_coordinator(assignment_id: str, house_id: Optional[str] = None):
    assignment = get_by_id("house_coordinators", assignment_id, "Coordinator assignment")
    if house_id and assignment.get("house_id") != house_id:
        raise NotFoundError("Coordinator assignment not found")
    delete_rows("house_coordinators", {"id": assignment_id})
    logger.info(f"Coordinator assignment {assignment_id} removed")
