# services/tenancies.py

"""Administrator tenancy management and tenant lookups."""

from typing import List, Optional

from core.errors import RemoteError, StateError, ValidationError
from core.logging_config import logger
from core.supabase_helpers import get_by_id, insert_row, select_rows
from core.utils import drop_none, today_iso
from dependencies.auth import CurrentUser
from models.enums import RoomSlot, TenancyStatus, UserRole
from models.tenancy import TenancyCreate
from services.tenancy_status import (
    LIVE_STATUS_VALUES,
    get_tenancy,
    transition_tenancy,
)


def _profiles_by_id(user_ids: List[str]) -> dict:
    if not user_ids:
        return {}
    try:
        rows = select_rows("profiles", {"id": user_ids}, columns="id, name, email")
    except RemoteError as e:
        logger.error(f"Error fetching tenant profiles: {e}")
        return {}
    return {p["id"]: p for p in rows}


def attach_tenants(tenancies: List[dict]) -> List[dict]:
    profiles = _profiles_by_id(
        sorted({t["tenant_user_id"] for t in tenancies if t.get("tenant_user_id")})
    )
    return [{**t, "tenant": profiles.get(t.get("tenant_user_id"))} for t in tenancies]


def list_tenancies() -> List[dict]:
    tenancies = attach_tenants(select_rows("tenancies", order="created_at", desc=True))
    room_ids = sorted({t["room_id"] for t in tenancies if t.get("room_id")})
    rooms = {}
    if room_ids:
        rooms = {
            r["id"]: r
            for r in select_rows("rooms", {"id": room_ids}, columns="id, label, house_id")
        }
    return [{**t, "room": rooms.get(t.get("room_id"))} for t in tenancies]


# -----------------------------------------------------
# Slot rules: capacity-2 rooms need A/B, capacity-1 rooms none
# -----------------------------------------------------
def validate_slot(room: dict, slot: Optional[RoomSlot]):
    capacity = int(room.get("capacity") or 1)
    if capacity == 2 and slot is None:
        raise ValidationError("Slot A or B is required for a two-person room")
    if capacity == 1 and slot is not None:
        raise ValidationError("Single rooms do not take a slot")


def find_active_tenancy_for_slot(room_id: str, slot: Optional[str]) -> Optional[dict]:
    rows = select_rows(
        "tenancies",
        {"room_id": room_id, "status": LIVE_STATUS_VALUES},
    )
    for row in rows:
        if row.get("slot") == slot:
            return row
    return None


def create_tenancy(payload: TenancyCreate) -> dict:
    room = get_by_id("rooms", payload.room_id, "Room")
    validate_slot(room, payload.slot)

    tenant = get_by_id("profiles", payload.tenant_user_id, "Tenant")
    if tenant.get("role") != UserRole.tenant.value:
        raise ValidationError("Tenancies can only be created for TENANT users")

    slot = payload.slot.value if payload.slot else None
    if find_active_tenancy_for_slot(payload.room_id, slot):
        raise StateError(
            f"Room already has an active tenancy{' in slot ' + slot if slot else ''}"
        )

    status = (
        TenancyStatus.move_in_pending_signature
        if payload.requires_move_in_signature
        else TenancyStatus.occupied
    )

    data = drop_none(
        {
            "room_id": payload.room_id,
            "tenant_user_id": payload.tenant_user_id,
            "start_date": payload.start_date.isoformat(),
            "end_date": payload.end_date.isoformat() if payload.end_date else None,
            "slot": slot,
            "rental_price": payload.rental_price,
            "status": status.value,
        }
    )
    data["keys_received"] = False

    tenancy = insert_row("tenancies", data)
    logger.info(f"Tenancy {tenancy['id']} created for room {payload.room_id} ({status.value})")
    return tenancy


def end_tenancy(tenancy_id: str) -> dict:
    """Administrative override: ENDED from any non-terminal status."""
    tenancy = get_tenancy(tenancy_id)
    return transition_tenancy(tenancy, TenancyStatus.ended, {"end_date": today_iso()})


# -----------------------------------------------------
# Tenant: current tenancy
# -----------------------------------------------------
def get_active_tenancy(user: CurrentUser) -> Optional[dict]:
    rows = select_rows(
        "tenancies",
        {
            "tenant_user_id": user.id,
            "status": LIVE_STATUS_VALUES,
        },
        order="created_at",
        desc=True,
        limit=1,
    )
    if not rows:
        return None

    tenancy = rows[0]
    room = select_rows("rooms", {"id": tenancy["room_id"]}, columns="id, label, house_id", limit=1)
    if room:
        house = select_rows("houses", {"id": room[0]["house_id"]}, columns="id, name, address", limit=1)
        tenancy["room"] = {**room[0], "house": house[0] if house else None}
    return tenancy
