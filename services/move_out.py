# services/move_out.py

"""Move-out intention recording and coordinator sign-off."""

from datetime import date
from typing import List, Optional, Union

from core.config import settings
from core.errors import StateError, ValidationError
from core.logging_config import logger
from core.notifications import notify
from core.permission_helpers import (
    get_coordinated_house_ids,
    is_admin,
    require_room_coordinator,
    require_tenancy_owner,
)
from core.supabase_helpers import (
    delete_rows,
    get_by_id,
    insert_row,
    select_rows,
    update_rows,
)
from core.utils import is_blank, utc_now_iso
from dependencies.auth import CurrentUser
from models.enums import ReviewDecision, SignOffStatus, TenancyStatus
from services.tenancy_status import (
    get_tenancy,
    require_transition,
    transition_or_compensate,
)


OPEN_SIGN_OFF_STATUSES = [SignOffStatus.pending.value, SignOffStatus.approved.value]


def get_open_intention(tenancy_id: str) -> Optional[dict]:
    """The PENDING/APPROVED intention for a tenancy, if any."""
    rows = select_rows(
        "move_out_intentions",
        {"tenancy_id": tenancy_id, "sign_off_status": OPEN_SIGN_OFF_STATUSES},
        order="submitted_at",
        desc=True,
        limit=1,
    )
    return rows[0] if rows else None


def _check_photo_list(photos: List[str], label: str) -> List[str]:
    cleaned = [p for p in photos if not is_blank(p)]
    if len(cleaned) > settings.MAX_PHOTOS_PER_CATEGORY:
        raise ValidationError(
            f"Too many {label} photos: at most {settings.MAX_PHOTOS_PER_CATEGORY} allowed"
        )
    return cleaned


# -----------------------------------------------------
# Tenant: submit move-out intention
# -----------------------------------------------------
def submit_move_out_intention(
    user: CurrentUser,
    tenancy_id: str,
    planned_move_out_date: Union[date, str],
    notes: Optional[str] = None,
    key_area_photos: Optional[List[str]] = None,
    damage_photos: Optional[List[str]] = None,
    rent_paid_up: bool = False,
    areas_cleaned: bool = False,
    has_damage: bool = False,
    damage_description: Optional[str] = None,
) -> dict:
    tenancy = get_tenancy(tenancy_id)
    require_tenancy_owner(user, tenancy)

    if has_damage and is_blank(damage_description):
        raise ValidationError("Damage description is required when reporting damage")

    key_area = _check_photo_list(key_area_photos or [], "key area")
    damage = _check_photo_list(damage_photos or [], "damage")

    require_transition(tenancy, TenancyStatus.move_out_intended)
    if get_open_intention(tenancy_id):
        raise StateError("A move-out intention is already open for this tenancy")

    planned = (
        planned_move_out_date.isoformat()
        if isinstance(planned_move_out_date, date)
        else planned_move_out_date
    )

    intention = insert_row(
        "move_out_intentions",
        {
            "tenancy_id": tenancy_id,
            "planned_move_out_date": planned,
            "notes": None if is_blank(notes) else notes.strip(),
            "key_area_photos": key_area,
            "damage_photos": damage,
            "rent_paid_up": rent_paid_up,
            "areas_cleaned": areas_cleaned,
            "has_damage": has_damage,
            "damage_description": damage_description.strip() if has_damage else None,
            "sign_off_status": SignOffStatus.pending.value,
            "submitted_at": utc_now_iso(),
        },
    )

    transition_or_compensate(
        tenancy,
        TenancyStatus.move_out_intended,
        undo=lambda: delete_rows("move_out_intentions", {"id": intention["id"]}),
        written=f"move-out intention {intention['id']}",
    )

    logger.info(f"Tenant {user.id} submitted move-out intention {intention['id']}")

    notify(
        "move_out_intention",
        {
            "tenancy_id": tenancy_id,
            "intention_id": intention["id"],
            "planned_move_out_date": planned,
            "has_damage": has_damage,
        },
    )
    return intention


# -----------------------------------------------------
# Coordinator: approve / reject
# -----------------------------------------------------
def review_move_out_intention(
    user: CurrentUser,
    intention_id: str,
    decision: Union[ReviewDecision, str],
    coordinator_notes: Optional[str],
) -> dict:
    if is_blank(coordinator_notes):
        raise ValidationError("Coordinator notes are required to approve or reject")

    try:
        decision = ReviewDecision(decision)
    except ValueError:
        raise ValidationError(f"Unknown review decision: {decision}")

    intention = get_by_id("move_out_intentions", intention_id, "Move-out intention")
    tenancy = get_tenancy(intention["tenancy_id"])
    require_room_coordinator(user, tenancy["room_id"])

    if intention.get("sign_off_status") != SignOffStatus.pending.value:
        raise StateError(
            f"Move-out intention already {intention.get('sign_off_status')}"
        )

    outcome = (
        SignOffStatus.approved if decision == ReviewDecision.approve else SignOffStatus.rejected
    )
    rows = update_rows(
        "move_out_intentions",
        {"id": intention_id},
        {
            "sign_off_status": outcome.value,
            "coordinator_notes": coordinator_notes.strip(),
            "coordinator_signed_off_by": user.id,
            "coordinator_signed_off_at": utc_now_iso(),
        },
    )

    logger.info(f"Move-out intention {intention_id} {outcome.value} by {user.id}")
    return rows[0] if rows else intention


# -----------------------------------------------------
# Coordinator / admin listing
# -----------------------------------------------------
def list_move_out_intentions(user: CurrentUser, status: Optional[str] = None) -> List[dict]:
    filters = {}
    if status:
        filters["sign_off_status"] = status

    if not is_admin(user):
        house_ids = get_coordinated_house_ids(user) or []
        if not house_ids:
            return []
        rooms = select_rows("rooms", {"house_id": house_ids}, columns="id")
        if not rooms:
            return []
        tenancies = select_rows(
            "tenancies", {"room_id": [r["id"] for r in rooms]}, columns="id"
        )
        if not tenancies:
            return []
        filters["tenancy_id"] = [t["id"] for t in tenancies]

    return select_rows(
        "move_out_intentions",
        filters,
        order="submitted_at",
        desc=True,
    )
