# services/move_in.py

"""Move-in acknowledgement: keys, signature, and prior-tenant evidence."""

import base64
import binascii
from typing import Optional

from core.config import settings
from core.errors import AuthorizationError, StateError, ValidationError
from core.logging_config import logger
from core.notifications import notify
from core.permission_helpers import (
    is_admin,
    is_coordinator,
    require_room_coordinator,
    require_tenancy_owner,
)
from core.storage import build_object_path, upload_object
from core.supabase_helpers import delete_rows, insert_row, select_rows, update_rows
from core.utils import is_blank, utc_now_iso
from dependencies.auth import CurrentUser
from models.enums import InspectionStatus, LEGACY_PENDING_STATUS, TenancyStatus
from services.tenancy_status import get_tenancy, transition_or_compensate


MOVE_IN_STATUSES = {TenancyStatus.move_in_pending_signature.value, LEGACY_PENDING_STATUS}

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def decode_signature(signature_image: Optional[str]) -> bytes:
    """
    Accept a data URL (``data:image/png;base64,...``) or bare base64 and
    return the raw image bytes.
    """
    if is_blank(signature_image):
        raise ValidationError("Please provide your signature")

    payload = signature_image.strip()
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        if ";base64" not in header or not header[5:].startswith("image/"):
            raise ValidationError("Signature must be a base64 image data URL")

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Signature image is not valid base64")

    if not raw:
        raise ValidationError("Please provide your signature")
    return raw


# -----------------------------------------------------
# Tenant: keys received
# -----------------------------------------------------
def confirm_keys_received(user: CurrentUser, tenancy_id: str) -> dict:
    tenancy = get_tenancy(tenancy_id)
    require_tenancy_owner(user, tenancy)

    if tenancy.get("status") == TenancyStatus.ended.value:
        raise StateError("Tenancy has ended")

    data = {"keys_received": True, "keys_received_at": utc_now_iso()}
    rows = update_rows(
        "tenancies",
        {"id": tenancy_id, "tenant_user_id": user.id},
        data,
    )

    logger.info(f"Tenant {user.id} confirmed keys for tenancy {tenancy_id}")
    return rows[0] if rows else {**tenancy, **data}


# -----------------------------------------------------
# Read side: what the previous tenant left behind
# -----------------------------------------------------
def _latest_final_inspection_id(tenancy_id: str) -> Optional[str]:
    rows = select_rows(
        "inspections",
        {"tenancy_id": tenancy_id, "status": InspectionStatus.final.value},
        columns="id, finalised_at",
        order="finalised_at",
        desc=True,
        limit=1,
    )
    return rows[0]["id"] if rows else None


def find_previous_tenant_evidence(room_id: str) -> Optional[dict]:
    previous = select_rows(
        "tenancies",
        {"room_id": room_id, "status": TenancyStatus.ended.value},
        columns="id, end_date",
        order="end_date",
        desc=True,
        limit=1,
    )
    if not previous:
        logger.info(f"No previous tenancy found for room {room_id}")
        return None

    previous_id = previous[0]["id"]
    intentions = select_rows(
        "move_out_intentions",
        {"tenancy_id": previous_id},
        columns="id, key_area_photos, damage_photos, notes, damage_description",
        order="submitted_at",
        desc=True,
        limit=1,
    )
    if not intentions:
        return None

    intention = intentions[0]
    return {
        "tenancy_id": previous_id,
        "intention_id": intention["id"],
        "key_area_photos": intention.get("key_area_photos") or [],
        "damage_photos": intention.get("damage_photos") or [],
        "notes": intention.get("notes"),
        "damage_description": intention.get("damage_description"),
        "inspection_id": _latest_final_inspection_id(previous_id),
    }


def get_previous_tenant_evidence(user: CurrentUser, room_id: str) -> Optional[dict]:
    """
    Evidence from the most recent ENDED tenancy of the room, or None.
    Tenants may only look at rooms they currently hold a tenancy in.
    """
    if is_admin(user) or is_coordinator(user):
        require_room_coordinator(user, room_id)
    else:
        own = [
            t for t in select_rows(
                "tenancies",
                {"room_id": room_id, "tenant_user_id": user.id},
                columns="id, status",
            )
            if t.get("status") != TenancyStatus.ended.value
        ]
        if not own:
            raise AuthorizationError("You do not have a tenancy in this room")

    return find_previous_tenant_evidence(room_id)


# -----------------------------------------------------
# Tenant: sign move-in acknowledgement
# -----------------------------------------------------
def complete_move_in(
    user: CurrentUser,
    tenancy_id: str,
    signature_image: Optional[str],
    audit: Optional[dict] = None,
) -> dict:
    tenancy = get_tenancy(tenancy_id)
    require_tenancy_owner(user, tenancy)

    if not tenancy.get("keys_received"):
        raise ValidationError("Please confirm you have received your keys first")

    signature = decode_signature(signature_image)

    if tenancy.get("status") not in MOVE_IN_STATUSES:
        raise StateError(
            f"Tenancy is not awaiting a move-in signature (status {tenancy.get('status')})"
        )

    evidence = find_previous_tenant_evidence(tenancy["room_id"])

    path = build_object_path(tenancy_id, "png")
    content_type = "image/png" if signature.startswith(PNG_MAGIC) else "application/octet-stream"
    signature_url = upload_object(settings.SIGNATURE_BUCKET, path, signature, content_type)

    signed_at = utc_now_iso()
    audit_json = {
        **(audit or {}),
        "keys_received_at": tenancy.get("keys_received_at"),
        "previous_status": tenancy.get("status"),
        "reviewed_intention_id": evidence["intention_id"] if evidence else None,
        "signature_path": path,
    }

    acknowledgement = insert_row(
        "move_in_acknowledgements",
        {
            "tenancy_id": tenancy_id,
            "inspection_id": evidence["inspection_id"] if evidence else None,
            "signed_by": user.id,
            "signed_at": signed_at,
            "signature_image_url": signature_url,
            "audit_json": audit_json,
        },
    )

    transition_or_compensate(
        tenancy,
        TenancyStatus.occupied,
        undo=lambda: delete_rows("move_in_acknowledgements", {"id": acknowledgement["id"]}),
        written=f"move-in acknowledgement {acknowledgement['id']}",
    )

    logger.info(f"Tenant {user.id} signed move-in for tenancy {tenancy_id}")

    notify(
        "move_in_signed",
        {"tenancy_id": tenancy_id, "acknowledgement_id": acknowledgement["id"], "signed_at": signed_at},
    )
    return acknowledgement


# -----------------------------------------------------
# Tenant views
# -----------------------------------------------------
def get_pending_move_in_tenancy(user: CurrentUser) -> Optional[dict]:
    rows = select_rows(
        "tenancies",
        {
            "tenant_user_id": user.id,
            "status": sorted(MOVE_IN_STATUSES | {TenancyStatus.occupied.value}),
        },
        order="created_at",
        desc=True,
        limit=1,
    )
    return rows[0] if rows else None
