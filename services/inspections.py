# services/inspections.py

"""
Move-out inspection checklist.

Checklist rows are replaced wholesale on every save (delete all, insert
the new set); previous answers are not kept. A FINAL inspection is frozen.
"""

from typing import Dict, List, Mapping, Optional, Union

from core.errors import StateError, ValidationError
from core.logging_config import logger
from core.notifications import notify
from core.permission_helpers import (
    get_coordinated_house_ids,
    is_admin,
    require_room_coordinator,
)
from core.supabase_helpers import (
    delete_rows,
    get_by_id,
    insert_row,
    insert_rows,
    select_rows,
    update_rows,
)
from core.utils import is_blank, utc_now_iso
from dependencies.auth import CurrentUser
from models.enums import CHECKLIST_LABELS, ChecklistKey, InspectionStatus, TenancyStatus
from models.inspection import ChecklistItemInput
from services.move_out import get_open_intention
from services.tenancy_status import (
    get_tenancy,
    require_transition,
    transition_or_compensate,
)


CHECKLIST_TABLE = "inspection_checklist_items"

ChecklistInput = Mapping[Union[ChecklistKey, str], Union[ChecklistItemInput, dict]]


def get_inspection_row(inspection_id: str) -> dict:
    return get_by_id("inspections", inspection_id, "Inspection")


def _require_draft(inspection: dict):
    if inspection.get("status") == InspectionStatus.final.value:
        raise StateError("Cannot edit a finalized inspection")


# -----------------------------------------------------
# Checklist normalisation + validation
# -----------------------------------------------------
def normalize_checklist(items: ChecklistInput) -> Dict[ChecklistKey, ChecklistItemInput]:
    normalized = {}
    for raw_key, raw_value in (items or {}).items():
        try:
            key = ChecklistKey(raw_key)
        except ValueError:
            raise ValidationError(f"Unknown checklist item: {raw_key}")

        if isinstance(raw_value, ChecklistItemInput):
            value = raw_value
        else:
            value = ChecklistItemInput(
                yes_no=raw_value.get("yes_no", True),
                description=raw_value.get("description") or "",
            )
        normalized[key] = value
    return normalized


def validate_checklist(
    items: Dict[ChecklistKey, ChecklistItemInput],
    require_all: bool = False,
):
    """
    Every "no" answer needs a description. With ``require_all`` every
    enumerated key must also be answered.
    """
    keys = list(ChecklistKey) if require_all else [k for k in ChecklistKey if k in items]

    for key in keys:
        label = CHECKLIST_LABELS[key]
        item = items.get(key)
        if item is None:
            raise ValidationError(f'Checklist item "{label}" ({key.value}) has not been answered')
        if not item.yes_no and is_blank(item.description):
            raise ValidationError(
                f'Please provide a description for "{label}" ({key.value})'
            )


def load_checklist(inspection_id: str) -> Dict[ChecklistKey, ChecklistItemInput]:
    rows = select_rows(CHECKLIST_TABLE, {"inspection_id": inspection_id})
    saved = {}
    for row in rows:
        try:
            key = ChecklistKey(row["key"])
        except ValueError:
            logger.warning(f"Ignoring unknown checklist key {row['key']} on {inspection_id}")
            continue
        saved[key] = ChecklistItemInput(
            yes_no=bool(row.get("yes_no")),
            description=row.get("description_if_no") or "",
        )
    return saved


def _checklist_rows(inspection_id: str, items: Dict[ChecklistKey, ChecklistItemInput]) -> List[dict]:
    return [
        {
            "inspection_id": inspection_id,
            "key": key.value,
            "yes_no": item.yes_no,
            "description_if_no": None if item.yes_no else item.description.strip(),
        }
        for key, item in sorted(items.items(), key=lambda kv: list(ChecklistKey).index(kv[0]))
    ]


def _replace_checklist(inspection_id: str, items: Dict[ChecklistKey, ChecklistItemInput]) -> List[dict]:
    previous = select_rows(CHECKLIST_TABLE, {"inspection_id": inspection_id})

    delete_rows(CHECKLIST_TABLE, {"inspection_id": inspection_id})
    try:
        return insert_rows(CHECKLIST_TABLE, _checklist_rows(inspection_id, items))
    except Exception:
        restore = [
            {k: row.get(k) for k in ("inspection_id", "key", "yes_no", "description_if_no")}
            for row in previous
        ]
        logger.error(f"Checklist insert failed for {inspection_id}; restoring {len(restore)} rows")
        try:
            insert_rows(CHECKLIST_TABLE, restore)
        except Exception as restore_error:
            logger.error(f"RECONCILE: checklist for {inspection_id} lost: {restore_error}")
        raise


# -----------------------------------------------------
# Create
# -----------------------------------------------------
def create_inspection(user: CurrentUser, tenancy_id: str, room_id: str) -> dict:
    tenancy = get_tenancy(tenancy_id)
    if tenancy.get("room_id") != room_id:
        raise ValidationError("Room does not match the tenancy")

    require_room_coordinator(user, room_id)

    if not get_open_intention(tenancy_id):
        raise StateError("No pending or approved move-out intention for this tenancy")
    require_transition(tenancy, TenancyStatus.move_out_inspection_draft)

    inspection = insert_row(
        "inspections",
        {
            "tenancy_id": tenancy_id,
            "room_id": room_id,
            "created_by": user.id,
            "status": InspectionStatus.draft.value,
        },
    )

    transition_or_compensate(
        tenancy,
        TenancyStatus.move_out_inspection_draft,
        undo=lambda: delete_rows("inspections", {"id": inspection["id"]}),
        written=f"inspection {inspection['id']}",
    )

    logger.info(f"Inspection {inspection['id']} created by {user.id} for tenancy {tenancy_id}")
    return inspection


# -----------------------------------------------------
# Save (draft only)
# -----------------------------------------------------
def save_checklist(user: CurrentUser, inspection_id: str, items: ChecklistInput) -> List[dict]:
    inspection = get_inspection_row(inspection_id)
    _require_draft(inspection)
    require_room_coordinator(user, inspection["room_id"])

    normalized = normalize_checklist(items)
    validate_checklist(normalized)

    rows = _replace_checklist(inspection_id, normalized)
    logger.info(f"Checklist saved for inspection {inspection_id} ({len(rows)} items)")
    return rows


# -----------------------------------------------------
# Finalize (one-way)
# -----------------------------------------------------
def finalize_inspection(
    user: CurrentUser,
    inspection_id: str,
    items: Optional[ChecklistInput] = None,
) -> dict:
    """
    Validate the full checklist (saved answers overlaid with ``items``),
    persist it, lock the inspection and move the tenancy to
    MOVE_OUT_INSPECTION_FINAL.
    """
    inspection = get_inspection_row(inspection_id)
    _require_draft(inspection)
    require_room_coordinator(user, inspection["room_id"])

    tenancy = get_tenancy(inspection["tenancy_id"])
    require_transition(tenancy, TenancyStatus.move_out_inspection_final)

    merged = load_checklist(inspection_id)
    merged.update(normalize_checklist(items or {}))
    validate_checklist(merged, require_all=True)

    _replace_checklist(inspection_id, merged)

    finalised_at = utc_now_iso()
    rows = update_rows(
        "inspections",
        {"id": inspection_id},
        {"status": InspectionStatus.final.value, "finalised_at": finalised_at},
    )
    final = rows[0] if rows else {
        **inspection,
        "status": InspectionStatus.final.value,
        "finalised_at": finalised_at,
    }

    transition_or_compensate(
        tenancy,
        TenancyStatus.move_out_inspection_final,
        undo=lambda: update_rows(
            "inspections",
            {"id": inspection_id},
            {"status": InspectionStatus.draft.value, "finalised_at": None},
        ),
        written=f"final inspection {inspection_id}",
    )

    logger.info(f"Inspection {inspection_id} finalized by {user.id}")

    notify(
        "inspection_finalized",
        {"inspection_id": inspection_id, "tenancy_id": tenancy["id"], "room_id": inspection["room_id"]},
    )
    return final


# -----------------------------------------------------
# Read side
# -----------------------------------------------------
def present_checklist(inspection_id: str) -> List[dict]:
    """All enumerated items; unanswered ones default to yes/blank."""
    saved = load_checklist(inspection_id)
    presented = []
    for key in ChecklistKey:
        item = saved.get(key) or ChecklistItemInput()
        presented.append(
            {
                "key": key.value,
                "label": CHECKLIST_LABELS[key],
                "yes_no": item.yes_no,
                "description": item.description,
            }
        )
    return presented


def get_inspection(user: CurrentUser, inspection_id: str) -> dict:
    inspection = get_inspection_row(inspection_id)
    require_room_coordinator(user, inspection["room_id"])
    return {**inspection, "checklist": present_checklist(inspection_id)}


def list_inspections(user: CurrentUser) -> List[dict]:
    filters = {}
    if not is_admin(user):
        house_ids = get_coordinated_house_ids(user) or []
        if not house_ids:
            return []
        rooms = select_rows("rooms", {"house_id": house_ids}, columns="id")
        if not rooms:
            return []
        filters["room_id"] = [r["id"] for r in rooms]

    return select_rows("inspections", filters, order="created_at", desc=True)
