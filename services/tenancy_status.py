# services/tenancy_status.py

"""
Tenancy status machine.

    OCCUPIED
      → MOVE_OUT_INTENDED                 tenant submits move-out intention
      → MOVE_OUT_INSPECTION_DRAFT         coordinator creates inspection
      → MOVE_OUT_INSPECTION_FINAL         coordinator finalizes inspection
      → ENDED                             administrator ends tenancy
    MOVE_IN_PENDING_SIGNATURE → OCCUPIED  new tenant signs move-in acknowledgement

ENDED is reachable from every non-terminal state (admin "End Tenancy").
"""

from typing import Callable, Optional, Union

from core.errors import LifecycleError, StateError, ValidationError
from core.logging_config import logger
from core.supabase_helpers import get_by_id, update_rows
from models.enums import LEGACY_PENDING_STATUS, TenancyStatus


S = TenancyStatus

ALLOWED_TRANSITIONS = {
    S.occupied: {S.move_out_intended, S.ended},
    S.move_out_intended: {S.move_out_inspection_draft, S.ended},
    S.move_out_inspection_draft: {S.move_out_inspection_final, S.ended},
    S.move_out_inspection_final: {S.ended},
    S.move_in_pending_signature: {S.occupied, S.ended},
    S.ended: set(),
}

TERMINAL_STATUSES = {S.ended}
NON_TERMINAL_STATUSES = set(S) - TERMINAL_STATUSES

# Raw status values that hold a room slot, including rows never migrated off PENDING
LIVE_STATUS_VALUES = sorted(
    [s.value for s in NON_TERMINAL_STATUSES] + [LEGACY_PENDING_STATUS]
)


def coerce_status(value: Union[str, TenancyStatus]) -> TenancyStatus:
    """Map a raw value onto the six tenancy statuses or raise ValidationError."""
    try:
        return TenancyStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid tenancy status '{value}'. Expected one of: {', '.join(TenancyStatus.list())}"
        )


def current_status(tenancy: dict) -> TenancyStatus:
    raw = tenancy.get("status")
    if raw == LEGACY_PENDING_STATUS:
        return S.move_in_pending_signature
    return coerce_status(raw)


def can_transition(current: TenancyStatus, target: TenancyStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def require_transition(tenancy: dict, target: TenancyStatus):
    """Raise StateError unless the tenancy may move to ``target``."""
    current = current_status(tenancy)
    if not can_transition(current, target):
        raise StateError(
            f"Tenancy cannot move from {current.value} to {target.value}"
        )


def get_tenancy(tenancy_id: str) -> dict:
    return get_by_id("tenancies", tenancy_id, "Tenancy")


# -----------------------------------------------------
# Write the next status
# -----------------------------------------------------
def transition_tenancy(
    tenancy: dict,
    target: Union[str, TenancyStatus],
    extra: Optional[dict] = None,
) -> dict:
    target_status = coerce_status(target)
    require_transition(tenancy, target_status)

    data = {"status": target_status.value}
    data.update(extra or {})

    rows = update_rows("tenancies", {"id": tenancy["id"]}, data)

    logger.info(
        f"Tenancy {tenancy['id']}: {tenancy.get('status')} → {target_status.value}"
    )
    return rows[0] if rows else {**tenancy, **data}


# -----------------------------------------------------
# Compound transitions (child record already written)
# -----------------------------------------------------
def transition_or_compensate(
    tenancy: dict,
    target: Union[str, TenancyStatus],
    undo: Callable[[], None],
    written: str,
    extra: Optional[dict] = None,
) -> dict:
    """
    Move the tenancy after a child record has been written.

    PostgREST offers no multi-statement transaction, so when the status write
    fails the child write is undone with ``undo`` and the original error is
    re-raised. If the undo fails too, the pair of ids is logged for manual
    reconciliation.
    """
    try:
        return transition_tenancy(tenancy, target, extra)
    except LifecycleError as error:
        logger.error(
            f"Status write for tenancy {tenancy['id']} failed after writing {written}: {error}. "
            "Rolling back."
        )
        try:
            undo()
        except Exception as undo_error:
            logger.error(
                f"RECONCILE: tenancy {tenancy['id']} left inconsistent with {written}; "
                f"rollback failed: {undo_error}"
            )
        raise
