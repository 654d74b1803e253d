from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class UserRole(BaseStrEnum):
    """Role claim stored on profiles.role."""

    admin = "ADMIN"
    coordinator = "COORDINATOR"
    tenant = "TENANT"


# -----------------------------------------------------
# TENANCY STATUS
# -----------------------------------------------------
class TenancyStatus(BaseStrEnum):
    """Authoritative states a room occupancy passes through."""

    occupied = "OCCUPIED"
    move_out_intended = "MOVE_OUT_INTENDED"
    move_out_inspection_draft = "MOVE_OUT_INSPECTION_DRAFT"
    move_out_inspection_final = "MOVE_OUT_INSPECTION_FINAL"
    move_in_pending_signature = "MOVE_IN_PENDING_SIGNATURE"
    ended = "ENDED"


# Older tenancy rows may still read "PENDING" for a move-in awaiting signature.
LEGACY_PENDING_STATUS = "PENDING"


# -----------------------------------------------------
# INSPECTION STATUS
# -----------------------------------------------------
class InspectionStatus(BaseStrEnum):
    draft = "DRAFT"
    final = "FINAL"


# -----------------------------------------------------
# MOVE-OUT SIGN-OFF
# -----------------------------------------------------
class SignOffStatus(BaseStrEnum):
    """Coordinator decision recorded on a move-out intention."""

    pending = "PENDING"
    approved = "APPROVED"
    rejected = "REJECTED"


class ReviewDecision(BaseStrEnum):
    approve = "APPROVE"
    reject = "REJECT"


# -----------------------------------------------------
# ROOM SLOT
# -----------------------------------------------------
class RoomSlot(BaseStrEnum):
    """Sub-unit of a two-person room."""

    a = "A"
    b = "B"


# -----------------------------------------------------
# PHOTO CATEGORY
# -----------------------------------------------------
class PhotoCategory(BaseStrEnum):
    key_area = "key_area"
    damage = "damage"


# -----------------------------------------------------
# CHECKLIST KEY (closed vocabulary)
# -----------------------------------------------------
class ChecklistKey(BaseStrEnum):
    rent_paid = "rent_paid"
    cleaned = "cleaned"
    no_damage = "no_damage"
    utilities_settled = "utilities_settled"
    coordinator_satisfied = "coordinator_satisfied"
    keys_returned = "keys_returned"
    bank_details = "bank_details"


CHECKLIST_LABELS = {
    ChecklistKey.rent_paid: "Rent paid up to move-out date",
    ChecklistKey.cleaned: "Bedroom and common areas cleaned",
    ChecklistKey.no_damage: "No damage/stain caused",
    ChecklistKey.utilities_settled: "All utilities settled/arranged",
    ChecklistKey.coordinator_satisfied: "Coordinator satisfied with cleaning",
    ChecklistKey.keys_returned: "Keys returned",
    ChecklistKey.bank_details: "Bank details provided for bond refund (or N/A if no bond)",
}

_unlabelled = set(ChecklistKey) - set(CHECKLIST_LABELS)
if _unlabelled:
    raise RuntimeError(
        f"Checklist keys without a label: {sorted(k.value for k in _unlabelled)}"
    )


# -----------------------------------------------------
# NOTIFICATION TYPE
# -----------------------------------------------------
class NotificationType(BaseStrEnum):
    move_out_intention = "move_out_intention"
    inspection_finalized = "inspection_finalized"
    move_in_signed = "move_in_signed"
