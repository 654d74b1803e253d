# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    UserRole,
    TenancyStatus,
    InspectionStatus,
    SignOffStatus,
    ReviewDecision,
    RoomSlot,
    PhotoCategory,
    ChecklistKey,
    CHECKLIST_LABELS,
    NotificationType,
)

# -------------------------
# Houses & Rooms
# -------------------------
from .house import HouseBase, HouseCreate, HouseUpdate, HouseRead
from .room import RoomCreate, RoomUpdate, RoomRead, RoomWithTenancies

# -------------------------
# Tenancy lifecycle
# -------------------------
from .tenancy import TenancyCreate, TenancyRead
from .move_out import MoveOutIntentionCreate, MoveOutReview, MoveOutIntentionRead
from .inspection import (
    InspectionCreate,
    ChecklistItemInput,
    ChecklistPayload,
    ChecklistItemRead,
    InspectionRead,
    InspectionDetail,
)
from .move_in import MoveInComplete, MoveInAcknowledgementRead, PreviousTenantEvidence

# -------------------------
# Users & notifications
# -------------------------
from .user import UserCreate, ProfileRead, CoordinatorAssign
from .notification import NotificationRequest
