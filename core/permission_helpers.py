from fastapi import Depends, HTTPException
from typing import List, Optional
from dependencies.auth import get_current_user, CurrentUser
from core.errors import AuthorizationError
from core.permissions import ROLE_PERMISSIONS
from core.supabase_helpers import select_rows, get_by_id


# -----------------------------------------------------
# Collect effective permissions:
#   • role-based permissions
#   • user-specific permission overrides from user_metadata["permissions"]
# -----------------------------------------------------
def get_effective_permissions(user: CurrentUser) -> set:
    role_perms = set(ROLE_PERMISSIONS.get(user.role, []))

    user_overrides = set()
    raw = getattr(user, "permissions", None)

    if isinstance(raw, list):
        user_overrides = set(raw)

    return role_perms.union(user_overrides)


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def has_permission(user: CurrentUser, permission: str) -> bool:
    effective = get_effective_permissions(user)

    # Wildcard grants everything
    if "*" in effective:
        return True

    return permission in effective


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(permission: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("inspections:write"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_permission(current_user, permission):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required"
            )
        return current_user

    return dependency


# ============================================================
# ROLE HELPERS
# ============================================================

def is_admin(user: CurrentUser) -> bool:
    return user.role == "ADMIN"


def is_coordinator(user: CurrentUser) -> bool:
    return user.role == "COORDINATOR"


# ============================================================
# HOUSE-LEVEL HELPERS (coordinators)
# ============================================================

def get_coordinated_house_ids(user: CurrentUser) -> Optional[List[str]]:
    """
    Houses the user coordinates.
    Returns None for admins (no restriction).
    """
    if is_admin(user):
        return None

    rows = select_rows(
        "house_coordinators",
        {"user_id": user.id},
        columns="house_id",
    )
    return [r["house_id"] for r in rows]


def require_house_coordinator(user: CurrentUser, house_id: str):
    """Admins pass; coordinators must be assigned to the house."""
    if is_admin(user):
        return

    if not is_coordinator(user):
        raise AuthorizationError("Coordinator role required")

    house_ids = get_coordinated_house_ids(user) or []
    if house_id not in house_ids:
        raise AuthorizationError("You do not coordinate this house")


def house_id_for_room(room_id: str) -> str:
    room = get_by_id("rooms", room_id, "Room")
    return room["house_id"]


def require_room_coordinator(user: CurrentUser, room_id: str):
    if is_admin(user):
        return
    require_house_coordinator(user, house_id_for_room(room_id))


# ============================================================
# TENANCY OWNERSHIP
# ============================================================

def require_tenancy_owner(user: CurrentUser, tenancy: dict):
    if tenancy.get("tenant_user_id") != user.id:
        raise AuthorizationError("You do not have access to this tenancy")
