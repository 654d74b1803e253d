from typing import Optional, List
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.supabase_client import get_supabase_client
from core.permissions import ROLE_PERMISSIONS  # role → permission map
from core.logging_config import logger


bearer_scheme = HTTPBearer()

DEFAULT_ROLE = "TENANT"


# ============================================================
# Current User Model (explicit caller context)
# ============================================================
class CurrentUser(BaseModel):
    id: str                         # Supabase Auth UID == profiles.id
    email: str
    role: str

    name: Optional[str] = None

    # per-user permission overrides (user_metadata["permissions"])
    permissions: Optional[List[str]] = []


# ============================================================
# AUTH DECODING (Supabase: validates JWT + reads profile role)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:

    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
        if not auth_resp or not auth_resp.user:
            raise unauthorized
        auth_user = auth_resp.user
    except HTTPException:
        raise
    except Exception:
        raise unauthorized

    user_id = auth_user.id
    email = auth_user.email
    metadata = auth_user.user_metadata or {}

    if not email:
        raise unauthorized

    # ---------------------------------------------------------
    # Role lives on profiles (not in the JWT)
    # ---------------------------------------------------------
    try:
        profile_rows = (
            client.table("profiles")
            .select("id, name, role")
            .eq("id", user_id)
            .limit(1)
            .execute()
        ).data
    except Exception as e:
        logger.error(f"Profile lookup failed for {user_id}: {e}")
        raise HTTPException(500, "Unable to load user profile")

    profile = profile_rows[0] if profile_rows else {}

    role = profile.get("role") or DEFAULT_ROLE
    if role not in ROLE_PERMISSIONS:
        role = DEFAULT_ROLE

    extended_permissions = metadata.get("permissions", [])
    if not isinstance(extended_permissions, list):
        extended_permissions = []

    return CurrentUser(
        id=user_id,
        email=email,
        role=role,
        name=profile.get("name"),
        permissions=extended_permissions,
    )


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: list[str]):
    def checker(current_user: CurrentUser = Depends(get_current_user)):
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {allowed_roles}",
            )
        return current_user
    return checker


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(permission: str):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real RBAC logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(permission)
