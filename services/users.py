# services/users.py

from typing import List, Optional

from core.errors import RemoteError, extract_supabase_error
from core.logging_config import logger
from core.supabase_helpers import insert_row, require_client, select_rows
from models.user import UserCreate


def list_users(role: Optional[str] = None) -> List[dict]:
    filters = {"role": role} if role else None
    return select_rows("profiles", filters, columns="id, email, name, role", order="name")


def create_user(payload: UserCreate) -> dict:
    """
    Create the Supabase Auth user (email pre-confirmed), then its profile.
    If the profile insert fails the auth user is deleted again.
    """
    client = require_client()
    email = payload.email.strip().lower()

    try:
        auth_resp = client.auth.admin.create_user(
            {
                "email": email,
                "password": payload.password,
                "email_confirm": True,
            }
        )
    except Exception as e:
        logger.error(f"Error creating auth user {email}: {e}")
        raise RemoteError(extract_supabase_error(e) or "Failed to create user account")

    if not auth_resp or not auth_resp.user:
        raise RemoteError("User creation failed - no user data returned")

    user_id = auth_resp.user.id

    try:
        profile = insert_row(
            "profiles",
            {
                "id": user_id,
                "email": email,
                "name": payload.name.strip(),
                "role": payload.role.value,
            },
        )
    except RemoteError:
        logger.error(f"Profile insert failed for {user_id}; deleting auth user")
        try:
            client.auth.admin.delete_user(user_id)
        except Exception as cleanup_error:
            logger.error(f"RECONCILE: orphan auth user {user_id}: {cleanup_error}")
        raise

    logger.info(f"User {user_id} created with role {payload.role.value}")
    return profile
