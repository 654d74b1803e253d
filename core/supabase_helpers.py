# core/supabase_helpers.py

from typing import Any, Dict, List, Optional

from core.errors import NotFoundError, RemoteError
from core.supabase_client import get_supabase_client


# =================================================================
#  CLIENT ACCESS
# =================================================================

def require_client():
    """Return the service-role client or fail with RemoteError."""
    client = get_supabase_client()
    if client is None:
        raise RemoteError("Supabase client not configured")
    return client


# =================================================================
#  SELECT / INSERT / UPDATE / DELETE on lifecycle tables
# =================================================================
# Every remote failure is re-raised as RemoteError carrying the
# Supabase message unchanged.
# =================================================================

def select_rows(
    table: str,
    filters: Optional[Dict[str, Any]] = None,
    *,
    columns: str = "*",
    order: Optional[str] = None,
    desc: bool = False,
    limit: Optional[int] = None,
) -> List[dict]:
    client = require_client()

    try:
        query = client.table(table).select(columns)
        for key, val in (filters or {}).items():
            if isinstance(val, (list, tuple, set)):
                query = query.in_(key, list(val))
            else:
                query = query.eq(key, val)
        if order:
            query = query.order(order, desc=desc)
        if limit:
            query = query.limit(limit)
        result = query.execute()
    except Exception as e:
        raise RemoteError.from_exception(e)

    return result.data or []


def select_one(table: str, filters: Dict[str, Any], *, columns: str = "*") -> Optional[dict]:
    rows = select_rows(table, filters, columns=columns, limit=1)
    return rows[0] if rows else None


def get_by_id(table: str, row_id: str, label: str) -> dict:
    """Fetch a single row by id or raise NotFoundError('<label> not found')."""
    row = select_one(table, {"id": row_id})
    if not row:
        raise NotFoundError(f"{label} not found")
    return row


def insert_row(table: str, data: dict) -> dict:
    client = require_client()

    try:
        result = (
            client.table(table)
            .insert(data, returning="representation")
            .execute()
        )
    except Exception as e:
        raise RemoteError.from_exception(e)

    if not result.data:
        raise RemoteError(f"Insert into {table} returned no data")
    return result.data[0]


def insert_rows(table: str, rows: List[dict]) -> List[dict]:
    if not rows:
        return []

    client = require_client()

    try:
        result = (
            client.table(table)
            .insert(rows, returning="representation")
            .execute()
        )
    except Exception as e:
        raise RemoteError.from_exception(e)

    return result.data or []


def update_rows(table: str, filters: Dict[str, Any], data: dict) -> List[dict]:
    client = require_client()

    try:
        query = client.table(table).update(data, returning="representation")
        for key, val in filters.items():
            query = query.eq(key, val)
        result = query.execute()
    except Exception as e:
        raise RemoteError.from_exception(e)

    return result.data or []


def delete_rows(table: str, filters: Dict[str, Any]) -> None:
    client = require_client()

    try:
        query = client.table(table).delete()
        for key, val in filters.items():
            query = query.eq(key, val)
        query.execute()
    except Exception as e:
        raise RemoteError.from_exception(e)
