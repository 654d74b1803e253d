# core/utils.py

from datetime import date, datetime, timezone


def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data before writing to Supabase:
    - Empty strings → None
    - Preserve booleans, numbers, lists
    - Strip string whitespace
    """
    clean = {}

    for k, v in data.items():
        if v is None:
            clean[k] = None
            continue

        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped else None
            continue

        # Dates go over the wire as ISO strings
        if isinstance(v, (date, datetime)):
            clean[k] = v.isoformat()
            continue

        clean[k] = v

    return clean


def drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()
