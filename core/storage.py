# core/storage.py

import secrets
import time
from typing import Optional

from core.config import settings
from core.errors import UploadError
from core.logging_config import logger
from core.supabase_helpers import require_client
from models.enums import PhotoCategory


def bucket_for(category: PhotoCategory) -> str:
    if category == PhotoCategory.damage:
        return settings.DAMAGE_PHOTO_BUCKET
    return settings.KEY_AREA_PHOTO_BUCKET


def build_object_path(prefix: str, extension: str = "webp") -> str:
    """Unique storage path: <prefix>/<epoch-ms>-<random>.<ext>"""
    stamp = int(time.time() * 1000)
    return f"{prefix}/{stamp}-{secrets.token_hex(4)}.{extension}"


# -----------------------------------------------------
# Upload one object and return its public URL
# -----------------------------------------------------
def upload_object(bucket: str, path: str, data: bytes, content_type: str) -> str:
    client = require_client()

    try:
        client.storage.from_(bucket).upload(
            path,
            data,
            {"content-type": content_type},
        )
    except Exception as e:
        logger.error(f"Storage upload failed for {bucket}/{path}: {e}")
        raise UploadError(f"Photo upload failed: {e}")

    try:
        return client.storage.from_(bucket).get_public_url(path)
    except Exception as e:
        raise UploadError(f"Could not resolve URL for uploaded photo: {e}")


# -----------------------------------------------------
# Signed URLs for private buckets
# -----------------------------------------------------
def create_signed_url(bucket: str, path: str, expires_in: Optional[int] = None) -> str:
    client = require_client()
    expiry = expires_in or settings.SIGNED_URL_EXPIRY_SECONDS

    try:
        data = client.storage.from_(bucket).create_signed_url(path, expiry)
    except Exception as e:
        raise UploadError(f"Failed to generate signed URL: {e}")

    signed = (data or {}).get("signedURL") or (data or {}).get("signedUrl")
    if not signed:
        raise UploadError("No signed URL returned from storage")
    return signed
