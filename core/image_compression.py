# core/image_compression.py

"""
Photo compression for move-out evidence.

Every photo is re-encoded to WebP, walking a fixed ladder of
(max dimension, quality) settings until it fits under the size ceiling.
A photo that still does not fit after the last rung is rejected; an
oversized file is never returned.
"""

import io
import os
from typing import List, NamedTuple, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from core.config import settings
from core.errors import UploadError
from core.logging_config import logger


# (max width or height, WebP quality), tried in order
COMPRESSION_LADDER: List[Tuple[int, int]] = [
    (1600, 80),
    (1600, 70),
    (1400, 70),
    (1200, 60),
]

VALID_IMAGE_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/heic",
    "image/heif",
}

WEBP_CONTENT_TYPE = "image/webp"


class CompressedPhoto(NamedTuple):
    data: bytes
    filename: str
    content_type: str
    original_size: int


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def validate_image_type(content_type: Optional[str]) -> Optional[str]:
    """Return an error message for unsupported uploads, or None."""
    ctype = (content_type or "").lower()
    if not ctype.startswith("image/"):
        return "Please select only image files (JPEG, PNG, WebP, or HEIC)."
    if ctype not in VALID_IMAGE_TYPES:
        return f"Unsupported image format: {content_type}. Please use JPEG, PNG, WebP, or HEIC."
    return None


def _webp_name(filename: str) -> str:
    stem, _ = os.path.splitext(filename or "photo")
    return f"{stem or 'photo'}.webp"


def _is_webp(data: bytes) -> bool:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            return img.format == "WEBP"
    except (UnidentifiedImageError, OSError, SyntaxError):
        return False


def _encode(img: Image.Image, max_dimension: int, quality: int) -> bytes:
    frame = img.copy()
    frame.thumbnail((max_dimension, max_dimension))
    buf = io.BytesIO()
    frame.save(buf, "WEBP", quality=quality)
    return buf.getvalue()


def compress_image(
    data: bytes,
    filename: str,
    content_type: Optional[str] = None,
    max_bytes: Optional[int] = None,
) -> CompressedPhoto:
    """
    Compress a photo to WebP under ``max_bytes`` (default MAX_PHOTO_BYTES).

    Raises UploadError when the input is not a decodable image or cannot be
    brought under the ceiling by any rung of the ladder.
    """
    limit = max_bytes or settings.MAX_PHOTO_BYTES
    original_size = len(data)

    # Already small WebP, keep as-is once the bytes decode as WebP
    if (
        (content_type or "").lower() == WEBP_CONTENT_TYPE
        and original_size <= min(settings.TARGET_PHOTO_BYTES, limit)
        and _is_webp(data)
    ):
        return CompressedPhoto(data, _webp_name(filename), WEBP_CONTENT_TYPE, original_size)

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise UploadError(f"File must be an image: {e}")

    # Respect camera orientation before resizing
    img = ImageOps.exif_transpose(img)
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "A" in img.getbands() else "RGB")

    for attempt, (max_dimension, quality) in enumerate(COMPRESSION_LADDER, start=1):
        try:
            encoded = _encode(img, max_dimension, quality)
        except OSError as e:
            logger.warning(f"Compression attempt {attempt} failed: {e}")
            continue

        if len(encoded) <= limit:
            logger.info(
                f"Compressed {filename} on attempt {attempt}: "
                f"{format_file_size(original_size)} → {format_file_size(len(encoded))}"
            )
            return CompressedPhoto(encoded, _webp_name(filename), WEBP_CONTENT_TYPE, original_size)

        logger.info(
            f"Attempt {attempt} still too large ({format_file_size(len(encoded))}), trying next..."
        )

    raise UploadError(
        f"Unable to compress image to under {format_file_size(limit)}. "
        f"Original size: {format_file_size(original_size)}. "
        "Please choose a smaller image or take a new photo."
    )
