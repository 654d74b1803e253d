# routers/uploads.py

from fastapi import APIRouter, UploadFile, File, Form, Depends, Query
from typing import List

from dependencies.auth import CurrentUser, requires_role
from core.config import settings
from core.errors import ValidationError
from core.image_compression import compress_image, validate_image_type
from core.logging_config import logger
from core.permission_helpers import require_tenancy_owner
from core.storage import bucket_for, build_object_path, create_signed_url, upload_object
from models.enums import PhotoCategory
from services.tenancy_status import get_tenancy

router = APIRouter(
    prefix="/uploads",
    tags=["Uploads"],
)


# -----------------------------------------------------
# UPLOAD MOVE-OUT PHOTOS
#   Compress → WebP under the size ceiling → Storage
#   Returns public URLs in upload order
# -----------------------------------------------------
@router.post("/photos", summary="Upload move-out evidence photos")
async def upload_photos(
    files: List[UploadFile] = File(...),
    category: PhotoCategory = Form(..., description="key_area or damage"),
    tenancy_id: str = Form(...),
    current_user: CurrentUser = Depends(requires_role(["TENANT"])),
):
    tenancy = get_tenancy(tenancy_id)
    require_tenancy_owner(current_user, tenancy)

    if not files:
        raise ValidationError("No photos provided")

    if len(files) > settings.MAX_PHOTOS_PER_CATEGORY:
        raise ValidationError(
            f"You can upload at most {settings.MAX_PHOTOS_PER_CATEGORY} photos per category"
        )

    # Reject the whole batch before anything is stored
    for upload in files:
        error = validate_image_type(upload.content_type)
        if error:
            raise ValidationError(f"{upload.filename}: {error}")

    # Never read more than one byte past the cap
    raw_files = []
    for upload in files:
        raw = await upload.read(settings.MAX_UPLOAD_BYTES + 1)
        if len(raw) > settings.MAX_UPLOAD_BYTES:
            raise ValidationError(
                f"{upload.filename}: file exceeds {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB upload limit"
            )
        raw_files.append((upload, raw))

    bucket = bucket_for(category)
    urls = []

    for upload, raw in raw_files:
        photo = compress_image(raw, upload.filename or "photo", upload.content_type)

        path = build_object_path(tenancy_id, "webp")
        urls.append(upload_object(bucket, path, photo.data, photo.content_type))

    logger.info(f"Uploaded {len(urls)} {category.value} photos for tenancy {tenancy_id}")

    return {
        "category": category.value,
        "bucket": bucket,
        "urls": urls,
    }


# -----------------------------------------------------
# SIGNED URL (private buckets)
# -----------------------------------------------------
@router.get("/signed-url", summary="Short-lived URL for a stored object")
def signed_url(
    category: PhotoCategory = Query(...),
    path: str = Query(..., description="Object path within the bucket"),
    current_user: CurrentUser = Depends(requires_role(["ADMIN", "COORDINATOR"])),
):
    url = create_signed_url(bucket_for(category), path)
    return {
        "url": url,
        "expires_in": settings.SIGNED_URL_EXPIRY_SECONDS,
    }
