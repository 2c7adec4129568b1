"""Image upload routes."""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse, RedirectResponse

from careerstudio.core.config import get_settings
from careerstudio.core.exceptions import UploadNotFoundError, UploadValidationError
from careerstudio.core.logging import get_logger
from careerstudio.db import Recruiter
from careerstudio.services.auth import get_current_recruiter
from careerstudio.services.storage import (
    delete_image,
    get_storage_service,
    save_image,
    upload_key,
    validate_image,
)

logger = get_logger(__name__)
router = APIRouter()
settings = get_settings()


async def _store(recruiter: Recruiter, field_name: str, upload: UploadFile):
    data = await upload.read()
    return save_image(
        get_storage_service(),
        str(recruiter.id),
        field_name,
        upload.filename or "",
        upload.content_type,
        data,
    )


@router.post("/api/uploads")
async def upload_image(
    image: UploadFile = File(...),
    recruiter: Recruiter = Depends(get_current_recruiter),
):
    """
    Upload one image (logo, banner, gallery).

    - jpeg, png, gif or webp, up to the configured size limit
    - Returns a path-rooted URL usable in theme and section configs
    """
    stored = await _store(recruiter, "image", image)
    logger.info(f"Recruiter {recruiter.id} uploaded {stored.filename}")
    return JSONResponse(
        status_code=201,
        content={"message": "File uploaded successfully", **stored.to_dict()},
    )


@router.post("/api/uploads/multiple")
async def upload_images(
    images: list[UploadFile] = File(...),
    recruiter: Recruiter = Depends(get_current_recruiter),
):
    """Upload several gallery images at once."""
    if len(images) > settings.max_upload_files:
        raise UploadValidationError(f"Too many files. Maximum: {settings.max_upload_files}")

    # Reject the batch before storing anything
    contents = [(upload, await upload.read()) for upload in images]
    for upload, data in contents:
        validate_image(upload.filename or "", upload.content_type, len(data))

    storage = get_storage_service()
    stored = [
        save_image(storage, str(recruiter.id), "images", upload.filename or "", upload.content_type, data)
        for upload, data in contents
    ]
    logger.info(f"Recruiter {recruiter.id} uploaded {len(stored)} files")
    return JSONResponse(
        status_code=201,
        content={
            "message": f"{len(stored)} files uploaded successfully",
            "files": [s.to_dict() for s in stored],
        },
    )


@router.get("/uploads/{recruiter_id}/{filename}")
async def get_upload(recruiter_id: str, filename: str):
    """Redirect to a short-lived URL of a stored image."""
    storage = get_storage_service()
    key = upload_key(recruiter_id, filename)
    if not storage.object_exists(key):
        raise UploadNotFoundError(filename)
    return RedirectResponse(url=storage.get_presigned_url(key), status_code=307)


@router.delete("/api/uploads/{filename}")
async def delete_upload(
    filename: str,
    recruiter: Recruiter = Depends(get_current_recruiter),
):
    delete_image(get_storage_service(), str(recruiter.id), filename)
    logger.info(f"Recruiter {recruiter.id} deleted {filename}")
    return {"message": "File deleted successfully"}
