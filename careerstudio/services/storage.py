"""Storage service for S3/MinIO and recruiter image uploads."""
import io
import os
import secrets
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, BinaryIO

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from careerstudio.core.config import get_settings
from careerstudio.core.logging import get_logger
from careerstudio.core.exceptions import (
    ErrorCode,
    StorageError,
    UploadNotFoundError,
    UploadValidationError,
)

logger = get_logger(__name__)

UPLOAD_PREFIX = "uploads"
UPLOAD_URL_PREFIX = "/uploads"

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


@dataclass(frozen=True)
class StoredUpload:
    """An image stored for a recruiter."""

    filename: str
    key: str

    @property
    def url(self) -> str:
        # Path-rooted; the renderer resolves it against the public origin
        return f"{UPLOAD_URL_PREFIX}/{self.key[len(UPLOAD_PREFIX) + 1:]}"

    def to_dict(self) -> dict:
        return {"url": self.url, "filename": self.filename}


class StorageService:
    """S3/MinIO storage service."""

    def __init__(self):
        settings = get_settings()
        self.bucket = settings.s3_bucket
        self.endpoint_url = settings.s3_endpoint_url

        self.client = boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint_url,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            region_name=settings.s3_region,
            config=Config(signature_version="s3v4"),
        )

    def upload_file(
        self,
        file_obj: BinaryIO,
        key: str,
        content_type: Optional[str] = None
    ) -> str:
        """
        Upload a file to storage.

        Args:
            file_obj: File-like object to upload
            key: S3 key (path)
            content_type: Optional content type

        Returns:
            The S3 URI of the uploaded file
        """
        try:
            extra_args = {}
            if content_type:
                extra_args["ContentType"] = content_type

            self.client.upload_fileobj(
                file_obj,
                self.bucket,
                key,
                ExtraArgs=extra_args if extra_args else None
            )

            uri = f"s3://{self.bucket}/{key}"
            logger.info(f"Uploaded file to {key}")
            return uri

        except ClientError as e:
            logger.error(f"Failed to upload file to {key}: {e}")
            raise StorageError(f"Failed to upload file: {e}", ErrorCode.STORAGE_UPLOAD_FAILED.value)

    def upload_bytes(
        self,
        data: bytes,
        key: str,
        content_type: Optional[str] = None
    ) -> str:
        """Upload bytes to storage."""
        return self.upload_file(io.BytesIO(data), key, content_type)

    def object_exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            logger.error(f"Failed to check object {key}: {e}")
            raise StorageError(f"Failed to check object: {e}")

    def get_presigned_url(
        self,
        key: str,
        expires_in: int = 3600,
        response_content_type: Optional[str] = None,
    ) -> str:
        """
        Generate a presigned URL for downloading a file.

        Args:
            key: S3 key (path)
            expires_in: URL expiration time in seconds
            response_content_type: Override content type in response

        Returns:
            Presigned URL
        """
        try:
            params = {
                "Bucket": self.bucket,
                "Key": key,
            }

            if response_content_type:
                params["ResponseContentType"] = response_content_type

            url = self.client.generate_presigned_url(
                "get_object",
                Params=params,
                ExpiresIn=expires_in
            )

            # Replace internal docker hostname with localhost for local dev
            if "minio:9000" in url:
                url = url.replace("minio:9000", "localhost:9000")

            return url

        except ClientError as e:
            logger.error(f"Failed to generate presigned URL for {key}: {e}")
            raise StorageError(f"Failed to generate presigned URL: {e}")

    def delete_object(self, key: str) -> None:
        """Delete an object."""
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
            logger.info(f"Deleted object {key}")
        except ClientError as e:
            logger.error(f"Failed to delete object {key}: {e}")
            raise StorageError(f"Failed to delete object: {e}")


def validate_image(filename: str, content_type: Optional[str], size: int) -> str:
    """
    Check an uploaded image against the allowed types and size limit.

    Returns:
        The file extension to store the image under
    """
    settings = get_settings()

    ext = os.path.splitext(filename or "")[1].lower()
    if content_type not in ALLOWED_IMAGE_TYPES or ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise UploadValidationError("Only image files are allowed (jpeg, jpg, png, gif, webp)")
    if size == 0:
        raise UploadValidationError("No file uploaded")
    if size > settings.max_upload_size_bytes:
        raise UploadValidationError(
            f"File too large. Maximum size: {settings.max_upload_size_mb}MB"
        )
    return ext


def validate_upload_filename(filename: str) -> str:
    """Reject names that could escape the recruiter's upload folder."""
    if not filename or "/" in filename or "\\" in filename or filename in (".", ".."):
        raise UploadValidationError(f"Invalid filename: {filename}")
    return filename


def upload_key(recruiter_id: str, filename: str) -> str:
    return f"{UPLOAD_PREFIX}/{recruiter_id}/{validate_upload_filename(filename)}"


def generate_upload_filename(field_name: str, ext: str) -> str:
    """Unique stored name: {field}-{epoch millis}-{random}{ext}."""
    return f"{field_name}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


def save_image(
    storage: StorageService,
    recruiter_id: str,
    field_name: str,
    filename: str,
    content_type: Optional[str],
    data: bytes,
) -> StoredUpload:
    """Validate and store one image under the recruiter's upload folder."""
    ext = validate_image(filename, content_type, len(data))
    stored_name = generate_upload_filename(field_name, ext)
    key = upload_key(recruiter_id, stored_name)
    storage.upload_bytes(data, key, content_type)
    return StoredUpload(filename=stored_name, key=key)


def delete_image(storage: StorageService, recruiter_id: str, filename: str) -> None:
    """Delete one of the recruiter's images by its stored name."""
    key = upload_key(recruiter_id, filename)
    if not storage.object_exists(key):
        raise UploadNotFoundError(filename)
    storage.delete_object(key)


@lru_cache()
def get_storage_service() -> StorageService:
    """Get cached storage service instance."""
    return StorageService()
