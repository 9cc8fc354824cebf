"""Blob storage for uploaded files.

Two backends share the same interface: ``LocalBlobStore`` writes under
``settings.upload_dir`` and ``B2BlobStore`` talks to Backblaze B2 through its
S3-compatible API. ``get_blob_store()`` picks one from ``settings.storage_backend``.
"""

import uuid
import logging
from pathlib import Path
from functools import lru_cache
from typing import BinaryIO, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException, UploadFile, status

from app.common.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class BlobNotFound(Exception):
    """Raised when a stored object does not exist."""


class LocalBlobStore:
    """Files on local disk, served back through ``/api/files/``."""

    def __init__(self, root: str, base_url: str = ""):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def upload(self, namespace: str, path: str, content: bytes, content_type: Optional[str] = None) -> None:
        dest = ensure_dir(self.root / namespace / Path(path).parent) / Path(path).name
        dest.write_bytes(content)

    def get_public_url(self, namespace: str, path: str) -> str:
        return f"{self.base_url}/api/files/{namespace}/{path}"

    def open(self, key: str) -> tuple[BinaryIO, Optional[str]]:
        target = (self.root / key).resolve()
        if self.root.resolve() not in target.parents or not target.is_file():
            raise BlobNotFound(key)
        return target.open("rb"), None


class B2BlobStore:
    """Backblaze B2 bucket accessed with boto3."""

    def __init__(self, bucket: str, key_prefix: str = ""):
        self.bucket = bucket
        self.key_prefix = key_prefix or ""

    def _object_key(self, namespace: str, path: str) -> str:
        # B2 application key may require a specific prefix for all uploads
        return f"{self.key_prefix}{namespace}/{path}"

    def upload(self, namespace: str, path: str, content: bytes, content_type: Optional[str] = None) -> None:
        get_s3_client().put_object(
            Bucket=self.bucket,
            Key=self._object_key(namespace, path),
            Body=content,
            ContentType=content_type or "application/octet-stream",
        )

    def get_public_url(self, namespace: str, path: str) -> str:
        # Restricted B2 keys can't hand out public links, so files go through the API proxy
        return f"{settings.public_base_url.rstrip('/')}/api/files/{namespace}/{path}"

    def open(self, key: str) -> tuple[BinaryIO, Optional[str]]:
        if not key.startswith(self.key_prefix):
            key = f"{self.key_prefix}{key}"
        try:
            response = get_s3_client().get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchKey":
                raise BlobNotFound(key) from e
            raise
        return response["Body"], response.get("ContentType")


@lru_cache
def get_s3_client():
    """Get or create S3 client for Backblaze B2."""
    if not settings.b2_key_id or not settings.b2_application_key:
        raise ValueError("B2 credentials not configured. Set B2_KEY_ID and B2_APPLICATION_KEY in environment.")

    return boto3.client(
        's3',
        endpoint_url=settings.b2_endpoint,
        aws_access_key_id=settings.b2_key_id,
        aws_secret_access_key=settings.b2_application_key,
        region_name=settings.b2_region,
    )


@lru_cache
def get_blob_store():
    """Blob store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "b2":
        return B2BlobStore(settings.b2_bucket_name, settings.b2_key_prefix)
    return LocalBlobStore(settings.upload_dir, settings.public_base_url)


def _validate_upload(file: UploadFile) -> None:
    """Validate uploaded file before saving."""
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing filename")

    suffix = Path(file.filename).suffix.lower()
    if settings.allowed_upload_extensions and suffix not in settings.allowed_upload_extensions:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type: {suffix or 'unknown'}"
        )

    # Check file size
    file.file.seek(0, 2)  # Seek to end
    file_size = file.file.tell()
    file.file.seek(0)  # Reset to beginning

    if file_size > settings.max_upload_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size: {settings.max_upload_size_mb}MB"
        )


def save_upload_file(file: UploadFile, namespace: str) -> str:
    """
    Store an uploaded file under a randomized name and return its public URL.

    Args:
        file: FastAPI UploadFile object
        namespace: Top-level folder in the store (e.g. "logos")

    Returns:
        Public URL of the stored file

    Raises:
        HTTPException: If validation fails or the upload fails
    """
    _validate_upload(file)

    suffix = Path(file.filename or "").suffix.lower()
    path = f"{uuid.uuid4().hex}{suffix}"
    store = get_blob_store()

    try:
        file.file.seek(0)
        content = file.file.read()
        store.upload(namespace, path, content, file.content_type)
        logger.info("Uploaded file to %s/%s", namespace, path)
        return store.get_public_url(namespace, path)
    except (ClientError, BotoCoreError, OSError, ValueError) as e:
        logger.error("Failed to upload file to %s: %s", namespace, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload logo"
        ) from e
    finally:
        file.file.close()


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
