"""Serves stored files (site logos) back to browsers."""

import logging

from botocore.exceptions import ClientError
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from app.common.storage import BlobNotFound, get_blob_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/files/{file_path:path}")
def get_file(file_path: str):
    """
    Stream a file from blob storage.

    Works for both backends: local files are read from disk, B2 objects are
    proxied because presigned URLs don't work well with restricted B2 keys.
    """
    try:
        body, content_type = get_blob_store().open(file_path)
    except BlobNotFound:
        raise HTTPException(status_code=404, detail="File not found")
    except ClientError as e:
        logger.error("Failed to read %s from storage: %s", file_path, e)
        raise HTTPException(status_code=500, detail="Failed to retrieve file")

    return StreamingResponse(
        body,
        media_type=content_type or "application/octet-stream",
        background=BackgroundTask(body.close),
        headers={'Cache-Control': 'public, max-age=86400'},  # Cache for 1 day
    )
