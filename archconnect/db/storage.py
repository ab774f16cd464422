"""Supabase object storage helpers."""

from __future__ import annotations

import logging

from archconnect.core.exceptions import DataAccessError
from archconnect.db.supabase import get_supabase

logger = logging.getLogger(__name__)


def upload_public_file(
    bucket: str,
    path: str,
    content: bytes,
    content_type: str | None = None,
) -> str:
    """Upload *content* to ``bucket/path`` and return its public URL."""
    storage = get_supabase().storage.from_(bucket)
    file_options = {"content-type": content_type} if content_type else None
    try:
        storage.upload(path, content, file_options)
    except Exception as exc:
        logger.error(
            "storage_upload_failed",
            extra={"bucket": bucket, "path": path, "error_message": str(exc)},
        )
        raise DataAccessError("upload the image", str(exc)) from exc

    public_url = storage.get_public_url(path)
    logger.info("storage_upload_complete", extra={"bucket": bucket, "path": path})
    return public_url
