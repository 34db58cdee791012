"""
ID Photo Upload Handler

Validates and stores the single image attached to a submission.

- Only ``image/*`` media types are accepted (415 otherwise)
- Files larger than the configured limit are rejected (413)
- Files are written under the upload root with a unique name:
  ``<epoch millis>-<random hex>-<original base name>``
"""

import logging
import re
import time
import uuid
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from teacher_registry.modules.forms.service import FormServiceError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
ID_PHOTO_FIELD = "idPhoto"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]")


class InvalidFileTypeError(FormServiceError):
    """Raised when the uploaded file is not an image."""

    def __init__(self, content_type: str | None):
        self.content_type = content_type
        super().__init__(
            message="Only image files are allowed!",
            error_code="INVALID_FILE_TYPE",
            status_code=415,
        )


class FileTooLargeError(FormServiceError):
    """Raised when the uploaded file exceeds the size limit."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(
            message=f"File too large. Max size is {max_bytes // (1024 * 1024)}MB.",
            error_code="FILE_TOO_LARGE",
            status_code=413,
        )


def is_image_type(content_type: str | None) -> bool:
    """Check a declared media type is an image type."""
    return bool(content_type) and content_type.lower().startswith("image/")


def sanitize_filename(filename: str | None) -> str:
    """Reduce a client supplied filename to a safe base name."""
    base = Path((filename or "").replace("\\", "/")).name
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", base).lstrip(".")
    return cleaned or "upload"


def build_stored_name(filename: str | None) -> str:
    """Unique on-disk name for an upload."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{sanitize_filename(filename)}"


async def save_id_photo(file: UploadFile, upload_dir: Path, max_bytes: int) -> str:
    """
    Validate and store an uploaded ID photo.

    Args:
        file: The uploaded file
        upload_dir: Upload root; created if missing
        max_bytes: Maximum accepted size

    Returns:
        The stored file path (POSIX form), used as the record's photo reference

    Raises:
        InvalidFileTypeError: If the declared media type is not an image
        FileTooLargeError: If the file exceeds ``max_bytes``
    """
    if not is_image_type(file.content_type):
        logger.info(f"Rejected upload with content type {file.content_type!r}")
        raise InvalidFileTypeError(file.content_type)

    # Starlette reports the size once the body is spooled; reject early when known
    if file.size is not None and file.size > max_bytes:
        raise FileTooLargeError(max_bytes)

    # Disk work runs in the threadpool so the event loop keeps serving
    await run_in_threadpool(upload_dir.mkdir, parents=True, exist_ok=True)
    destination = upload_dir / build_stored_name(file.filename)

    written = 0
    out = await run_in_threadpool(destination.open, "wb")
    try:
        try:
            while chunk := await file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise FileTooLargeError(max_bytes)
                await run_in_threadpool(out.write, chunk)
        finally:
            await run_in_threadpool(out.close)
    except BaseException:
        await run_in_threadpool(destination.unlink, missing_ok=True)
        raise

    logger.info(f"Stored ID photo {destination.name} ({written} bytes)")
    return destination.as_posix()
