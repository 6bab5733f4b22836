"""
File Upload Utility - store resume uploads on local disk.

Allowed: PDF (.pdf), Word (.doc, .docx), checked by extension AND MIME type.
Max file size: MAX_UPLOAD_MB (2MB by default).

A stored file must end up referenced by an application or be removed with
discard_file(); callers own that cleanup.
"""

import logging
import re
import secrets
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from collexa.core.config import Settings
from collexa.core.errors import InvalidUpload, UploadTooLarge

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'.pdf', '.doc', '.docx'}
ALLOWED_MIME_TYPES = {
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}
CHUNK_SIZE = 64 * 1024


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def clean_filename(filename: str) -> str:
    # Keep letters, digits and dots; everything else becomes "_"
    return re.sub(r'[^a-zA-Z0-9.]', '_', Path(filename).name)


def validate_upload(file: UploadFile) -> None:
    if not file.filename:
        raise InvalidUpload("No filename provided")
    ext = get_file_extension(file.filename)
    content_type = (file.content_type or '').split(';')[0].strip().lower()
    if ext not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_MIME_TYPES:
        raise InvalidUpload()


async def store_resume(file: Optional[UploadFile], settings: Settings, field_name: str = "resume") -> Optional[str]:
    """
    Validate and persist an uploaded resume.

    Returns:
        Relative path of the stored file (forward slashes), or None when no
        file was sent.

    Raises:
        InvalidUpload / UploadTooLarge - nothing is written to disk in that case
    """
    if file is None or not file.filename:
        return None

    validate_upload(file)

    limit = settings.max_upload_bytes
    content = bytearray()
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        content.extend(chunk)
        if len(content) > limit:
            raise UploadTooLarge(f"File too large. Maximum size: {settings.max_upload_mb}MB")

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    stamp = int(time.time() * 1000)
    name = f"{field_name}-{stamp}-{secrets.token_hex(4)}-{clean_filename(file.filename)}"
    path = upload_dir / name
    path.write_bytes(bytes(content))
    logger.debug("Stored upload %s (%d bytes)", path, len(content))
    return path.as_posix()


def discard_file(path: Optional[str]) -> None:
    """Delete a stored upload; missing files are ignored."""
    if not path:
        return
    try:
        Path(path).unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error("Could not remove upload %s: %s", path, e)
