import logging
import os
import time

from django.conf import settings
from django.utils.text import get_valid_filename

from .exceptions import FileTooLarge, InvalidFile

logger = logging.getLogger(__name__)

ALLOWED_AUDIO_TYPES = {"audio/mpeg"}


def validate_upload(upload) -> None:
    content_type = (getattr(upload, "content_type", "") or "").lower()
    if not (content_type.startswith("image/") or content_type in ALLOWED_AUDIO_TYPES):
        raise InvalidFile()
    if upload.size > settings.UPLOAD_MAX_BYTES:
        raise FileTooLarge()


def save_upload(upload) -> str:
    """Validate and write an uploaded file, returning its public path."""
    validate_upload(upload)

    upload_dir = settings.MEDIA_ROOT
    os.makedirs(upload_dir, exist_ok=True)

    # Millisecond prefix keeps same-named uploads apart
    filename = get_valid_filename(os.path.basename(getattr(upload, "name", "") or "upload"))
    safe_filename = f"{int(time.time() * 1000)}-{filename}"
    file_path = os.path.join(upload_dir, safe_filename)

    with open(file_path, "wb") as f:
        for chunk in upload.chunks():
            f.write(chunk)

    logger.info("Saved upload %s (%d bytes)", safe_filename, upload.size)
    return f"{settings.MEDIA_URL.rstrip('/')}/{safe_filename}"

