from fastapi import UploadFile

from app.core.config import get_settings
from app.core.errors import PayloadTooLargeError, ValidationError

IMAGE_CONTENT_TYPES = {"image/png", "image/jpeg", "image/webp", "image/gif"}
CHUNK_SIZE = 1024 * 1024


async def read_image_upload(file: UploadFile) -> tuple[bytes, str]:
    """Read an uploaded screenshot into memory, enforcing type and size limits."""
    settings = get_settings()
    content_type = (file.content_type or "").lower()
    if content_type not in IMAGE_CONTENT_TYPES:
        raise ValidationError(f"Invalid content type: {file.content_type}")

    max_bytes = settings.max_image_size_mb * 1024 * 1024
    chunks: list[bytes] = []
    total = 0
    try:
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            total += len(chunk)
            if total > max_bytes:
                raise PayloadTooLargeError()
            chunks.append(chunk)
    finally:
        await file.close()

    if not total:
        raise ValidationError("Uploaded file is empty.")
    return b"".join(chunks), content_type
