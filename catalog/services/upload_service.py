import logging
import os
import uuid
from typing import Iterable

from fastapi import UploadFile

from app.core.errors import PayloadTooLargeError, StoreError, ValidationError

logger = logging.getLogger(__name__)

_CHUNK = 1024 * 1024

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "video/mp4": ".mp4",
    "video/webm": ".webm",
    "video/ogg": ".ogg",
    "application/pdf": ".pdf",
}


class UploadService:
    """
    Stores uploaded media on local disk and returns the public `/uploads/<name>` path.
    """

    def __init__(self, upload_dir: str, max_bytes: int, public_prefix: str = "/uploads"):
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes
        self.public_prefix = public_prefix.rstrip("/")

    async def save(self, file: UploadFile, allowed_types: Iterable[str]) -> str:
        allowed = set(allowed_types)
        content_type = (file.content_type or "").split(";")[0].strip().lower()
        if content_type not in allowed:
            raise ValidationError(f"unsupported file type: {content_type or 'unknown'}")

        # suffix comes from the checked type only; the client's filename is ignored
        ext = _EXTENSIONS.get(content_type, "")
        fname = f"{uuid.uuid4().hex}{ext}"
        os.makedirs(self.upload_dir, exist_ok=True)
        dest_path = os.path.join(self.upload_dir, fname)

        written = 0
        try:
            with open(dest_path, "wb") as f:
                while chunk := await file.read(_CHUNK):
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise PayloadTooLargeError(f"file exceeds {self.max_bytes} bytes")
                    f.write(chunk)
        except PayloadTooLargeError:
            os.remove(dest_path)
            raise
        except OSError as e:
            logger.exception("Failed to save upload %s", fname)
            raise StoreError("failed to save file") from e

        logger.info("Stored upload %s (%s, %d bytes)", fname, content_type, written)
        return f"{self.public_prefix}/{fname}"

    def discard(self, public_url: str) -> None:
        """Remove a previously stored file (used when the owning record could not be created)."""
        if not public_url.startswith(f"{self.public_prefix}/"):
            return
        path = os.path.join(self.upload_dir, os.path.basename(public_url))
        if os.path.exists(path):
            os.remove(path)
