"""
File Upload Utility - Store testimonial images on local disk.

Images land in a single flat directory (settings.upload_dir) which is
mounted as static files under /uploads. Files are named after the upload
time in milliseconds, keeping the original extension. The value stored on
the testimonial is always the public path, whatever upload_dir is:

    uploads/1718114023123.jpg

Disk I/O runs in the threadpool so handlers never block the event loop.
"""

import logging
import os
import time
from typing import Optional

from fastapi import Depends, UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# URL prefix the upload directory is mounted under (see app.main)
UPLOAD_URL_PREFIX = "uploads"


def get_file_extension(filename: str) -> str:
    """Get file extension (with dot), preserving case like the original name."""
    return os.path.splitext(filename or "")[1]


def has_upload(file: Optional[UploadFile]) -> bool:
    """Browsers send an empty part with no filename when no file was picked."""
    return file is not None and bool(file.filename)


class UploadStore:
    """Local-disk store for uploaded images."""

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    def ensure_dir(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    def _write(self, ext: str, content: bytes) -> str:
        self.ensure_dir()
        stamp = int(time.time() * 1000)
        while os.path.exists(os.path.join(self.upload_dir, f"{stamp}{ext}")):
            stamp += 1
        filename = f"{stamp}{ext}"
        with open(os.path.join(self.upload_dir, filename), "wb") as out:
            out.write(content)
        return filename

    def local_path(self, stored_path: str) -> str:
        """Map a stored public path back to its file in upload_dir."""
        return os.path.join(self.upload_dir, os.path.basename(stored_path))

    async def save(self, file: UploadFile) -> str:
        """
        Write the upload to disk.

        Returns:
            Public path, e.g. "uploads/1718114023123.png"
        """
        content = await file.read()
        filename = await run_in_threadpool(
            self._write, get_file_extension(file.filename), content
        )
        logger.info("Stored upload %s (%d bytes)", filename, len(content))
        return f"{UPLOAD_URL_PREFIX}/{filename}"

    def _remove(self, stored_path: Optional[str]) -> bool:
        if not stored_path:
            return False
        try:
            os.remove(self.local_path(stored_path))
            return True
        except OSError as e:
            logger.warning("Image deletion error for %s: %s", stored_path, e)
            return False

    async def remove_quietly(self, stored_path: Optional[str]) -> bool:
        """
        Best-effort delete of a previously stored image.

        Errors are logged and never raised.
        """
        return await run_in_threadpool(self._remove, stored_path)


def get_upload_store(settings: Settings = Depends(get_settings)) -> UploadStore:
    return UploadStore(settings.upload_dir)
