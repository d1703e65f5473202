# /sahayak-backend/app/services/storage_service.py

"""
Blob storage on the local filesystem. Files live under `MEDIA_ROOT` and are
served under `MEDIA_URL`, only to the teacher whose id is the second path
segment.
"""

import logging
import os
from pathlib import PurePosixPath

from ..core import config

logger = logging.getLogger(__name__)


def _safe_relative_path(path: str) -> PurePosixPath:
    relative = PurePosixPath(path.replace("\\", "/").lstrip("/"))
    if not relative.parts or any(part in ("..", "") for part in relative.parts):
        raise ValueError(f"Invalid storage path: {path}")
    return relative


def upload_file(data: bytes, path: str) -> str:
    """
    Stores `data` at `path` (relative to the media root) and returns the URL it
    is served from. Existing files at the same path are overwritten.
    """
    if not data:
        raise ValueError("Cannot store an empty file.")
    relative = _safe_relative_path(path)
    target = os.path.join(config.MEDIA_ROOT, *relative.parts)
    os.makedirs(os.path.dirname(target), exist_ok=True)
    with open(target, "wb") as f:
        f.write(data)
    logger.info("Stored %d bytes at %s", len(data), target)
    return f"{config.MEDIA_URL.rstrip('/')}/{relative.as_posix()}"


def owner_of(path: str) -> str:
    """Stored paths are `<kind>/<teacherId>/...`; returns the teacher id segment."""
    relative = _safe_relative_path(path)
    if len(relative.parts) < 3:
        raise ValueError(f"Invalid storage path: {path}")
    return relative.parts[1]


def read_file(path: str) -> bytes:
    """Returns the bytes stored at `path`. Raises FileNotFoundError if there are none."""
    relative = _safe_relative_path(path)
    with open(os.path.join(config.MEDIA_ROOT, *relative.parts), "rb") as f:
        return f.read()
