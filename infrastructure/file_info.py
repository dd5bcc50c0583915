"""File description helpers for the loaded image."""

from __future__ import annotations

import mimetypes
import os
from pathlib import Path

from core.models import FileInfo

IMAGE_MIME_PREFIX = "image/"

# Types `mimetypes` does not know on every platform.
_EXTRA_TYPES = {
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".webp": "image/webp",
}


def guess_mime_type(path: str) -> str:
    """Best-effort MIME type from the file extension; empty string if unknown."""
    suffix = Path(path).suffix.lower()
    if suffix in _EXTRA_TYPES:
        return _EXTRA_TYPES[suffix]
    mime, _ = mimetypes.guess_type(path)
    return mime or ""


def get_file_info(path: str) -> FileInfo:
    """Build a `FileInfo` for `path`.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    size = os.path.getsize(path)
    return FileInfo(name=Path(path).name, size=int(size), type=guess_mime_type(path))


def is_image(file: FileInfo) -> bool:
    return file.type.startswith(IMAGE_MIME_PREFIX)
