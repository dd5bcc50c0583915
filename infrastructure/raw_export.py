"""Raw JSON rendering and export of a metadata bag."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.models import MetadataBag

DEFAULT_EXPORT_NAME = "exif-data.json"
EMPTY_METADATA_TEXT = "No metadata found (empty object)"


def _json_default(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset)):
        return list(value)
    return str(value)


def dump_raw_json(bag: MetadataBag | None) -> str:
    """Pretty JSON of the bag exactly as decoded."""
    return json.dumps(dict(bag or {}), indent=2, ensure_ascii=False, default=_json_default)


def to_raw_json(bag: MetadataBag | None) -> str:
    """JSON text for the raw view; a notice instead of ``{}`` for an empty bag."""
    text = dump_raw_json(bag)
    return EMPTY_METADATA_TEXT if text == "{}" else text


def export_raw_json(
    bag: MetadataBag | None, target: str | Path, default_name: str = DEFAULT_EXPORT_NAME
) -> Path:
    """Write the bag as JSON.

    `target` may be a directory, in which case `default_name` is used inside it.
    Returns the written path.
    """
    path = Path(target)
    if path.is_dir():
        path = path / default_name
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(dump_raw_json(bag))
    logger.info("Exported raw metadata to {}", path)
    return path
