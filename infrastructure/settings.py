"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

DEFAULT_SETTINGS: dict[str, Any] = {
    "logging": {"level": "INFO", "dir": None},
    "ai": {"parameter_tags": ["parameters", "prompt", "workflow"]},
    "export": {"raw_filename": "exif-data.json"},
}


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    Keys missing from the file fall back to `DEFAULT_SETTINGS`, then to the
    `default` passed to `get`.
    """

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)
        if not isinstance(self._data, dict):
            raise ValueError(f"settings root must be an object: {self._path}")

    @staticmethod
    def _lookup(data: Any, key: str) -> tuple[bool, Any]:
        node: Any = data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return False, None
        return True, node

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        for source in (self._data, DEFAULT_SETTINGS):
            found, value = self._lookup(source, key)
            if found:
                return value
        return default

    def get_list(self, key: str) -> list[str]:
        """Return a list of strings for `key`; non-list values give an empty list."""
        value = self.get(key, [])
        if not isinstance(value, list):
            return []
        return [str(v) for v in value]
