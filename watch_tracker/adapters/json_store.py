"""
Key-value store adapters (KeyValueStorePort implementations).

JsonFileStore keeps one file per key under a base directory:
    {base_path}/{key}.json

Writes go to a temporary sibling first and are moved into place with
os.replace, so a crash mid-write never leaves a truncated file behind.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Local filesystem implementation of KeyValueStorePort."""

    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        """
        Initialize file-backed store.

        Args:
            base_path: Directory holding one JSON file per key
            create_dirs: Whether to create the directory if it doesn't exist
        """
        self.base_path = Path(base_path)
        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _key_to_path(self, key: str) -> Path:
        # Sanitize key to prevent directory traversal
        safe_key = key.replace("..", "").replace("/", "_").lstrip("/")
        return self.base_path / f"{safe_key}.json"

    def get(self, key: str) -> str | None:
        path = self._key_to_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._key_to_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)
        logger.debug("Stored %d bytes under %s", len(value), path)


class InMemoryStore:
    """In-memory key-value store for testing/dev."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[str] = []

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append(key)
