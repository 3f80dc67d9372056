"""
Key-value persistence port.

The durable store holds one JSON-serialized array per logical key. It is read
once at startup and written after every mutation of the matching collection.
"""

from __future__ import annotations

from typing import Protocol


class KeyValueStorePort(Protocol):
    """Durable key-value store interface."""

    def get(self, key: str) -> str | None:
        """Return the stored text for key, or None if never written."""
        ...

    def set(self, key: str, value: str) -> None:
        """Durably store value under key, replacing any previous value."""
        ...
