"""
Entity store - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from watch_tracker.ports.storage import KeyValueStorePort

from .models import StoreChange


class StoreListener(Protocol):
    """Called after a mutation has been applied and persisted."""

    def __call__(self, change: StoreChange) -> None: ...


__all__ = ["KeyValueStorePort", "StoreListener"]
