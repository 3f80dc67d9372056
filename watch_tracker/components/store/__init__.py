"""
Store component - Authoritative in-memory watch and wear-session collections.
"""

from .component import (
    DEFAULT_ITEMS_KEY,
    DEFAULT_WEAR_KEY,
    EntityStore,
    dump_collection,
)
from .models import (
    ITEMS,
    UNSET,
    WEAR_LOGS,
    StoreChange,
    StoreSnapshot,
    WatchPatch,
    WearLogPatch,
)
from .ports import KeyValueStorePort, StoreListener

__all__ = [
    # Store
    "EntityStore",
    "dump_collection",
    "DEFAULT_ITEMS_KEY",
    "DEFAULT_WEAR_KEY",
    # Models
    "StoreChange",
    "StoreSnapshot",
    "WatchPatch",
    "WearLogPatch",
    "UNSET",
    "ITEMS",
    "WEAR_LOGS",
    # Ports
    "KeyValueStorePort",
    "StoreListener",
]
