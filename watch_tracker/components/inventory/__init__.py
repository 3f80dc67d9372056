"""
Inventory component - Watch lifecycle (add, edit, sell, delete).
"""

from .component import InventoryService, validate_watch_data
from .models import AddWatchInput, Amount, MarkSoldInput

__all__ = [
    "InventoryService",
    "validate_watch_data",
    "AddWatchInput",
    "MarkSoldInput",
    "Amount",
]
