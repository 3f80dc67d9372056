"""
Wear component - Wear session lifecycle and the sold-date guard.
"""

from .component import WearSessionManager, is_past_sold_date

__all__ = [
    "WearSessionManager",
    "is_past_sold_date",
]
