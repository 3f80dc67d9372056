"""
Derive component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from watch_tracker.domain.entities import WatchItem

ProfitClass = Literal["profit", "loss", "breakeven"]
ResultFilter = Literal["all", "profit", "loss", "breakeven"]
StatusFilter = Literal["All", "Available", "Sold"]

ALL = "all"
DELETED_LABEL = "(deleted)"


@dataclass(frozen=True)
class FinancialSummary:
    """Totals over a set of watches."""

    total_cost: float
    total_sold: float
    total_profit: float
    count: int


@dataclass(frozen=True)
class WatchStats:
    """Usage figures for one watch."""

    watch: WatchItem
    wear_count: int
    total_wear_minutes: float
