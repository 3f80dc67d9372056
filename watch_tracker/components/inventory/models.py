"""
Inventory component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass

# Amounts arrive either as numbers or as raw form text ("$1,250")
Amount = float | int | str


@dataclass(frozen=True)
class AddWatchInput:
    """Input for adding a watch."""

    model: str
    purchase_price: Amount = 0
    parts_cost: Amount = 0
    posted_price: Amount | None = None
    purchase_date: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class MarkSoldInput:
    """Input for recording a sale."""

    sold_price: Amount
    date_sold: str | None = None  # defaults to today (local)
