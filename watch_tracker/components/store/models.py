"""
Entity store - Data models.

Patches carry every new field value of an edit in one request. Fields left
as UNSET are untouched; None clears an optional field.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from watch_tracker.domain.entities import WatchItem, WatchStatus, WearLog


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET


def _set_fields(patch: object) -> dict[str, Any]:
    return {
        f.name: getattr(patch, f.name)
        for f in fields(patch)  # type: ignore[arg-type]
        if getattr(patch, f.name) is not UNSET
    }


# --- Patch Models ---


@dataclass(frozen=True)
class WatchPatch:
    """Edit request for a watch."""

    model: str | _Unset = UNSET
    purchase_price: float | _Unset = UNSET
    parts_cost: float | _Unset = UNSET
    posted_price: float | None | _Unset = UNSET
    sold_price: float | None | _Unset = UNSET
    status: WatchStatus | _Unset = UNSET
    date_sold: str | None | _Unset = UNSET
    purchase_date: str | None | _Unset = UNSET
    notes: str | None | _Unset = UNSET

    def changes(self) -> dict[str, Any]:
        return _set_fields(self)


@dataclass(frozen=True)
class WearLogPatch:
    """Edit request for a wear session."""

    start: str | _Unset = UNSET
    end: str | None | _Unset = UNSET

    def changes(self) -> dict[str, Any]:
        return _set_fields(self)


# --- Snapshot / Change Notification ---


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable view of both collections at one point in time."""

    watches: tuple[WatchItem, ...] = ()
    wear_logs: tuple[WearLog, ...] = ()

    def find_watch(self, watch_id: str) -> WatchItem | None:
        return next((w for w in self.watches if w.id == watch_id), None)


ITEMS = "items"
WEAR_LOGS = "wearLogs"


@dataclass(frozen=True)
class StoreChange:
    """Which collections a mutation touched."""

    action: str
    collections: frozenset[str]
