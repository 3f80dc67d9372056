"""
Derive component - Read-only aggregates over a store snapshot.

Functional Core - pure functions, recomputed on every call. Anything that
depends on the current time takes `now` explicitly.

Key behaviors:
- A session contributes max(0, end_or_now - start) minutes; unparsable or
  inverted timestamps contribute nothing
- The active session is the first open entry in history order; manual edits
  can leave several open, and no attempt is made to pick the newest
- A wear log whose watch was deleted resolves to "(deleted)", not an error
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from watch_tracker.components.store.models import StoreSnapshot
from watch_tracker.domain.entities import WatchItem, WearLog
from watch_tracker.domain.values import parse_timestamp

from .models import (
    ALL,
    DELETED_LABEL,
    FinancialSummary,
    ProfitClass,
    ResultFilter,
    StatusFilter,
    WatchStats,
)

# --- Usage ---


def wear_count(snapshot: StoreSnapshot, watch_id: str) -> int:
    """Number of sessions referencing the watch, sold or not."""
    return sum(1 for log in snapshot.wear_logs if log.watch_id == watch_id)


def session_minutes(log: WearLog, now: datetime) -> float:
    """Duration of one session in minutes; open sessions run until now."""
    start = parse_timestamp(log.start)
    if start is None:
        return 0.0
    if log.end is None:
        end = now
    else:
        parsed_end = parse_timestamp(log.end)
        if parsed_end is None:
            return 0.0
        end = parsed_end

    seconds = (end - start).total_seconds()
    return max(0.0, seconds / 60)


def total_wear_minutes(snapshot: StoreSnapshot, watch_id: str, now: datetime) -> float:
    return sum(
        session_minutes(log, now) for log in snapshot.wear_logs if log.watch_id == watch_id
    )


def active_session(snapshot: StoreSnapshot) -> WearLog | None:
    """First open session in history order, if any."""
    return next((log for log in snapshot.wear_logs if log.end is None), None)


def open_sessions(snapshot: StoreSnapshot) -> list[WearLog]:
    return [log for log in snapshot.wear_logs if log.end is None]


def stats_by_watch(snapshot: StoreSnapshot, now: datetime) -> list[WatchStats]:
    """Per-watch usage, most worn first; ties keep collection order."""
    stats = [
        WatchStats(
            watch=watch,
            wear_count=wear_count(snapshot, watch.id),
            total_wear_minutes=total_wear_minutes(snapshot, watch.id, now),
        )
        for watch in snapshot.watches
    ]
    # sorted() is stable
    return sorted(stats, key=lambda s: s.wear_count, reverse=True)


def watch_label(snapshot: StoreSnapshot, watch_id: str) -> str:
    watch = snapshot.find_watch(watch_id)
    return watch.model if watch else DELETED_LABEL


# --- Financials ---


def profit(watch: WatchItem) -> float | None:
    if watch.sold_price is None:
        return None
    return watch.sold_price - (watch.purchase_price + watch.parts_cost)


def classify_profit(value: float | None) -> ProfitClass | None:
    if value is None:
        return None
    if value > 0:
        return "profit"
    if value < 0:
        return "loss"
    return "breakeven"


def summary(watches: Iterable[WatchItem]) -> FinancialSummary:
    """Sum cost over all, sold price and profit over those that have them."""
    total_cost = 0.0
    total_sold = 0.0
    total_profit = 0.0
    count = 0
    for watch in watches:
        count += 1
        total_cost += watch.total_cost
        if watch.sold_price is not None:
            total_sold += watch.sold_price
        watch_profit = profit(watch)
        if watch_profit is not None:
            total_profit += watch_profit

    return FinancialSummary(
        total_cost=total_cost,
        total_sold=total_sold,
        total_profit=total_profit,
        count=count,
    )


# --- Filtered Views ---


def _matches(watch: WatchItem, query: str) -> bool:
    return query.lower() in watch.model.lower()


def filtered_available(snapshot: StoreSnapshot, query: str = "") -> list[WatchItem]:
    return [w for w in snapshot.watches if w.status == "Available" and _matches(w, query)]


def sold_year(watch: WatchItem) -> str | None:
    return watch.date_sold[:4] if watch.date_sold else None


def filtered_sold(
    snapshot: StoreSnapshot,
    query: str = "",
    year: str = ALL,
    result: ResultFilter = "all",
) -> list[WatchItem]:
    """
    Sold watches matching query, sale year and result class.

    Watches without a profit figure only appear under result="all".
    """
    matches: list[WatchItem] = []
    for watch in snapshot.watches:
        if watch.status != "Sold" or not _matches(watch, query):
            continue
        if year != ALL and sold_year(watch) != year:
            continue
        if result != ALL and classify_profit(profit(watch)) != result:
            continue
        matches.append(watch)
    return matches


def filter_watches(
    snapshot: StoreSnapshot,
    query: str = "",
    status: StatusFilter = "All",
) -> list[WatchItem]:
    return [
        w
        for w in snapshot.watches
        if (status == "All" or w.status == status) and _matches(w, query)
    ]


def sold_years(snapshot: StoreSnapshot) -> list[str]:
    """Distinct sale years of sold watches, newest first."""
    years = {sold_year(w) for w in snapshot.watches if w.status == "Sold"}
    return sorted((y for y in years if y), reverse=True)
