"""
Derive component - Counts, durations, profit and filtered views.
"""

from .component import (
    active_session,
    classify_profit,
    filter_watches,
    filtered_available,
    filtered_sold,
    open_sessions,
    profit,
    session_minutes,
    sold_year,
    sold_years,
    stats_by_watch,
    summary,
    total_wear_minutes,
    watch_label,
    wear_count,
)
from .models import (
    ALL,
    DELETED_LABEL,
    FinancialSummary,
    ProfitClass,
    ResultFilter,
    StatusFilter,
    WatchStats,
)

__all__ = [
    # Usage
    "wear_count",
    "session_minutes",
    "total_wear_minutes",
    "active_session",
    "open_sessions",
    "stats_by_watch",
    "watch_label",
    # Financials
    "profit",
    "classify_profit",
    "summary",
    # Views
    "filtered_available",
    "filtered_sold",
    "filter_watches",
    "sold_year",
    "sold_years",
    # Models
    "FinancialSummary",
    "WatchStats",
    "ProfitClass",
    "ResultFilter",
    "StatusFilter",
    "ALL",
    "DELETED_LABEL",
]
