"""
Value parsing helpers shared by the components.

Inputs come from spreadsheet exports, hand edited timestamps and legacy
backups. Unusable input yields a neutral value, never an exception.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_amount(raw: str | float | int | None) -> float:
    """
    Parse a money amount.

    Every character except digits, '.' and '-' is stripped ("$1,250.00" ->
    1250.0). Empty or non-numeric input yields 0.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, int | float):
        return float(raw)

    cleaned = _NON_NUMERIC.sub("", raw)
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value


def format_amount(value: float | None) -> str:
    """Format an amount with at most two decimals and no trailing zeros."""
    if value is None:
        return ""
    text = f"{round(value, 2):.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def parse_timestamp(raw: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp.

    Naive values are assumed to be UTC. Returns None when unparsable.
    """
    if not raw or not raw.strip():
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(raw: str | None) -> date | None:
    """Parse the leading YYYY-MM-DD part of a date string, or None."""
    if not raw or len(raw.strip()) < 10:
        return None
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        return None


def format_timestamp(moment: datetime) -> str:
    return moment.isoformat()
