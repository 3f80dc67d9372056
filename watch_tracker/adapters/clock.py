"""
Clock adapters (ClockPort implementations).

Timestamps are recorded in UTC; calendar questions such as "is today past the
sold date" are answered in the configured display timezone.

Key behaviors:
- SystemClock: real time, IANA timezone for local conversions
- FrozenClock: fixed time that only moves via advance()
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo


class SystemClock:
    """Wall clock for a given timezone."""

    def __init__(self, tz_name: str = "UTC") -> None:
        """
        Initialize with specified timezone.

        Args:
            tz_name: IANA timezone name (default: UTC)
        """
        self._tz_name = tz_name
        self._tz = ZoneInfo(tz_name)

    def now_utc(self) -> datetime:
        return datetime.now(UTC)

    def now_local(self) -> datetime:
        return datetime.now(self._tz)

    @property
    def timezone_name(self) -> str:
        return self._tz_name


class FrozenClock:
    """
    Clock that returns a fixed time.

    Useful for deterministic testing.
    """

    def __init__(self, frozen_utc: datetime, tz_name: str = "UTC") -> None:
        """
        Initialize with frozen time.

        Args:
            frozen_utc: The UTC time to return from now_utc()
            tz_name: IANA timezone name for local conversions
        """
        if frozen_utc.tzinfo is None:
            frozen_utc = frozen_utc.replace(tzinfo=UTC)
        self._frozen_utc = frozen_utc.astimezone(UTC)
        self._tz_name = tz_name
        self._tz = ZoneInfo(tz_name)

    def now_utc(self) -> datetime:
        return self._frozen_utc

    def now_local(self) -> datetime:
        return self._frozen_utc.astimezone(self._tz)

    @property
    def timezone_name(self) -> str:
        return self._tz_name

    def advance(self, delta: timedelta) -> None:
        """Advance frozen time by delta (for testing)."""
        self._frozen_utc = self._frozen_utc + delta


def create_clock(tz_name: str = "UTC") -> SystemClock:
    """Factory function to create a clock."""
    return SystemClock(tz_name)
