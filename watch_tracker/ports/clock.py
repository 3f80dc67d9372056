from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    def now_utc(self) -> datetime:
        """Return current UTC time (timezone-aware)."""
        ...

    def now_local(self) -> datetime:
        """Return current time in the configured display timezone."""
        ...
