"""
Codec component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from watch_tracker.components.derive import FinancialSummary
from watch_tracker.domain.entities import WatchItem, WearLog

BACKUP_VERSION = 1

ExportStatus = Literal["written", "no_rows"]


@dataclass(frozen=True)
class ExportFilenames:
    """Suggested filenames; {date} and {year} are filled in at export time."""

    watches: str = "watch-tracker.csv"
    wear_logs: str = "watch-wear-log.csv"
    backup: str = "watch-tracker-backup-{date}.json"
    profit_loss: str = "watch-profit-loss-{year}.csv"


@dataclass(frozen=True)
class ExportOutcome:
    """
    Result of an export.

    status="no_rows" means nothing matched and nothing was written; an export
    of an empty collection that still wrote a header is status="written".
    """

    status: ExportStatus
    filename: str
    row_count: int = 0
    location: str | None = None

    @property
    def written(self) -> bool:
        return self.status == "written"


@dataclass(frozen=True)
class ImportResult:
    """Result of an import."""

    kind: str
    imported: int
    skipped: int = 0
    applied: bool = True


@dataclass(frozen=True)
class ParsedRows:
    """Entities decoded from a CSV payload plus the rows that were dropped."""

    entities: tuple[WatchItem, ...] | tuple[WearLog, ...]
    skipped: int


@dataclass(frozen=True)
class Backup:
    """Decoded full backup."""

    version: int
    exported_at: str | None
    items: tuple[WatchItem, ...] = ()
    wear_logs: tuple[WearLog, ...] = ()


@dataclass(frozen=True)
class ProfitLossReport:
    """Rows of the profit/loss report and their totals."""

    year: str | None
    watches: tuple[WatchItem, ...]
    totals: FinancialSummary
    rows: list[list[str]] = field(default_factory=list)
