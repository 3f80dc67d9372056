"""
Codec component - Import/export shell.

Shell Layer - handles file I/O, confirmation and store mutation around the
pure codec functions.

Watch CSV import replaces the whole watch collection while wear CSV import
appends to the existing history. The asymmetry is kept on purpose; revisit
both together if merge semantics are ever wanted.

File imports read off the event loop and then apply parse-plus-mutate in one
synchronous step, so no caller observes a half-applied import. Two imports
racing each other are not guarded: the last one to finish wins.
"""

from __future__ import annotations

import asyncio
import logging

from watch_tracker.components.store import EntityStore
from watch_tracker.domain.entities import WatchItem, WearLog
from watch_tracker.domain.errors import ImportFormatError
from watch_tracker.ports.clock import ClockPort
from watch_tracker.ports.confirm import ConfirmPort
from watch_tracker.ports.files import FileIOPort

from ._impl import (
    backup_to_json,
    build_profit_loss,
    decode_backup,
    decode_watches_csv,
    decode_wear_csv,
    encode_watches_csv,
    encode_wear_csv,
    write_csv,
)
from .models import ExportFilenames, ExportOutcome, ImportResult

logger = logging.getLogger(__name__)


class TransferService:
    """Moves watches and wear logs in and out of the entity store."""

    def __init__(
        self,
        store: EntityStore,
        files: FileIOPort,
        confirm: ConfirmPort,
        clock: ClockPort,
        filenames: ExportFilenames | None = None,
    ) -> None:
        self._store = store
        self._files = files
        self._confirm = confirm
        self._clock = clock
        self._filenames = filenames or ExportFilenames()

    def _write(self, filename: str, payload: str, row_count: int) -> ExportOutcome:
        location = self._files.write_text(filename, payload)
        return ExportOutcome(
            status="written", filename=filename, row_count=row_count, location=location
        )

    async def _read(self, path: str) -> str:
        return await asyncio.to_thread(self._files.read_text, path)

    # --- Watch CSV ---

    def export_watches(self) -> ExportOutcome:
        watches = self._store.watches
        return self._write(self._filenames.watches, encode_watches_csv(watches), len(watches))

    def import_watches(self, text: str) -> ImportResult:
        """Replace the watch collection with the CSV rows; no rows, no change."""
        parsed = decode_watches_csv(text)
        watches: tuple[WatchItem, ...] = parsed.entities  # type: ignore[assignment]
        if not watches:
            logger.info("Watch CSV had no usable rows (%d skipped)", parsed.skipped)
            return ImportResult("watches", imported=0, skipped=parsed.skipped, applied=False)

        self._store.replace_watches(watches)
        logger.info("Imported %d watches (%d rows skipped)", len(watches), parsed.skipped)
        return ImportResult("watches", imported=len(watches), skipped=parsed.skipped)

    async def import_watches_file(self, path: str) -> ImportResult:
        return self.import_watches(await self._read(path))

    # --- Wear CSV ---

    def export_wear_logs(self) -> ExportOutcome:
        snapshot = self._store.snapshot()
        return self._write(
            self._filenames.wear_logs, encode_wear_csv(snapshot), len(snapshot.wear_logs)
        )

    def import_wear_logs(self, text: str) -> ImportResult:
        """Prepend matched sessions to the existing history."""
        parsed = decode_wear_csv(text, self._store.watches)
        logs: tuple[WearLog, ...] = parsed.entities  # type: ignore[assignment]
        if not logs:
            logger.info("Wear CSV had no matching rows (%d skipped)", parsed.skipped)
            return ImportResult("wear_logs", imported=0, skipped=parsed.skipped, applied=False)

        self._store.prepend_wear_logs(logs)
        logger.info("Imported %d wear logs (%d rows skipped)", len(logs), parsed.skipped)
        return ImportResult("wear_logs", imported=len(logs), skipped=parsed.skipped)

    async def import_wear_logs_file(self, path: str) -> ImportResult:
        return self.import_wear_logs(await self._read(path))

    # --- Full Backup ---

    def export_backup(self) -> ExportOutcome:
        now = self._clock.now_utc()
        snapshot = self._store.snapshot()
        filename = self._filenames.backup.format(date=now.date().isoformat())
        return self._write(
            filename,
            backup_to_json(snapshot, now),
            len(snapshot.watches) + len(snapshot.wear_logs),
        )

    def import_backup(self, text: str) -> ImportResult:
        """
        Restore both collections from a backup.

        Raises:
            ImportFormatError: malformed or unsupported backup; nothing changes
        """
        try:
            backup = decode_backup(text)
        except ImportFormatError as e:
            logger.warning("Backup rejected: %s", e.message)
            raise

        if not self._confirm.confirm(
            "import_backup",
            f"Replace all data with {len(backup.items)} watches and "
            f"{len(backup.wear_logs)} wear logs from this backup?",
        ):
            logger.info("Backup restore declined")
            return ImportResult("backup", imported=0, applied=False)

        self._store.replace_all(backup.items, backup.wear_logs)
        logger.info(
            "Restored backup: %d watches, %d wear logs",
            len(backup.items),
            len(backup.wear_logs),
        )
        return ImportResult("backup", imported=len(backup.items) + len(backup.wear_logs))

    async def import_backup_file(self, path: str) -> ImportResult:
        return self.import_backup(await self._read(path))

    # --- Profit / Loss ---

    def export_profit_loss(self, year: str | None = None) -> ExportOutcome:
        """
        Export the profit/loss report, optionally for one sale year.

        Returns status="no_rows" without writing when nothing matches.
        """
        report = build_profit_loss(self._store.snapshot(), year)
        filename = self._filenames.profit_loss.format(year=year or "all")
        if not report.watches:
            logger.info("No sold watches for %s; profit/loss export skipped", year or "any year")
            return ExportOutcome(status="no_rows", filename=filename)
        return self._write(filename, write_csv(report.rows), len(report.watches))
