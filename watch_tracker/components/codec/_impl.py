"""
Codec component - CSV / JSON encoding and decoding.

Functional Core - pure functions, no I/O and no store access.

Key behaviors:
- CSV data rows are lenient: a bad row is skipped, never fatal
- A wear CSV without "Watch Model" and "Start" headers aborts the import
- Backups must be {version: 1, items: [...], wearLogs: [...]}; anything else
  raises ImportFormatError before any state is touched
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from watch_tracker.components.derive import (
    classify_profit,
    filtered_sold,
    profit,
    summary,
)
from watch_tracker.components.derive.models import ALL
from watch_tracker.components.store import StoreSnapshot, dump_collection
from watch_tracker.components.wear import is_past_sold_date
from watch_tracker.domain.entities import WatchItem, WearLog
from watch_tracker.domain.errors import ImportFormatError, ParseError
from watch_tracker.domain.values import format_amount, format_timestamp, parse_timestamp

from .models import BACKUP_VERSION, Backup, ParsedRows, ProfitLossReport
from .schema import (
    PROFIT_LOSS_HEADER,
    TOTALS_LABEL,
    WATCH_COLUMNS,
    WEAR_COLUMNS,
    WEAR_REQUIRED_HEADERS,
    header_row,
    read_cells,
    resolve_columns,
    write_cells,
)

logger = logging.getLogger(__name__)

_WATCH_LIST = TypeAdapter(list[WatchItem])
_WEAR_LIST = TypeAdapter(list[WearLog])


# --- CSV Plumbing ---


def read_csv(text: str) -> tuple[list[str], list[list[str]]]:
    """Split CSV text into header and data rows, dropping blank lines."""
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    rows = [row for row in reader if any(c.strip() for c in row)]
    if not rows:
        return [], []
    return rows[0], rows[1:]


def write_csv(rows: Iterable[Sequence[str]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerows(rows)
    return output.getvalue()


# --- Watch CSV ---


def encode_watches_csv(watches: Iterable[WatchItem]) -> str:
    rows: list[Sequence[str]] = [header_row(WATCH_COLUMNS)]
    rows.extend(write_cells(w.model_dump(), WATCH_COLUMNS) for w in watches)
    return write_csv(rows)


def decode_watches_csv(text: str) -> ParsedRows:
    """
    Decode watch rows.

    Rows with an empty model or values the entity rejects are skipped.
    """
    header, data = read_csv(text)
    index = resolve_columns(header, WATCH_COLUMNS)
    watches: list[WatchItem] = []
    skipped = 0

    for line_no, row in enumerate(data, start=2):
        values = read_cells(row, index, WATCH_COLUMNS)
        if not values["model"]:
            skipped += 1
            continue
        try:
            watches.append(WatchItem(**values))
        except PydanticValidationError as e:
            logger.debug("Skipping watch CSV line %d: %s", line_no, e)
            skipped += 1

    return ParsedRows(entities=tuple(watches), skipped=skipped)


# --- Wear CSV ---


def encode_wear_csv(snapshot: StoreSnapshot) -> str:
    """Sessions of deleted watches are written with an empty model."""
    rows: list[Sequence[str]] = [header_row(WEAR_COLUMNS)]
    for log in snapshot.wear_logs:
        watch = snapshot.find_watch(log.watch_id)
        values = {"model": watch.model if watch else "", "start": log.start, "end": log.end}
        rows.append(write_cells(values, WEAR_COLUMNS))
    return write_csv(rows)


def decode_wear_csv(text: str, watches: Sequence[WatchItem]) -> ParsedRows:
    """
    Decode wear rows against the current watches.

    The model name must match a watch exactly (case-sensitive, trimmed);
    unmatched rows are dropped, as are rows that start on a day after the
    watch's dateSold.

    Raises:
        ImportFormatError: the header lacks "Watch Model" or "Start"
    """
    header, data = read_csv(text)
    if not header:
        return ParsedRows(entities=(), skipped=0)

    index = resolve_columns(header, WEAR_COLUMNS)
    missing = [
        c.header for c in WEAR_COLUMNS if c.header in WEAR_REQUIRED_HEADERS and c.field not in index
    ]
    if missing:
        raise ImportFormatError(
            "Wear CSV must have 'Watch Model' and 'Start' headers "
            f"(missing: {', '.join(missing)})",
            code="wear_header_invalid",
        )

    by_model: dict[str, WatchItem] = {}
    for watch in watches:
        by_model.setdefault(watch.model.strip(), watch)

    logs: list[WearLog] = []
    skipped = 0
    for row in data:
        values = read_cells(row, index, WEAR_COLUMNS)
        watch = by_model.get(values["model"])
        if not values["model"] or not values["start"] or watch is None:
            skipped += 1
            continue
        started = parse_timestamp(values["start"])
        if started is not None and is_past_sold_date(watch, started):
            logger.debug("Skipping wear row for %s: starts after sale", watch.model)
            skipped += 1
            continue
        logs.append(WearLog(watch_id=watch.id, start=values["start"], end=values["end"]))

    return ParsedRows(entities=tuple(logs), skipped=skipped)


# --- Backup ---


def encode_backup(snapshot: StoreSnapshot, exported_at: datetime) -> dict[str, Any]:
    return {
        "version": BACKUP_VERSION,
        "exportedAt": format_timestamp(exported_at),
        "items": dump_collection(snapshot.watches),
        "wearLogs": dump_collection(snapshot.wear_logs),
    }


def backup_to_json(snapshot: StoreSnapshot, exported_at: datetime) -> str:
    return json.dumps(encode_backup(snapshot, exported_at), indent=2)


def decode_backup(text: str) -> Backup:
    """
    Decode and validate a full backup.

    Raises:
        ParseError: text is not JSON
        ImportFormatError: wrong version, non-array collections or invalid entries
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Backup is not valid JSON: {e.msg} (line {e.lineno})") from e

    if not isinstance(data, dict):
        raise ImportFormatError("Backup must be a JSON object")
    version = data.get("version")
    # bool is an int subclass and 1.0 == 1; only the integer 1 is accepted
    if type(version) is not int or version != BACKUP_VERSION:
        raise ImportFormatError(
            f"Unsupported backup version: {version!r} (expected {BACKUP_VERSION})",
            code="backup_version",
        )
    if not isinstance(data.get("items"), list) or not isinstance(data.get("wearLogs"), list):
        raise ImportFormatError("Backup 'items' and 'wearLogs' must both be arrays")

    try:
        items = _WATCH_LIST.validate_python(data["items"])
        wear_logs = _WEAR_LIST.validate_python(data["wearLogs"])
    except PydanticValidationError as e:
        raise ImportFormatError(f"Backup contains invalid entries: {e}") from e

    return Backup(
        version=BACKUP_VERSION,
        exported_at=data.get("exportedAt"),
        items=tuple(items),
        wear_logs=tuple(wear_logs),
    )


# --- Profit / Loss Report ---


def build_profit_loss(snapshot: StoreSnapshot, year: str | None = None) -> ProfitLossReport:
    """Sold watches (optionally for one sale year) with a trailing TOTALS row."""
    watches = tuple(filtered_sold(snapshot, year=year or ALL))
    totals = summary(watches)

    rows: list[list[str]] = [list(PROFIT_LOSS_HEADER)]
    for watch in watches:
        watch_profit = profit(watch)
        rows.append(
            [
                watch.model,
                watch.date_sold or "",
                format_amount(watch.purchase_price),
                format_amount(watch.parts_cost),
                format_amount(watch.total_cost),
                format_amount(watch.sold_price),
                format_amount(watch_profit),
                classify_profit(watch_profit) or "",
            ]
        )
    rows.append(
        [
            TOTALS_LABEL,
            "",
            "",
            "",
            format_amount(totals.total_cost),
            format_amount(totals.total_sold),
            format_amount(totals.total_profit),
            "",
        ]
    )
    return ProfitLossReport(year=year, watches=watches, totals=totals, rows=rows)
