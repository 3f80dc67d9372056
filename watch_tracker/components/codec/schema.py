"""
Codec component - Declarative CSV column schemas.

Each column is declared once with its header, entity field, parser, formatter
and default. Import and export both read these lists, so the two sides cannot
drift apart.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from watch_tracker.domain.values import format_amount, parse_amount


@dataclass(frozen=True)
class CsvColumn:
    """One CSV column and how it maps onto an entity field."""

    header: str
    field: str
    parse: Callable[[str], Any]
    format: Callable[[Any], str]
    default: Any = None

    @property
    def key(self) -> str:
        return self.header.strip().lower()


# --- Cell Parsers / Formatters ---


def _text(value: str) -> str:
    return value.strip()


def _optional_text(value: str) -> str | None:
    return value.strip() or None


def _optional_amount(value: str) -> float | None:
    return parse_amount(value) if value.strip() else None


def _status(value: str) -> str:
    return "Sold" if value.strip() == "Sold" else "Available"


def _plain(value: Any) -> str:
    return "" if value is None else str(value)


# --- Schemas ---


WATCH_COLUMNS: tuple[CsvColumn, ...] = (
    CsvColumn("Watch Model", "model", _text, _plain, ""),
    CsvColumn("Date Purchased", "purchase_date", _optional_text, _plain, None),
    CsvColumn("Purchase Price", "purchase_price", parse_amount, format_amount, 0.0),
    CsvColumn("Parts Cost", "parts_cost", parse_amount, format_amount, 0.0),
    CsvColumn("Posted Sale Price", "posted_price", _optional_amount, format_amount, None),
    CsvColumn("Sold Price", "sold_price", _optional_amount, format_amount, None),
    CsvColumn("Status", "status", _status, _plain, "Available"),
    CsvColumn("Date Sold", "date_sold", _optional_text, _plain, None),
    CsvColumn("Notes", "notes", _optional_text, _plain, None),
)

# "Watch Model" resolves to a watch id by name, not to a stored field
WEAR_COLUMNS: tuple[CsvColumn, ...] = (
    CsvColumn("Watch Model", "model", _text, _plain, ""),
    CsvColumn("Start", "start", _text, _plain, ""),
    CsvColumn("End", "end", _optional_text, _plain, None),
)

WEAR_REQUIRED_HEADERS = ("Watch Model", "Start")

PROFIT_LOSS_HEADER = (
    "Watch Model",
    "Date Sold",
    "Purchase Price",
    "Parts Cost",
    "Total Cost",
    "Sold Price",
    "Profit",
    "Result",
)
TOTALS_LABEL = "TOTALS"


# --- Header Resolution ---


def header_row(columns: Sequence[CsvColumn]) -> list[str]:
    return [c.header for c in columns]


def resolve_columns(header: Sequence[str], columns: Sequence[CsvColumn]) -> dict[str, int]:
    """
    Map field name -> column index by case-insensitive header name.

    Columns absent from the header are left out of the mapping.
    """
    positions = {name.strip().lower(): i for i, name in reversed(list(enumerate(header)))}
    return {c.field: positions[c.key] for c in columns if c.key in positions}


def read_cells(
    row: Sequence[str],
    index: dict[str, int],
    columns: Sequence[CsvColumn],
) -> dict[str, Any]:
    """Parse one data row; missing columns or cells take the column default."""
    values: dict[str, Any] = {}
    for column in columns:
        position = index.get(column.field)
        if position is None or position >= len(row):
            values[column.field] = column.default
        else:
            values[column.field] = column.parse(row[position])
    return values


def write_cells(values: dict[str, Any], columns: Sequence[CsvColumn]) -> list[str]:
    return [column.format(values.get(column.field)) for column in columns]
