"""
Codec component - CSV / JSON import and export.
"""

from ._impl import (
    backup_to_json,
    build_profit_loss,
    decode_backup,
    decode_watches_csv,
    decode_wear_csv,
    encode_backup,
    encode_watches_csv,
    encode_wear_csv,
    read_csv,
    write_csv,
)
from .component import TransferService
from .models import (
    BACKUP_VERSION,
    Backup,
    ExportFilenames,
    ExportOutcome,
    ImportResult,
    ParsedRows,
    ProfitLossReport,
)
from .schema import WATCH_COLUMNS, WEAR_COLUMNS, CsvColumn

__all__ = [
    # Shell
    "TransferService",
    # Functional core
    "encode_watches_csv",
    "decode_watches_csv",
    "encode_wear_csv",
    "decode_wear_csv",
    "encode_backup",
    "backup_to_json",
    "decode_backup",
    "build_profit_loss",
    "read_csv",
    "write_csv",
    # Schema
    "CsvColumn",
    "WATCH_COLUMNS",
    "WEAR_COLUMNS",
    # Models
    "BACKUP_VERSION",
    "Backup",
    "ExportFilenames",
    "ExportOutcome",
    "ImportResult",
    "ParsedRows",
    "ProfitLossReport",
]
