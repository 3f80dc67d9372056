"""
Local filesystem adapter for FileIOPort.

Exports land in a fixed directory under their suggested filename; existing
files with the same name are overwritten.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileIO:
    def __init__(self, export_dir: str | Path, *, create_dirs: bool = True) -> None:
        self.export_dir = Path(export_dir)
        if create_dirs:
            self.export_dir.mkdir(parents=True, exist_ok=True)

    def read_text(self, path: str) -> str:
        # utf-8-sig drops the BOM spreadsheet tools like to prepend
        return Path(path).read_text(encoding="utf-8-sig")

    def write_text(self, filename: str, payload: str) -> str:
        target = self.export_dir / Path(filename).name
        target.write_text(payload, encoding="utf-8", newline="")
        logger.info("Exported %s (%d bytes)", target, len(payload))
        return str(target)
