"""
File I/O port.

Supplies raw text for imports and accepts generated payloads for export. How
a file gets picked or downloaded is entirely up to the implementation.
"""

from __future__ import annotations

from typing import Protocol


class FileIOPort(Protocol):
    def read_text(self, path: str) -> str:
        """Read a whole file as text."""
        ...

    def write_text(self, filename: str, payload: str) -> str:
        """Write payload under the suggested filename; return its location."""
        ...
