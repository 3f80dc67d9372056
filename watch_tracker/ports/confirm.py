from typing import Protocol


class ConfirmPort(Protocol):
    """Synchronous yes/no gate in front of destructive operations."""

    def confirm(self, action: str, message: str) -> bool:
        """Return True only when the user agrees to proceed."""
        ...
