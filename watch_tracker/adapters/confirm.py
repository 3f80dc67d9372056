"""
Confirmation adapters (ConfirmPort implementations).

The prompt itself belongs to the UI; these adapters cover fixed answers and
delegating to a caller-supplied function.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass
class StaticConfirm:
    """Always gives the same answer and records what was asked."""

    answer: bool = True
    asked: list[str] = field(default_factory=list)

    def confirm(self, action: str, message: str) -> bool:
        self.asked.append(action)
        return self.answer


class CallbackConfirm:
    """Delegates the decision to a callable, e.g. a UI dialog."""

    def __init__(self, callback: Callable[[str, str], bool]) -> None:
        self._callback = callback

    def confirm(self, action: str, message: str) -> bool:
        return bool(self._callback(action, message))
