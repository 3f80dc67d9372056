"""
Domain errors.

Every failure raised by the core derives from WatchTrackerError and carries a
machine-readable code plus a human-readable message. None of them is fatal:
the entity store is left in its last valid state whenever one is raised.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation problem."""

    field: str
    code: str
    message: str


class WatchTrackerError(Exception):
    """Base class for watch tracker errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class ValidationError(WatchTrackerError):
    """Raised when caller-supplied values are rejected."""

    def __init__(self, errors: list[FieldError] | tuple[FieldError, ...]) -> None:
        self.errors = tuple(errors)
        first = self.errors[0] if self.errors else None
        super().__init__(
            first.code if first else "invalid",
            "; ".join(e.message for e in self.errors) or "Invalid input",
        )


class NotFoundError(WatchTrackerError):
    """Raised when an operation references an unknown id."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind}_not_found", f"{kind.capitalize()} not found: {entity_id}")


class DomainViolationError(WatchTrackerError):
    """Raised when an operation would break a domain rule."""


class ImportFormatError(WatchTrackerError):
    """Raised when an import payload is structurally unusable."""

    def __init__(self, message: str, code: str = "import_format") -> None:
        super().__init__(code, message)


class ParseError(ImportFormatError):
    """Raised when an import payload cannot be parsed at all."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="parse_error")


def field_errors_from_pydantic(exc: PydanticValidationError) -> list[FieldError]:
    """Translate a pydantic ValidationError into field errors."""
    errors: list[FieldError] = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field = ".".join(str(part) for part in loc) if loc else "_schema"
        error_type = error.get("type", "unknown")
        code = "invalid_value"
        if "missing" in error_type:
            code = "required"
        elif "greater_than" in error_type:
            code = "amount_negative"
        elif "literal" in error_type:
            code = "invalid_choice"

        msg = error.get("msg", "Invalid value")
        errors.append(FieldError(field=field, code=code, message=f"Field '{field}': {msg}"))
    return errors
