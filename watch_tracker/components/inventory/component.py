"""
Inventory component - Watch lifecycle operations.

Handles add, edit, mark-sold, undo-sold and delete on top of the entity
store. Destructive operations (undo-sold, delete) only proceed after the
confirmation port answers yes; a declined prompt returns False and changes
nothing.

Sold watches without a dateSold are tolerated: imports and edits may produce
them, and nothing here rejects one. mark_sold fills the date in with today
when the caller leaves it out.
"""

from __future__ import annotations

import logging

from watch_tracker.components.store import EntityStore, WatchPatch
from watch_tracker.domain.entities import WatchItem
from watch_tracker.domain.errors import FieldError, ValidationError
from watch_tracker.domain.values import parse_amount, parse_date
from watch_tracker.ports.clock import ClockPort
from watch_tracker.ports.confirm import ConfirmPort

from .models import AddWatchInput, Amount, MarkSoldInput

logger = logging.getLogger(__name__)


# --- Validation Functions ---


def _amount(value: Amount | None) -> float | None:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return parse_amount(value)


def validate_watch_data(
    model: str | None = None,
    purchase_price: float | None = None,
    parts_cost: float | None = None,
    date_fields: dict[str, str | None] | None = None,
) -> list[FieldError]:
    """Validate watch data. Only the fields passed in are checked."""
    errors: list[FieldError] = []

    if model is not None and not model.strip():
        errors.append(
            FieldError(
                field="model",
                code="model_required",
                message="Please enter a watch model",
            )
        )

    for name, value in (("purchase_price", purchase_price), ("parts_cost", parts_cost)):
        if value is not None and value < 0:
            errors.append(
                FieldError(
                    field=name,
                    code="amount_negative",
                    message=f"{name.replace('_', ' ').capitalize()} cannot be negative",
                )
            )

    for name, raw in (date_fields or {}).items():
        if raw and parse_date(raw) is None:
            errors.append(
                FieldError(
                    field=name,
                    code="date_invalid",
                    message=f"{name.replace('_', ' ').capitalize()} must be YYYY-MM-DD",
                )
            )

    return errors


# --- Inventory Service ---


class InventoryService:
    """
    Inventory service.

    Manages the watch collection through the entity store.
    """

    def __init__(self, store: EntityStore, clock: ClockPort, confirm: ConfirmPort) -> None:
        self._store = store
        self._clock = clock
        self._confirm = confirm

    def add_watch(self, data: AddWatchInput) -> WatchItem:
        purchase_price = _amount(data.purchase_price) or 0.0
        parts_cost = _amount(data.parts_cost) or 0.0

        errors = validate_watch_data(
            model=data.model,
            purchase_price=purchase_price,
            parts_cost=parts_cost,
            date_fields={"purchase_date": data.purchase_date},
        )
        if errors:
            raise ValidationError(errors)

        watch = WatchItem(
            model=data.model.strip(),
            purchase_price=purchase_price,
            parts_cost=parts_cost,
            posted_price=_amount(data.posted_price),
            status="Available",
            purchase_date=data.purchase_date or None,
            notes=data.notes or None,
        )
        stored = self._store.add_watch(watch)
        logger.info("Added watch %s (%s)", stored.id, stored.model)
        return stored

    def edit_watch(self, watch_id: str, patch: WatchPatch) -> WatchItem:
        changes = patch.changes()
        errors = validate_watch_data(
            model=changes.get("model"),
            purchase_price=changes.get("purchase_price"),
            parts_cost=changes.get("parts_cost"),
            date_fields={
                name: changes[name] for name in ("date_sold", "purchase_date") if name in changes
            },
        )
        if errors:
            raise ValidationError(errors)

        if "model" in changes:
            patch = WatchPatch(**{**changes, "model": changes["model"].strip()})
        return self._store.update_watch(watch_id, patch)

    def mark_sold(self, watch_id: str, data: MarkSoldInput) -> WatchItem:
        date_sold = data.date_sold or self._clock.now_local().date().isoformat()
        errors = validate_watch_data(date_fields={"date_sold": date_sold})
        if errors:
            raise ValidationError(errors)

        sold = self._store.update_watch(
            watch_id,
            WatchPatch(
                status="Sold",
                sold_price=parse_amount(data.sold_price),
                date_sold=date_sold,
            ),
        )
        logger.info("Marked watch %s sold on %s", watch_id, date_sold)
        return sold

    def undo_sold(self, watch_id: str) -> bool:
        watch = self._store.get_watch(watch_id)
        if not self._confirm.confirm(
            "undo_sold",
            f"Mark '{watch.model}' as available again? The sale details will be cleared.",
        ):
            logger.info("Undo sold declined for %s", watch_id)
            return False

        self._store.update_watch(
            watch_id,
            WatchPatch(status="Available", sold_price=None, date_sold=None),
        )
        return True

    def delete_watch(self, watch_id: str) -> bool:
        """Delete a watch and its wear history."""
        watch = self._store.get_watch(watch_id)
        if not self._confirm.confirm(
            "delete_watch", f"Delete '{watch.model}' and all of its wear logs?"
        ):
            logger.info("Delete declined for %s", watch_id)
            return False

        self._store.remove_watch(watch_id)
        logger.info("Deleted watch %s (%s)", watch_id, watch.model)
        return True
