"""
Entity store - Authoritative watch and wear-session collections.

Key behaviors:
- New entities get a fresh id and are prepended (newest first)
- Every mutation builds new tuples and swaps them in with one assignment,
  so observers never see a half-applied change
- After each mutation the touched collection(s) are written to the
  key-value store as JSON arrays, then listeners are notified
- Deleting a watch cascades to every wear log referencing it
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from watch_tracker.domain.entities import WatchItem, WearLog, new_id
from watch_tracker.domain.errors import (
    NotFoundError,
    ValidationError,
    field_errors_from_pydantic,
)

from .models import ITEMS, WEAR_LOGS, StoreChange, StoreSnapshot, WatchPatch, WearLogPatch
from .ports import KeyValueStorePort, StoreListener

logger = logging.getLogger(__name__)

DEFAULT_ITEMS_KEY = "watch-tracker-items-v1"
DEFAULT_WEAR_KEY = "watch-tracker-wear-v1"

_WATCH_LIST = TypeAdapter(list[WatchItem])
_WEAR_LIST = TypeAdapter(list[WearLog])

M = TypeVar("M", bound=BaseModel)


def _rebuild(entity: M, changes: dict[str, Any]) -> M:
    """Re-validate an entity with changes applied."""
    try:
        return type(entity).model_validate({**entity.model_dump(), **changes})
    except PydanticValidationError as e:
        raise ValidationError(field_errors_from_pydantic(e)) from e


def _with_fresh_id(entity: M) -> M:
    return entity.model_copy(update={"id": new_id()})


def dump_collection(entities: Iterable[BaseModel]) -> list[dict[str, Any]]:
    """Serialize entities the way they are persisted and backed up."""
    return [e.model_dump(mode="json", by_alias=True) for e in entities]


def _load_key(kv: KeyValueStorePort, key: str, adapter: TypeAdapter[list[M]]) -> list[M]:
    """Read one persisted collection; anything unusable yields an empty list."""
    try:
        raw = kv.get(key)
    except (UnicodeDecodeError, OSError) as e:
        logger.warning("Stored data for %s could not be read; starting empty: %s", key, e)
        return []
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored data for %s is not valid JSON; starting empty", key)
        return []
    if not isinstance(data, list):
        logger.warning("Stored data for %s is not an array; starting empty", key)
        return []
    try:
        return adapter.validate_python(data)
    except PydanticValidationError as e:
        logger.warning("Stored data for %s failed validation; starting empty: %s", key, e)
        return []


class EntityStore:
    """
    In-memory entity store.

    Owns both collections exclusively; callers read through snapshot() or the
    tuple properties, which are never mutated in place.
    """

    def __init__(
        self,
        kv_store: KeyValueStorePort | None = None,
        *,
        items_key: str = DEFAULT_ITEMS_KEY,
        wear_key: str = DEFAULT_WEAR_KEY,
    ) -> None:
        self._kv = kv_store
        self._items_key = items_key
        self._wear_key = wear_key
        self._watches: tuple[WatchItem, ...] = ()
        self._wear_logs: tuple[WearLog, ...] = ()
        self._listeners: list[StoreListener] = []

    # --- Startup ---

    def load(self) -> StoreSnapshot:
        """
        Read both collections from the key-value store.

        A missing, corrupt or invalid value falls back to an empty collection
        for that key; loading never fails.
        """
        if self._kv is None:
            return self.snapshot()
        self._watches = tuple(_load_key(self._kv, self._items_key, _WATCH_LIST))
        self._wear_logs = tuple(_load_key(self._kv, self._wear_key, _WEAR_LIST))
        logger.info(
            "Loaded %d watches and %d wear logs",
            len(self._watches),
            len(self._wear_logs),
        )
        return self.snapshot()

    # --- Observers ---

    def subscribe(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    def _commit(
        self,
        action: str,
        *,
        watches: tuple[WatchItem, ...] | None = None,
        wear_logs: tuple[WearLog, ...] | None = None,
    ) -> None:
        touched: set[str] = set()
        # Swap both references before any side effect runs
        if watches is not None:
            self._watches = watches
            touched.add(ITEMS)
        if wear_logs is not None:
            self._wear_logs = wear_logs
            touched.add(WEAR_LOGS)

        self._persist(touched)
        logger.debug("Store mutation %s touched %s", action, sorted(touched))

        change = StoreChange(action=action, collections=frozenset(touched))
        for listener in list(self._listeners):
            listener(change)

    def _persist(self, touched: set[str]) -> None:
        if self._kv is None:
            return
        if ITEMS in touched:
            self._kv.set(self._items_key, json.dumps(dump_collection(self._watches)))
        if WEAR_LOGS in touched:
            self._kv.set(self._wear_key, json.dumps(dump_collection(self._wear_logs)))

    # --- Reads ---

    @property
    def watches(self) -> tuple[WatchItem, ...]:
        return self._watches

    @property
    def wear_logs(self) -> tuple[WearLog, ...]:
        return self._wear_logs

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(watches=self._watches, wear_logs=self._wear_logs)

    def get_watch(self, watch_id: str) -> WatchItem:
        watch = next((w for w in self._watches if w.id == watch_id), None)
        if watch is None:
            raise NotFoundError("watch", watch_id)
        return watch

    def get_wear_log(self, log_id: str) -> WearLog:
        log = next((w for w in self._wear_logs if w.id == log_id), None)
        if log is None:
            raise NotFoundError("wear_log", log_id)
        return log

    # --- Watches ---

    def add_watch(self, watch: WatchItem) -> WatchItem:
        stored = _with_fresh_id(watch)
        self._commit("add_watch", watches=(stored, *self._watches))
        return stored

    def update_watch(self, watch_id: str, patch: WatchPatch) -> WatchItem:
        current = self.get_watch(watch_id)
        updated = _rebuild(current, patch.changes())
        self._commit(
            "update_watch",
            watches=tuple(updated if w.id == watch_id else w for w in self._watches),
        )
        return updated

    def remove_watch(self, watch_id: str) -> WatchItem:
        """Remove a watch and every wear log that references it."""
        removed = self.get_watch(watch_id)
        self._commit(
            "remove_watch",
            watches=tuple(w for w in self._watches if w.id != watch_id),
            wear_logs=tuple(log for log in self._wear_logs if log.watch_id != watch_id),
        )
        return removed

    def replace_watches(self, watches: Iterable[WatchItem]) -> None:
        self._commit("replace_watches", watches=tuple(watches))

    # --- Wear Logs ---

    def add_wear_log(self, log: WearLog) -> WearLog:
        stored = _with_fresh_id(log)
        self._commit("add_wear_log", wear_logs=(stored, *self._wear_logs))
        return stored

    def prepend_wear_logs(self, logs: Iterable[WearLog]) -> tuple[WearLog, ...]:
        stored = tuple(_with_fresh_id(log) for log in logs)
        self._commit("prepend_wear_logs", wear_logs=(*stored, *self._wear_logs))
        return stored

    def update_wear_log(self, log_id: str, patch: WearLogPatch) -> WearLog:
        current = self.get_wear_log(log_id)
        updated = _rebuild(current, patch.changes())
        self._commit(
            "update_wear_log",
            wear_logs=tuple(updated if w.id == log_id else w for w in self._wear_logs),
        )
        return updated

    def replace_wear_logs(self, logs: Iterable[WearLog], action: str = "replace_wear_logs") -> None:
        self._commit(action, wear_logs=tuple(logs))

    def remove_wear_log(self, log_id: str) -> WearLog:
        removed = self.get_wear_log(log_id)
        self._commit(
            "remove_wear_log",
            wear_logs=tuple(w for w in self._wear_logs if w.id != log_id),
        )
        return removed

    def clear_wear_logs(self) -> int:
        count = len(self._wear_logs)
        self._commit("clear_wear_logs", wear_logs=())
        return count

    # --- Both ---

    def replace_all(self, watches: Iterable[WatchItem], wear_logs: Iterable[WearLog]) -> None:
        """Swap both collections as one mutation (backup restore)."""
        self._commit("replace_all", watches=tuple(watches), wear_logs=tuple(wear_logs))
