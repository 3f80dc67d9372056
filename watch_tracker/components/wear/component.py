"""
Wear component - Wear session manager.

Key behaviors:
- start_wear closes the active session and opens a new one in a single store
  mutation; the closed end and the new start are the same instant
- A watch cannot be worn once the local date is past its dateSold
- edit_wear_log writes start/end verbatim and does not re-check the
  one-open-session rule (manual escape hatch)
- Deleting sessions never touches watches
"""

from __future__ import annotations

import logging
from datetime import datetime

from watch_tracker.components.derive import active_session
from watch_tracker.components.store import EntityStore, WearLogPatch
from watch_tracker.domain.entities import WatchItem, WearLog, new_id
from watch_tracker.domain.errors import DomainViolationError
from watch_tracker.domain.values import format_timestamp, parse_date
from watch_tracker.ports.clock import ClockPort
from watch_tracker.ports.confirm import ConfirmPort

logger = logging.getLogger(__name__)


def is_past_sold_date(watch: WatchItem, moment: datetime) -> bool:
    """True once moment, read in its own timezone, is past end-of-day of dateSold."""
    sold_on = parse_date(watch.date_sold)
    if sold_on is None:
        if watch.date_sold:
            logger.warning("Watch %s has unparsable dateSold %r", watch.id, watch.date_sold)
        return False
    return moment.date() > sold_on


class WearSessionManager:
    """Starts, stops and edits wear sessions."""

    def __init__(self, store: EntityStore, clock: ClockPort, confirm: ConfirmPort) -> None:
        self._store = store
        self._clock = clock
        self._confirm = confirm

    def active_session(self) -> WearLog | None:
        return active_session(self._store.snapshot())

    def start_wear(self, watch_id: str) -> WearLog:
        """
        Start wearing a watch.

        Raises:
            NotFoundError: watch_id is unknown
            DomainViolationError: the watch was sold before today
        """
        watch = self._store.get_watch(watch_id)
        if is_past_sold_date(watch, self._clock.now_local()):
            logger.info("Refused wear for %s: sold on %s", watch_id, watch.date_sold)
            raise DomainViolationError(
                "worn_after_sold",
                f"Cannot log wear after the watch has been sold ({watch.date_sold}).",
            )

        stamp = format_timestamp(self._clock.now_utc())
        current = active_session(self._store.snapshot())
        history = self._store.wear_logs
        if current is not None:
            closed = current.model_copy(update={"end": stamp})
            history = tuple(closed if log.id == current.id else log for log in history)

        session = WearLog(id=new_id(), watch_id=watch_id, start=stamp, end=None)
        self._store.replace_wear_logs((session, *history), action="start_wear")
        logger.info("Started wearing %s at %s", watch.model, stamp)
        return session

    def stop_wear(self) -> WearLog | None:
        """Close the active session now; None when nothing is being worn."""
        current = self.active_session()
        if current is None:
            return None
        stamp = format_timestamp(self._clock.now_utc())
        stopped = self._store.update_wear_log(current.id, WearLogPatch(end=stamp))
        logger.info("Stopped session %s at %s", current.id, stamp)
        return stopped

    def edit_wear_log(self, log_id: str, patch: WearLogPatch) -> WearLog:
        return self._store.update_wear_log(log_id, patch)

    def delete_wear_log(self, log_id: str) -> bool:
        self._store.get_wear_log(log_id)
        if not self._confirm.confirm("delete_wear_log", "Delete this wear log entry?"):
            logger.info("Delete declined for wear log %s", log_id)
            return False
        self._store.remove_wear_log(log_id)
        return True

    def clear_all(self) -> bool:
        if not self._confirm.confirm("clear_wear_logs", "Delete ALL wear log entries?"):
            logger.info("Clear wear logs declined")
            return False
        removed = self._store.clear_wear_logs()
        logger.info("Cleared %d wear logs", removed)
        return True
