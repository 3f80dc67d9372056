from __future__ import annotations

import logging
from dataclasses import dataclass

from watch_tracker.adapters.clock import create_clock
from watch_tracker.adapters.confirm import StaticConfirm
from watch_tracker.adapters.files import LocalFileIO
from watch_tracker.adapters.json_store import JsonFileStore
from watch_tracker.app_shell.config import TrackerConfig, configure_logging
from watch_tracker.components.codec import ExportFilenames, TransferService
from watch_tracker.components.inventory import InventoryService
from watch_tracker.components.store import EntityStore
from watch_tracker.components.wear import WearSessionManager
from watch_tracker.ports.clock import ClockPort
from watch_tracker.ports.confirm import ConfirmPort
from watch_tracker.ports.files import FileIOPort
from watch_tracker.ports.storage import KeyValueStorePort

logger = logging.getLogger(__name__)


@dataclass
class TrackerContext:
    store: EntityStore
    inventory: InventoryService
    wear: WearSessionManager
    transfer: TransferService
    clock: ClockPort
    config: TrackerConfig

    @classmethod
    def create(
        cls,
        config: TrackerConfig,
        *,
        confirm: ConfirmPort | None = None,
        files: FileIOPort | None = None,
        clock: ClockPort | None = None,
        kv_store: KeyValueStorePort | None = None,
    ) -> TrackerContext:
        configure_logging(config.log_level)

        # Adapters
        clock = clock or create_clock(config.timezone)
        kv_store = kv_store or JsonFileStore(config.data_dir)
        files = files or LocalFileIO(config.resolved_export_dir)
        # Without a UI to ask, destructive operations are refused
        confirm = confirm or StaticConfirm(answer=False)

        store = EntityStore(
            kv_store,
            items_key=config.storage.items_key,
            wear_key=config.storage.wear_key,
        )
        store.load()

        filenames = ExportFilenames(
            watches=config.exports.watches,
            wear_logs=config.exports.wear_logs,
            backup=config.exports.backup,
            profit_loss=config.exports.profit_loss,
        )
        logger.info("Watch tracker ready (data dir: %s)", config.data_dir)

        return cls(
            store=store,
            inventory=InventoryService(store, clock, confirm),
            wear=WearSessionManager(store, clock, confirm),
            transfer=TransferService(store, files, confirm, clock, filenames),
            clock=clock,
            config=config,
        )
