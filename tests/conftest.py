from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from watch_tracker.adapters.clock import FrozenClock
from watch_tracker.adapters.confirm import StaticConfirm
from watch_tracker.adapters.json_store import InMemoryStore
from watch_tracker.components.codec import TransferService
from watch_tracker.components.inventory import AddWatchInput, InventoryService
from watch_tracker.components.store import EntityStore
from watch_tracker.components.wear import WearSessionManager

FROZEN_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@dataclass
class MemoryFiles:
    """In-memory FileIOPort: reads from `sources`, records writes."""

    sources: dict[str, str] = field(default_factory=dict)
    written: dict[str, str] = field(default_factory=dict)

    def read_text(self, path: str) -> str:
        if path not in self.sources:
            raise FileNotFoundError(path)
        return self.sources[path]

    def write_text(self, filename: str, payload: str) -> str:
        self.written[filename] = payload
        return f"memory://{Path(filename).name}"


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(FROZEN_NOW)


@pytest.fixture
def kv() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def store(kv: InMemoryStore) -> EntityStore:
    return EntityStore(kv)


@pytest.fixture
def confirm() -> StaticConfirm:
    return StaticConfirm(answer=True)


@pytest.fixture
def files() -> MemoryFiles:
    return MemoryFiles()


@pytest.fixture
def inventory(store, clock, confirm) -> InventoryService:
    return InventoryService(store, clock, confirm)


@pytest.fixture
def wear(store, clock, confirm) -> WearSessionManager:
    return WearSessionManager(store, clock, confirm)


@pytest.fixture
def transfer(store, files, confirm, clock) -> TransferService:
    return TransferService(store, files, confirm, clock)


@pytest.fixture
def seiko(inventory: InventoryService):
    return inventory.add_watch(AddWatchInput(model="Seiko 5", purchase_price=120, parts_cost=0))


@pytest.fixture
def orient(inventory: InventoryService):
    return inventory.add_watch(AddWatchInput(model="Orient Bambino", purchase_price=95, parts_cost=15))
