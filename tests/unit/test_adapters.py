"""
Tests for the clock, key-value store, file and confirmation adapters.
"""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfoNotFoundError

import pytest

from watch_tracker.adapters.clock import FrozenClock, SystemClock, create_clock
from watch_tracker.adapters.confirm import CallbackConfirm, StaticConfirm
from watch_tracker.adapters.files import LocalFileIO
from watch_tracker.adapters.json_store import InMemoryStore, JsonFileStore


class TestSystemClock:
    def test_now_utc_is_aware(self) -> None:
        now = SystemClock().now_utc()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_now_local_uses_timezone(self) -> None:
        clock = SystemClock("Europe/London")
        assert clock.timezone_name == "Europe/London"
        assert clock.now_local().tzinfo is not None

    def test_unknown_timezone(self) -> None:
        with pytest.raises(ZoneInfoNotFoundError):
            SystemClock("Not/AZone")

    def test_factory(self) -> None:
        assert isinstance(create_clock("UTC"), SystemClock)


class TestFrozenClock:
    def test_frozen(self) -> None:
        moment = datetime(2024, 6, 15, 12, tzinfo=UTC)
        clock = FrozenClock(moment)
        assert clock.now_utc() == moment
        assert clock.now_utc() == moment

    def test_naive_input_is_utc(self) -> None:
        clock = FrozenClock(datetime(2024, 6, 15, 12))
        assert clock.now_utc() == datetime(2024, 6, 15, 12, tzinfo=UTC)

    def test_advance(self) -> None:
        clock = FrozenClock(datetime(2024, 6, 15, 12, tzinfo=UTC))
        clock.advance(timedelta(minutes=90))
        assert clock.now_utc() == datetime(2024, 6, 15, 13, 30, tzinfo=UTC)

    def test_local_date_can_differ_from_utc(self) -> None:
        clock = FrozenClock(datetime(2024, 6, 15, 23, 30, tzinfo=UTC), "Pacific/Auckland")
        assert clock.now_local().date().isoformat() == "2024-06-16"


class TestJsonFileStore:
    def test_missing_key(self, tmp_path) -> None:
        assert JsonFileStore(tmp_path).get("nothing") is None

    def test_set_then_get(self, tmp_path) -> None:
        store = JsonFileStore(tmp_path)
        store.set("watch-tracker-items-v1", "[]")

        assert store.get("watch-tracker-items-v1") == "[]"
        assert (tmp_path / "watch-tracker-items-v1.json").read_text() == "[]"
        assert not list(tmp_path.glob("*.tmp"))

    def test_overwrite(self, tmp_path) -> None:
        store = JsonFileStore(tmp_path)
        store.set("k", "[1]")
        store.set("k", "[2]")
        assert store.get("k") == "[2]"

    def test_key_cannot_escape_base_dir(self, tmp_path) -> None:
        base = tmp_path / "data"
        store = JsonFileStore(base)
        store.set("../../evil", "x")

        assert list(base.iterdir())[0].parent == base
        assert not (tmp_path / "evil.json").exists()

    def test_creates_directory(self, tmp_path) -> None:
        JsonFileStore(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()


class TestInMemoryStore:
    def test_records_writes(self) -> None:
        store = InMemoryStore({"a": "1"})
        store.set("b", "2")

        assert store.get("a") == "1"
        assert store.get("b") == "2"
        assert store.writes == ["b"]


class TestLocalFileIO:
    def test_write_uses_basename(self, tmp_path) -> None:
        files = LocalFileIO(tmp_path / "exports")

        location = files.write_text("../../watch-tracker.csv", "a,b\n1,2\n")

        target = tmp_path / "exports" / "watch-tracker.csv"
        assert location == str(target)
        assert target.read_bytes() == b"a,b\n1,2\n"

    def test_read_strips_bom(self, tmp_path) -> None:
        source = tmp_path / "in.csv"
        source.write_bytes(b"\xef\xbb\xbfWatch Model\nSeiko 5\n")

        assert LocalFileIO(tmp_path).read_text(str(source)) == "Watch Model\nSeiko 5\n"

    def test_read_missing(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            LocalFileIO(tmp_path).read_text(str(tmp_path / "nope.csv"))


class TestConfirm:
    def test_static_records_actions(self) -> None:
        confirm = StaticConfirm(answer=False)
        assert confirm.confirm("delete_watch", "Delete?") is False
        assert confirm.asked == ["delete_watch"]

    def test_callback(self) -> None:
        seen: list[tuple[str, str]] = []

        def ask(action: str, message: str) -> bool:
            seen.append((action, message))
            return action == "undo_sold"

        confirm = CallbackConfirm(ask)
        assert confirm.confirm("undo_sold", "Undo?") is True
        assert confirm.confirm("delete_watch", "Delete?") is False
        assert seen[0] == ("undo_sold", "Undo?")
