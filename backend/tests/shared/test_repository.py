"""Tests for shared/repository.py."""

import json
import pytest
from pydantic import BaseModel

from shared.repository import BaseRepository
from shared.storage import MemoryStorage


class Widget(BaseModel):
    name: str
    size: int = 0

    model_config = {"frozen": True}


class WidgetRepository(BaseRepository[Widget]):
    storage_key = "widgets"
    model = Widget

    @staticmethod
    def key_of(widget: Widget) -> str:
        return widget.name


class TestBaseRepository:
    def test_empty_storage_loads_empty(self):
        """A missing key should give an empty collection."""
        repo = WidgetRepository(MemoryStorage())
        assert len(repo) == 0
        assert repo.all() == []

    def test_put_persists_whole_collection(self):
        """Every put should rewrite the JSON array under the storage key."""
        storage = MemoryStorage()
        repo = WidgetRepository(storage)
        repo.put(Widget(name="a", size=1))
        repo.put(Widget(name="b", size=2))

        assert json.loads(storage.get("widgets")) == [
            {"name": "a", "size": 1},
            {"name": "b", "size": 2},
        ]

    def test_put_replaces_by_key(self):
        """Putting a record with an existing key should replace it."""
        repo = WidgetRepository(MemoryStorage())
        repo.put(Widget(name="a", size=1))
        repo.put(Widget(name="a", size=5))

        assert len(repo) == 1
        assert repo.get("a").size == 5

    def test_reload_from_storage(self):
        """A new repository over the same storage should see the records."""
        storage = MemoryStorage()
        WidgetRepository(storage).put(Widget(name="a", size=1))

        reloaded = WidgetRepository(storage)
        assert reloaded.contains("a")
        assert reloaded.get("a") == Widget(name="a", size=1)

    def test_ignores_unknown_fields(self):
        """Records written by a newer version should still load."""
        storage = MemoryStorage({"widgets": '[{"name": "a", "size": 1, "color": "red"}]'})
        assert WidgetRepository(storage).get("a") == Widget(name="a", size=1)

    def test_skips_invalid_records(self):
        """Unreadable records should be dropped, the rest kept."""
        storage = MemoryStorage({"widgets": '[{"name": "a"}, {"size": "huge"}]'})
        repo = WidgetRepository(storage)
        assert [w.name for w in repo.all()] == ["a"]

    @pytest.mark.parametrize("raw", ["not json", '{"name": "a"}', "42"])
    def test_corrupt_collection_loads_empty(self, raw):
        """Non-JSON or non-list data should start an empty collection."""
        repo = WidgetRepository(MemoryStorage({"widgets": raw}))
        assert len(repo) == 0

    def test_failed_write_leaves_memory_untouched(self):
        """If storage rejects the write, the in-memory collection is unchanged."""

        class BrokenStorage(MemoryStorage):
            def set(self, key, value):
                raise OSError("read-only")

        repo = WidgetRepository(BrokenStorage())
        with pytest.raises(OSError):
            repo.put(Widget(name="a"))
        assert not repo.contains("a")

    def test_all_returns_a_snapshot(self):
        """Mutating the returned list should not affect the repository."""
        repo = WidgetRepository(MemoryStorage())
        repo.put(Widget(name="a"))
        snapshot = repo.all()
        snapshot.clear()
        assert len(repo) == 1
