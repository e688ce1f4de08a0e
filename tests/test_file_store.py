"""Tests specific to the JSON-journaled file store."""

import json
import os
from datetime import datetime, timedelta, timezone

import pytest
from shortlink.storage import FileStore, MemoryStore
from shortlink.storage import memory as memory_module

from conftest import make_link

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def journal(tmp_path):
    return str(tmp_path / "data" / "links.json")


class TestFileStore:
    """Test journal persistence."""

    def test_creates_missing_journal(self, journal):
        FileStore(path=journal)

        assert os.path.exists(journal)
        with open(journal) as f:
            assert json.load(f) == {"links": {}}

    def test_empty_file_is_reinitialized(self, tmp_path):
        path = tmp_path / "links.json"
        path.write_text("")

        store = FileStore(path=str(path))

        assert json.loads(path.read_text()) == {"links": {}}
        assert store._links == {}

    def test_invalid_json_is_reported(self, tmp_path):
        path = tmp_path / "links.json"
        path.write_text("{not json")

        with pytest.raises(ValueError):
            FileStore(path=str(path))

    async def test_survives_reopen(self, journal):
        store = FileStore(path=journal)
        await store.create(make_link("keep", "https://example.com/keep", at=T0))
        await store.create(make_link("drop", "https://example.com/drop", at=T0))
        await store.increment_hit("keep", T0 + timedelta(seconds=30))
        await store.delete("drop")

        reopened = FileStore(path=journal)

        link = await reopened.get("keep")
        assert link.hit_count == 1
        assert link.last_access_at == T0 + timedelta(seconds=30)
        assert link.created_at == T0
        assert await reopened.get("drop") is None

    async def test_journal_layout(self, journal):
        store = FileStore(path=journal)
        await store.create(make_link("abc", "https://example.com/", at=T0))

        with open(journal) as f:
            document = json.load(f)

        entry = document["links"]["abc"]
        assert entry["code"] == "abc"
        assert entry["long_url"] == "https://example.com/"
        assert entry["hit_count"] == 0
        assert entry["last_access_at"] is None
        assert datetime.fromisoformat(entry["created_at"]) == T0

    async def test_no_temp_file_left_behind(self, journal):
        store = FileStore(path=journal)
        await store.create(make_link("abc"))

        assert not os.path.exists(f"{journal}.tmp")

    async def test_failed_journal_write_leaves_state_unchanged(self, journal, monkeypatch):
        store = FileStore(path=journal)
        await store.create(make_link("before"))

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(memory_module.os, "replace", broken_replace)

        with pytest.raises(OSError, match="disk full"):
            await store.create(make_link("after"))
        with pytest.raises(OSError):
            await store.increment_hit("before", T0 + timedelta(seconds=1))
        with pytest.raises(OSError):
            await store.delete("before")

        monkeypatch.undo()

        assert await store.get("after") is None
        before = await store.get("before")
        assert before.hit_count == 0
        assert not os.path.exists(f"{journal}.tmp")
        with open(journal) as f:
            assert set(json.load(f)["links"]) == {"before"}

    async def test_is_a_memory_store(self, journal):
        store = FileStore(path=journal)

        assert isinstance(store, MemoryStore)
        assert store.name == "file"
