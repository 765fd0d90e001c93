"""
Tests for the snapshot stores.
"""

import pytest
import redis

from interview_agent.errors import StorageError
from interview_agent.repositories import (
    InMemoryBlobStore,
    JsonFileBlobStore,
    RedisBlobStore,
    create_blob_store,
)


class FakeRedis:
    """Minimal stand-in for redis.Redis storing bytes like the real client."""

    def __init__(self, error: Exception | None = None) -> None:
        self.data: dict[str, bytes] = {}
        self._error = error

    def set(self, key, value):
        if self._error:
            raise self._error
        self.data[key] = value
        return True

    def get(self, key):
        if self._error:
            raise self._error
        return self.data.get(key)

    def ping(self):
        if self._error:
            raise self._error
        return True


def test_memory_store_round_trip():
    store = InMemoryBlobStore()

    assert store.load_blob("slot") is None
    store.store_blob("slot", "payload")

    assert store.load_blob("slot") == "payload"
    assert store.slots() == ["slot"]


def test_file_store_round_trip(tmp_path):
    store = JsonFileBlobStore(root=tmp_path / "cache")

    store.store_blob("ai_interview_cache", '{"version": 1, "entries": []}')

    assert (tmp_path / "cache" / "ai_interview_cache.json").exists()
    assert store.load_blob("ai_interview_cache") == '{"version": 1, "entries": []}'
    assert list((tmp_path / "cache").glob("*.tmp")) == []


def test_file_store_missing_slot(tmp_path):
    assert JsonFileBlobStore(root=tmp_path).load_blob("nothing") is None


def test_file_store_sanitizes_slot_names(tmp_path):
    """Slot names never escape the root directory."""
    store = JsonFileBlobStore(root=tmp_path)

    store.store_blob("../evil/slot", "x")

    assert (tmp_path / ".._evil_slot.json").read_text(encoding="utf-8") == "x"


def test_file_store_overwrites(tmp_path):
    store = JsonFileBlobStore(root=tmp_path)
    store.store_blob("slot", "first")
    store.store_blob("slot", "second")

    assert store.load_blob("slot") == "second"


def test_file_store_read_error(tmp_path):
    """An unreadable slot raises StorageError."""
    (tmp_path / "slot.json").mkdir()
    store = JsonFileBlobStore(root=tmp_path)

    with pytest.raises(StorageError):
        store.load_blob("slot")

    with pytest.raises(StorageError):
        store.store_blob("slot", "x")


def test_redis_store_round_trip():
    client = FakeRedis()
    store = RedisBlobStore(redis_client=client, key_prefix="test:")

    assert store.load_blob("slot") is None
    store.store_blob("slot", "payload ✓")

    assert client.data["test:slot"] == "payload ✓".encode("utf-8")
    assert store.load_blob("slot") == "payload ✓"
    assert store.health_check() is True


def test_redis_store_errors_become_storage_errors():
    store = RedisBlobStore(redis_client=FakeRedis(redis.ConnectionError("down")), key_prefix="")

    with pytest.raises(StorageError):
        store.store_blob("slot", "x")
    with pytest.raises(StorageError):
        store.load_blob("slot")
    assert store.health_check() is False


def test_create_blob_store():
    assert isinstance(create_blob_store("memory"), InMemoryBlobStore)
    assert isinstance(create_blob_store("file"), JsonFileBlobStore)

    with pytest.raises(ValueError):
        create_blob_store("sqlite")
