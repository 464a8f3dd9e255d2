from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

import pytest

from switch_library_indexer.application.repositories.metadata_cache import MetadataCache
from switch_library_indexer.application.repositories.sqlite_bucket_store import (
    SqliteBucketStore,
)
from switch_library_indexer.domain.errors import StoreUnavailableError
from switch_library_indexer.domain.models.content_attributes import ContentAttributes

_FINGERPRINT = "/games/a.nsp|a.nsp|10"


@pytest.fixture()
def store(tmp_path: Path):
    bucket_store = SqliteBucketStore(tmp_path / "cache.db", tmp_path / "cache.lock")
    bucket_store.open()
    yield bucket_store
    bucket_store.close()


def _cache(store: SqliteBucketStore, version: str = "1.0.0") -> MetadataCache:
    return MetadataCache(store, version, logging.getLogger("test"))


def _contents() -> dict[str, ContentAttributes]:
    base = ContentAttributes.of("0100ABCDEF123000", 0)
    update = ContentAttributes.of("0100abcdef123800", 131072)
    return {base.title_id: base, update.title_id: update}


def test_metadata_cache_given_put_when_get_then_returns_same_attributes(store):
    cache = _cache(store)

    assert cache.put(_FINGERPRINT, _contents()) is True

    assert cache.get(_FINGERPRINT) == _contents()
    assert cache.get("/games/other.nsp|other.nsp|10") is None


def test_metadata_cache_given_first_put_when_bucket_created_then_stamps_app_version(store):
    cache = _cache(store, "2.3.4")

    _ = cache.put(_FINGERPRINT, _contents())

    with store.transaction() as tx:
        assert tx.get(MetadataCache.BUCKET, MetadataCache.VERSION_KEY) == b"2.3.4"


def test_metadata_cache_given_version_mismatch_when_invalidate_then_bucket_cleared(store):
    _ = _cache(store, "1.0.0").put(_FINGERPRINT, _contents())
    cache = _cache(store, "1.1.0")

    assert cache.invalidate_if_stale_version() is True

    assert cache.get(_FINGERPRINT) is None
    with store.transaction() as tx:
        assert tx.bucket_exists(MetadataCache.BUCKET) is False


def test_metadata_cache_given_matching_version_when_invalidate_then_entries_kept(store):
    cache = _cache(store, "1.0.0")
    _ = cache.put(_FINGERPRINT, _contents())

    assert cache.invalidate_if_stale_version() is False

    assert cache.get(_FINGERPRINT) == _contents()


def test_metadata_cache_given_missing_version_marker_when_invalidate_then_bucket_cleared(store):
    with store.transaction() as tx:
        tx.create_bucket(MetadataCache.BUCKET)
        tx.put(MetadataCache.BUCKET, _FINGERPRINT.encode("utf-8"), b"{}")

    assert _cache(store).invalidate_if_stale_version() is True


def test_metadata_cache_given_undecodable_entry_when_get_then_miss_and_warning(store, caplog):
    cache = _cache(store)
    _ = cache.put(_FINGERPRINT, _contents())
    with store.transaction() as tx:
        tx.put(MetadataCache.BUCKET, _FINGERPRINT.encode("utf-8"), b"\x00not-json")

    with caplog.at_level(logging.WARNING, logger="test"):
        assert cache.get(_FINGERPRINT) is None

    assert "Ignoring undecodable cache entry" in caplog.text


def test_metadata_cache_given_closed_store_when_put_then_returns_false(tmp_path: Path):
    closed = SqliteBucketStore(tmp_path / "cache.db", tmp_path / "cache.lock")
    cache = _cache(closed)

    assert cache.put(_FINGERPRINT, _contents()) is False
    assert cache.get(_FINGERPRINT) is None


def test_metadata_cache_given_entries_when_clear_then_bucket_removed(store):
    cache = _cache(store)
    _ = cache.put(_FINGERPRINT, _contents())

    assert cache.clear() is True
    assert cache.get(_FINGERPRINT) is None
    assert cache.clear() is False


def test_metadata_cache_given_empty_entry_when_get_then_miss_and_warning(store, caplog):
    cache = _cache(store)
    _ = cache.put(_FINGERPRINT, _contents())
    with store.transaction() as tx:
        tx.put(MetadataCache.BUCKET, _FINGERPRINT.encode("utf-8"), b"{}")

    with caplog.at_level(logging.WARNING, logger="test"):
        assert cache.get(_FINGERPRINT) is None

    assert "Ignoring empty cache entry" in caplog.text


class _BrokenStore:
    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def transaction(self):
        raise sqlite3.OperationalError("disk I/O error")


def test_metadata_cache_given_failing_store_when_invalidate_then_store_unavailable():
    cache = MetadataCache(_BrokenStore(), "1.0.0", logging.getLogger("test"))

    with pytest.raises(StoreUnavailableError) as excinfo:
        _ = cache.invalidate_if_stale_version()

    assert isinstance(excinfo.value.original_exception, sqlite3.OperationalError)


def test_metadata_cache_given_failing_store_when_clear_then_store_unavailable():
    cache = MetadataCache(_BrokenStore(), "1.0.0", logging.getLogger("test"))

    with pytest.raises(StoreUnavailableError, match="Failed to clear metadata cache"):
        _ = cache.clear()


def test_metadata_cache_given_closed_store_when_invalidate_then_store_unavailable(tmp_path: Path):
    closed = SqliteBucketStore(tmp_path / "cache.db", tmp_path / "cache.lock")

    with pytest.raises(StoreUnavailableError, match="not open"):
        _ = _cache(closed).invalidate_if_stale_version()
