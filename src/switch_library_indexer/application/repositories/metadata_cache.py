from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import ClassVar, final, override

from pydantic import ValidationError

from switch_library_indexer.application.repositories.cache_contract import (
    CacheEntryDocument,
    CachedContent,
)
from switch_library_indexer.domain.errors import StoreUnavailableError
from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.protocols.bucket_store_protocol import BucketStoreProtocol
from switch_library_indexer.domain.protocols.metadata_cache_protocol import MetadataCacheProtocol


@final
class MetadataCache(MetadataCacheProtocol):
    BUCKET: ClassVar[str] = "deep-scan"
    VERSION_KEY: ClassVar[bytes] = b"app_version"

    def __init__(
        self,
        store: BucketStoreProtocol,
        app_version: str,
        logger: logging.Logger,
    ) -> None:
        self._store = store
        self._app_version = str(app_version or "").strip()
        self._logger = logger
        self._write_lock = threading.Lock()

    @property
    def app_version(self) -> str:
        return self._app_version

    def _stale_marker(self) -> bytes | None:
        with self._store.transaction() as tx:
            if not tx.bucket_exists(self.BUCKET):
                return None
            stored = tx.get(self.BUCKET, self.VERSION_KEY)
            if stored is not None and stored.decode("utf-8", "replace") == self._app_version:
                return None
            _ = tx.delete_bucket(self.BUCKET)
        return stored if stored is not None else b"<none>"

    def invalidate_if_stale_version(self) -> bool:
        try:
            stale = self._stale_marker()
        except StoreUnavailableError:
            raise
        except Exception as exc:
            raise StoreUnavailableError(
                f"Failed to check metadata cache version: {exc}", exc
            ) from exc

        if stale is None:
            return False
        self._logger.info(
            "Metadata cache invalidated: stored version %s, running %s",
            stale.decode("utf-8", "replace"),
            self._app_version,
        )
        return True

    def clear(self) -> bool:
        try:
            with self._store.transaction() as tx:
                removed = tx.delete_bucket(self.BUCKET)
        except StoreUnavailableError:
            raise
        except Exception as exc:
            raise StoreUnavailableError(f"Failed to clear metadata cache: {exc}", exc) from exc
        if removed:
            self._logger.info("Metadata cache cleared")
        return removed

    @override
    def get(self, fingerprint: str) -> dict[str, ContentAttributes] | None:
        try:
            with self._store.transaction() as tx:
                if not tx.bucket_exists(self.BUCKET):
                    return None
                raw = tx.get(self.BUCKET, fingerprint.encode("utf-8"))
        except Exception as exc:
            self._logger.warning("Metadata cache read failed for %s: %s", fingerprint, exc)
            return None

        if raw is None:
            return None

        try:
            document = CacheEntryDocument.model_validate_json(raw)
            contents = {key: item.to_attributes() for key, item in document.root.items()}
        except (ValidationError, ValueError) as exc:
            self._logger.warning("Ignoring undecodable cache entry for %s: %s", fingerprint, exc)
            return None

        if not contents:
            self._logger.warning("Ignoring empty cache entry for %s", fingerprint)
            return None
        return contents

    @override
    def put(self, fingerprint: str, contents: Mapping[str, ContentAttributes]) -> bool:
        document = CacheEntryDocument(
            {key: CachedContent.from_attributes(value) for key, value in contents.items()}
        )
        payload = document.model_dump_json().encode("utf-8")

        with self._write_lock:
            try:
                with self._store.transaction() as tx:
                    if not tx.bucket_exists(self.BUCKET):
                        tx.create_bucket(self.BUCKET)
                        tx.put(self.BUCKET, self.VERSION_KEY, self._app_version.encode("utf-8"))
                    tx.put(self.BUCKET, fingerprint.encode("utf-8"), payload)
            except Exception as exc:
                self._logger.warning("Metadata cache write failed for %s: %s", fingerprint, exc)
                return False
        return True
