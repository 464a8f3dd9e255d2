from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol


class BucketTransactionProtocol(Protocol):
    def bucket_exists(self, bucket: str) -> bool: ...

    def create_bucket(self, bucket: str) -> None: ...

    def delete_bucket(self, bucket: str) -> bool: ...

    def get(self, bucket: str, key: bytes) -> bytes | None: ...

    def put(self, bucket: str, key: bytes, value: bytes) -> None: ...


class BucketStoreProtocol(Protocol):
    def open(self) -> None: ...

    def close(self) -> None: ...

    def transaction(self) -> AbstractContextManager[BucketTransactionProtocol]: ...
