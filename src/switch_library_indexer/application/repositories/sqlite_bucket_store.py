from __future__ import annotations

import sqlite3
from pathlib import Path
from types import TracebackType
from typing import ClassVar, cast, final

from filelock import FileLock, Timeout

from switch_library_indexer.domain.errors import StoreUnavailableError


@final
class SqliteBucketTransaction:
    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> "SqliteBucketTransaction":
        self._conn = sqlite3.connect(str(self._db_path))
        _ = self._conn.execute("PRAGMA journal_mode=WAL")
        _ = self._conn.execute("BEGIN")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._conn is None:
            return
        try:
            if exc_type:
                self.rollback()
            else:
                self.commit()
        finally:
            self._conn.close()
            self._conn = None

    @property
    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreUnavailableError("Transaction is not active")
        return self._conn

    def commit(self) -> None:
        if self._conn is not None:
            self._conn.commit()

    def rollback(self) -> None:
        if self._conn is not None:
            self._conn.rollback()

    def bucket_exists(self, bucket: str) -> bool:
        row = cast(
            tuple[object] | None,
            self._connection.execute(
                "SELECT 1 FROM buckets WHERE name = ?", (bucket,)
            ).fetchone(),
        )
        return row is not None

    def create_bucket(self, bucket: str) -> None:
        _ = self._connection.execute(
            "INSERT INTO buckets (name) VALUES (?) ON CONFLICT(name) DO NOTHING",
            (bucket,),
        )

    def delete_bucket(self, bucket: str) -> bool:
        cursor = self._connection.cursor()
        _ = cursor.execute("DELETE FROM entries WHERE bucket = ?", (bucket,))
        deleted = cursor.execute("DELETE FROM buckets WHERE name = ?", (bucket,)).rowcount
        return bool(deleted)

    def get(self, bucket: str, key: bytes) -> bytes | None:
        row = cast(
            tuple[object] | None,
            self._connection.execute(
                "SELECT value FROM entries WHERE bucket = ? AND key = ?",
                (bucket, key),
            ).fetchone(),
        )
        if row is None:
            return None
        value = row[0]
        if isinstance(value, bytes):
            return value
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, str):
            return value.encode("utf-8")
        return None

    def put(self, bucket: str, key: bytes, value: bytes) -> None:
        if not self.bucket_exists(bucket):
            raise KeyError(f"Bucket not found: {bucket}")
        _ = self._connection.execute(
            """
            INSERT INTO entries (bucket, key, value) VALUES (?, ?, ?)
            ON CONFLICT(bucket, key) DO UPDATE SET value=excluded.value
            """,
            (bucket, key, value),
        )

    def keys(self, bucket: str) -> list[bytes]:
        rows = cast(
            list[tuple[bytes]],
            self._connection.execute(
                "SELECT key FROM entries WHERE bucket = ? ORDER BY key", (bucket,)
            ).fetchall(),
        )
        return [bytes(row[0]) for row in rows]


@final
class SqliteBucketStore:
    _SCHEMA_SQL: ClassVar[str] = """
        CREATE TABLE IF NOT EXISTS buckets
        (
            name TEXT PRIMARY KEY
        );
        CREATE TABLE IF NOT EXISTS entries
        (
            bucket TEXT NOT NULL,
            key    BLOB NOT NULL,
            value  BLOB NOT NULL,
            PRIMARY KEY (bucket, key)
        ) WITHOUT ROWID;
    """

    def __init__(self, db_path: Path, lock_path: Path, lock_timeout_seconds: float = 1.0) -> None:
        self._db_path = db_path
        self._lock = FileLock(str(lock_path))
        self._lock_timeout_seconds = max(0.0, float(lock_timeout_seconds))
        self._opened = False

    @property
    def is_open(self) -> bool:
        return self._opened

    def __enter__(self) -> "SqliteBucketStore":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def open(self) -> None:
        if self._opened:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            _ = self._lock.acquire(timeout=self._lock_timeout_seconds)
        except Timeout as exc:
            raise StoreUnavailableError(
                f"Cache store is locked by another process: {self._db_path}", exc
            ) from exc

        try:
            conn = sqlite3.connect(str(self._db_path))
            try:
                _ = conn.executescript(self._SCHEMA_SQL)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            self._lock.release()
            raise StoreUnavailableError(
                f"Failed to open cache store {self._db_path}: {exc}", exc
            ) from exc
        self._opened = True

    def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        self._lock.release()

    def transaction(self) -> SqliteBucketTransaction:
        if not self._opened:
            raise StoreUnavailableError(f"Cache store is not open: {self._db_path}")
        return SqliteBucketTransaction(self._db_path)
