from __future__ import annotations


class IndexerError(Exception):
    pass


class UnresolvedMetadataError(IndexerError):
    def __init__(self, message: str | None = None) -> None:
        self.message = message or "unable to determine title-Id / version"
        super().__init__(self.message)


class NoVersionFoundError(UnresolvedMetadataError):
    def __init__(self, file_name: str = "") -> None:
        self.file_name = file_name
        super().__init__("failed to parse name - no version id found")


class NoTitleIdFoundError(UnresolvedMetadataError):
    def __init__(self, file_name: str = "") -> None:
        self.file_name = file_name
        super().__init__("failed to parse name - no title id found")


class StoreUnavailableError(IndexerError):
    """Raised when the cache store cannot be opened or maintained; the run must not proceed."""

    def __init__(self, message: str, original_exception: Exception | None = None) -> None:
        self.message = message
        self.original_exception = original_exception
        super().__init__(message)
