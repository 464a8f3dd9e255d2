from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from switch_library_indexer.domain.models.content_attributes import ContentAttributes


class ParseFailureReason(StrEnum):
    MALFORMED = "malformed"
    UNAVAILABLE = "unavailable"


class ResolveFailure(StrEnum):
    MALFORMED_FILE = "malformed_file"
    UNRESOLVED_METADATA = "unresolved_metadata"


class MetadataSource(StrEnum):
    CACHE = "cache"
    CONTAINER = "container"
    FILENAME = "filename"


@dataclass(frozen=True, slots=True)
class ParseResult:
    contents: Mapping[str, ContentAttributes] | None = None
    failure: ParseFailureReason | None = None
    detail: str = ""

    @classmethod
    def ok(cls, contents: Mapping[str, ContentAttributes]) -> "ParseResult":
        return cls(contents=dict(contents))

    @classmethod
    def malformed(cls, detail: str) -> "ParseResult":
        return cls(failure=ParseFailureReason.MALFORMED, detail=detail)

    @classmethod
    def unavailable(cls, detail: str) -> "ParseResult":
        return cls(failure=ParseFailureReason.UNAVAILABLE, detail=detail)


@dataclass(frozen=True, slots=True)
class ResolveResult:
    contents: Mapping[str, ContentAttributes] | None
    source: MetadataSource | None = None
    failure: ResolveFailure | None = None
    detail: str = ""

    @property
    def resolved(self) -> bool:
        return self.contents is not None and self.failure is None


@dataclass(frozen=True, slots=True)
class FilenameMetadata:
    title_id: str
    version: int
