from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SkipReason(StrEnum):
    UNSUPPORTED_TYPE = "unsupported_type"
    DUPLICATE = "duplicate"
    SUPERSEDED_BY_NEWER = "superseded_by_newer"
    UNRECOGNIZED = "unrecognized"
    MALFORMED_FILE = "malformed_file"


@dataclass(frozen=True, slots=True)
class SkipRecord:
    reason: SkipReason
    detail: str
