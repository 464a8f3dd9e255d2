from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from switch_library_indexer.domain.models.content_type import ContentType


@dataclass(frozen=True, slots=True)
class ContentAttributes:
    _ROLE_SUFFIX_LENGTH: ClassVar[int] = 4

    title_id: str
    version: int
    content_type: ContentType

    @classmethod
    def of(cls, title_id: str, version: int) -> "ContentAttributes":
        normalized = str(title_id or "").strip().lower()
        if len(normalized) <= cls._ROLE_SUFFIX_LENGTH:
            raise ValueError(f"Invalid title_id: {title_id!r}")
        return cls(
            title_id=normalized,
            version=int(version),
            content_type=ContentType.from_title_id(normalized),
        )

    @property
    def title_prefix(self) -> str:
        return self.title_id[: -self._ROLE_SUFFIX_LENGTH]
