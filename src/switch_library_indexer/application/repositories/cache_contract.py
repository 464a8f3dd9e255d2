from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, RootModel

from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.content_type import ContentType


class CachedContent(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    title_id: str = Field(min_length=5)
    version: int = Field(ge=0)
    content_type: ContentType

    @classmethod
    def from_attributes(cls, attributes: ContentAttributes) -> "CachedContent":
        return cls(
            title_id=attributes.title_id,
            version=attributes.version,
            content_type=attributes.content_type,
        )

    def to_attributes(self) -> ContentAttributes:
        return ContentAttributes.of(self.title_id, self.version)


class CacheEntryDocument(RootModel[dict[str, CachedContent]]):
    pass
