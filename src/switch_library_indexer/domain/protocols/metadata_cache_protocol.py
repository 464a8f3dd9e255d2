from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from switch_library_indexer.domain.models.content_attributes import ContentAttributes


class MetadataCacheProtocol(Protocol):
    def get(self, fingerprint: str) -> dict[str, ContentAttributes] | None: ...

    def put(self, fingerprint: str, contents: Mapping[str, ContentAttributes]) -> bool: ...
