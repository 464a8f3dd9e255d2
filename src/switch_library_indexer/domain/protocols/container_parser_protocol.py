from __future__ import annotations

from pathlib import Path
from typing import Protocol

from switch_library_indexer.domain.models.results import ParseResult


class ContainerParserProtocol(Protocol):
    def deep_scan_available(self) -> bool: ...

    def read_nsp(self, path: Path) -> ParseResult: ...

    def read_xci(self, path: Path) -> ParseResult: ...

    def read_split(self, first_segment: Path) -> ParseResult: ...
