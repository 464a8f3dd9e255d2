from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from switch_library_indexer.domain.models.discovered_file import DiscoveredFile
from switch_library_indexer.domain.protocols.progress_protocol import ProgressProtocol


class PackageStoreProtocol(Protocol):
    def scan_folders(
        self,
        folders: Sequence[Path],
        recursive: bool,
        progress: ProgressProtocol | None = None,
    ) -> list[DiscoveredFile]: ...
