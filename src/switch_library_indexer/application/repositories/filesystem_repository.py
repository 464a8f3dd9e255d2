from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import final, override

from switch_library_indexer.domain.models.discovered_file import DiscoveredFile
from switch_library_indexer.domain.protocols.package_store_protocol import PackageStoreProtocol
from switch_library_indexer.domain.protocols.progress_protocol import ProgressProtocol


@final
class FilesystemRepository(PackageStoreProtocol):
    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _on_walk_error(self, exc: OSError) -> None:
        self._logger.error("Error while scanning folders: %s", exc)

    def scan_folder(
        self,
        folder: Path,
        recursive: bool,
        progress: ProgressProtocol | None = None,
    ) -> list[DiscoveredFile]:
        files: list[DiscoveredFile] = []
        if not folder.is_dir():
            self._logger.error("Scan folder not found: %s", folder)
            return files

        for root, dirs, names in os.walk(folder, onerror=self._on_walk_error):
            dirs[:] = sorted(name for name in dirs if not name.startswith("."))
            if not recursive:
                dirs[:] = []

            base = Path(root)
            for name in sorted(names):
                # hidden and macOS resource-fork files
                if name.startswith("."):
                    continue
                try:
                    stat = (base / name).stat()
                except OSError as exc:
                    self._logger.error("Error while scanning folders: %s", exc)
                    continue
                if progress is not None:
                    progress.update(-1, -1, f"scanning {name}")
                files.append(
                    DiscoveredFile(
                        base_folder=base,
                        name=name,
                        size=int(stat.st_size),
                        mtime_ns=int(stat.st_mtime_ns),
                    )
                )
        return files

    @override
    def scan_folders(
        self,
        folders: Sequence[Path],
        recursive: bool,
        progress: ProgressProtocol | None = None,
    ) -> list[DiscoveredFile]:
        files: list[DiscoveredFile] = []
        for index, folder in enumerate(folders):
            files.extend(self.scan_folder(folder, recursive, progress))
            if progress is not None:
                progress.update(index + 1, len(folders) + 1, f"scanning files in {folder}")
        self._logger.debug("Discovered %d files in %d folders", len(files), len(folders))
        return files
