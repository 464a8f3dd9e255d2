from __future__ import annotations

import logging
import traceback
from collections.abc import Generator, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import ClassVar, final

from switch_library_indexer.domain.models.discovered_file import DiscoveredFile
from switch_library_indexer.domain.models.library_catalog import LibraryCatalog
from switch_library_indexer.domain.models.results import ResolveFailure, ResolveResult
from switch_library_indexer.domain.models.skip_record import SkipReason
from switch_library_indexer.domain.protocols.package_store_protocol import PackageStoreProtocol
from switch_library_indexer.domain.protocols.progress_protocol import ProgressProtocol
from switch_library_indexer.domain.workflows.classify_titles import ClassifyTitles
from switch_library_indexer.domain.workflows.resolve_metadata import ResolveMetadata


@final
class BuildLibrary:
    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = (".nsp", ".nsz", ".xci", ".xcz")

    def __init__(
        self,
        resolve_metadata: ResolveMetadata,
        classify_titles: ClassifyTitles,
        logger: logging.Logger,
        worker_count: int = 1,
        progress: ProgressProtocol | None = None,
        package_store: PackageStoreProtocol | None = None,
    ) -> None:
        self._resolve_metadata = resolve_metadata
        self._classify_titles = classify_titles
        self._logger = logger
        self._worker_count = max(1, int(worker_count))
        self._progress = progress
        self._package_store = package_store

    @staticmethod
    def _split_part(name: str) -> int | None:
        suffix = name[-2:]
        if len(suffix) != 2 or not suffix.isdigit():
            return None
        return int(suffix)

    def _prefilter(self, file: DiscoveredFile, catalog: LibraryCatalog) -> bool | None:
        """Return the split flag for a file worth resolving, or None when it was skipped."""
        if file.size <= 0:
            _ = catalog.skip(file, SkipReason.UNSUPPORTED_TYPE, "empty file")
            return None

        name = file.lower_name
        part = self._split_part(name)
        if part is not None:
            if part == 0:
                return True
            _ = catalog.skip(
                file,
                SkipReason.UNSUPPORTED_TYPE,
                "split segment, metadata is read from the first segment",
            )
            return None

        if not name.endswith(self.SUPPORTED_EXTENSIONS):
            _ = catalog.skip(file, SkipReason.UNSUPPORTED_TYPE, "file type is not supported")
            return None
        return False

    def _resolve_safely(self, file: DiscoveredFile) -> ResolveResult:
        try:
            return self._resolve_metadata(file)
        except Exception as exc:
            self._logger.error(
                "Unexpected resolve worker failure for %s\n%s",
                file.path,
                traceback.format_exc(),
            )
            return ResolveResult(
                contents=None,
                failure=ResolveFailure.UNRESOLVED_METADATA,
                detail=str(exc),
            )

    def _resolve_all(
        self, candidates: list[DiscoveredFile]
    ) -> Generator[ResolveResult, None, None]:
        if self._worker_count <= 1 or len(candidates) <= 1:
            for file in candidates:
                yield self._resolve_safely(file)
            return

        # map() yields in submission order so ties break exactly like a sequential pass
        with ThreadPoolExecutor(max_workers=self._worker_count) as executor:
            yield from executor.map(self._resolve_safely, candidates)

    def _notify(self, current: int, total: int, message: str) -> None:
        if self._progress is not None:
            self._progress.update(current, total, message)

    def __call__(self, files: Sequence[DiscoveredFile]) -> LibraryCatalog:
        catalog = LibraryCatalog()
        regular = [file for file in files if not file.is_dir]
        catalog.num_files = len(regular)

        plan: list[tuple[DiscoveredFile, bool | None]] = [
            (file, self._prefilter(file, catalog)) for file in regular
        ]
        candidates = [file for file, is_split in plan if is_split is not None]

        # settle deep-scan availability before any worker thread starts
        _ = self._resolve_metadata.deep_scan
        results = self._resolve_all(candidates)

        total = len(regular)
        try:
            for index, (file, is_split) in enumerate(plan, start=1):
                self._notify(index, total, f"process:{file.name}")
                if is_split is None:
                    continue

                result = next(results)
                if result.failure == ResolveFailure.MALFORMED_FILE:
                    _ = catalog.skip(file, SkipReason.MALFORMED_FILE, result.detail)
                    continue
                if not result.resolved or result.contents is None:
                    _ = catalog.skip(
                        file,
                        SkipReason.UNRECOGNIZED,
                        f"unable to determine title-Id / version - {result.detail}",
                    )
                    continue

                self._classify_titles(file, result.contents, catalog, is_split=is_split)
        finally:
            results.close()

        self._notify(total, total, "Complete")
        self._logger.info(
            "Library built: titles: %d, files: %d, skipped: %d",
            len(catalog.titles),
            catalog.num_files,
            len(catalog.skipped),
        )
        return catalog

    def scan(self, folders: Sequence[Path], recursive: bool = True) -> LibraryCatalog:
        if self._package_store is None:
            raise RuntimeError("No package store configured for scanning")
        files = self._package_store.scan_folders(folders, recursive, self._progress)
        return self(files)
