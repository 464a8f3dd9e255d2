from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import final

from switch_library_indexer.application.gateways.nsz_container_gateway import (
    NszContainerGateway,
)
from switch_library_indexer.application.logging_progress import LoggingProgress
from switch_library_indexer.application.reporting.library_report import LibraryReport
from switch_library_indexer.application.repositories.filesystem_repository import (
    FilesystemRepository,
)
from switch_library_indexer.application.repositories.metadata_cache import MetadataCache
from switch_library_indexer.application.repositories.sqlite_bucket_store import (
    SqliteBucketStore,
)
from switch_library_indexer.config.logging_setup import configure_logging
from switch_library_indexer.config.settings_loader import SettingsLoader
from switch_library_indexer.domain.errors import StoreUnavailableError
from switch_library_indexer.domain.models.app_config import AppConfig
from switch_library_indexer.domain.models.library_catalog import LibraryCatalog
from switch_library_indexer.domain.protocols.container_parser_protocol import (
    ContainerParserProtocol,
)
from switch_library_indexer.domain.workflows.build_library import BuildLibrary
from switch_library_indexer.domain.workflows.classify_titles import ClassifyTitles
from switch_library_indexer.domain.workflows.resolve_metadata import ResolveMetadata


@final
class IndexerApp:
    def __init__(
        self,
        config: AppConfig,
        container_parser: ContainerParserProtocol | None = None,
    ) -> None:
        self._config = config
        self._log = logging.getLogger("switch_library_indexer.indexer")
        self._store = SqliteBucketStore(
            db_path=config.paths.cache_db_path,
            lock_path=config.paths.cache_lock_path,
            lock_timeout_seconds=config.user.store_lock_timeout_seconds,
        )
        self._package_store = FilesystemRepository(self._log)
        self._container_parser = container_parser or NszContainerGateway(
            keys_path=config.paths.keys_path,
            logger=self._log,
        )

    @classmethod
    def run_from_env(
        cls,
        settings_file: str | None = None,
        folders: Sequence[str] | None = None,
        clear_cache: bool = False,
        recursive: bool | None = None,
    ) -> int:
        settings_file = settings_file or os.getenv("SETTINGS_FILE")
        config = SettingsLoader.load(Path(settings_file) if settings_file else None)
        configure_logging(config.user.log_level, config.paths.logs_dir / "app_errors.log")
        return cls(config).run(
            folders=[Path(folder).expanduser() for folder in folders] if folders else None,
            clear_cache=clear_cache,
            recursive=recursive,
        )

    def _build_library_use_case(self, cache: MetadataCache) -> BuildLibrary:
        resolve = ResolveMetadata(
            parser=self._container_parser,
            cache=cache,
            logger=self._log,
        )
        return BuildLibrary(
            resolve_metadata=resolve,
            classify_titles=ClassifyTitles(self._log),
            logger=self._log,
            worker_count=self._config.user.resolve_workers,
            progress=LoggingProgress(self._log),
            package_store=self._package_store,
        )

    def build(
        self,
        folders: Sequence[Path] | None = None,
        clear_cache: bool = False,
        recursive: bool | None = None,
    ) -> LibraryCatalog:
        scan_folders = tuple(folders) if folders else self._config.scan_folders
        scan_recursive = self._config.user.scan_recursive if recursive is None else recursive
        if not scan_folders:
            self._log.warning("No scan folders configured")

        with self._store:
            cache = MetadataCache(self._store, self._config.app_version, self._log)
            if clear_cache:
                _ = cache.clear()
            else:
                _ = cache.invalidate_if_stale_version()
            build_library = self._build_library_use_case(cache)
            return build_library.scan(scan_folders, scan_recursive)

    def run(
        self,
        folders: Sequence[Path] | None = None,
        clear_cache: bool = False,
        recursive: bool | None = None,
    ) -> int:
        try:
            catalog = self.build(folders=folders, clear_cache=clear_cache, recursive=recursive)
        except StoreUnavailableError as exc:
            self._log.error("Cannot start scan: %s", exc.message)
            return 1

        print(LibraryReport(catalog).render())
        return 0
