from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import final

from switch_library_indexer.domain.errors import UnresolvedMetadataError
from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.discovered_file import DiscoveredFile
from switch_library_indexer.domain.models.results import (
    MetadataSource,
    ParseFailureReason,
    ParseResult,
    ResolveFailure,
    ResolveResult,
)
from switch_library_indexer.domain.protocols.container_parser_protocol import (
    ContainerParserProtocol,
)
from switch_library_indexer.domain.protocols.metadata_cache_protocol import MetadataCacheProtocol
from switch_library_indexer.domain.workflows.filename_parser import FilenameParser


def is_split_first_segment(name: str) -> bool:
    return str(name or "").lower().endswith("00")


@final
class ResolveMetadata:
    def __init__(
        self,
        parser: ContainerParserProtocol,
        cache: MetadataCacheProtocol | None,
        logger: logging.Logger,
        filename_parser: type[FilenameParser] = FilenameParser,
    ) -> None:
        self._parser = parser
        self._cache = cache
        self._logger = logger
        self._filename_parser = filename_parser
        self._deep_scan: bool | None = None

    @property
    def deep_scan(self) -> bool:
        # checked once per run
        if self._deep_scan is None:
            self._deep_scan = bool(self._parser.deep_scan_available())
            if not self._deep_scan:
                self._logger.info("Deep scan unavailable: using filename metadata only")
        return self._deep_scan

    def _container_reader(self, file: DiscoveredFile) -> Callable[[Path], ParseResult] | None:
        name = file.lower_name
        if name.endswith((".nsp", ".nsz")):
            return self._parser.read_nsp
        if name.endswith((".xci", ".xcz")):
            return self._parser.read_xci
        if is_split_first_segment(name):
            return self._parser.read_split
        return None

    def _from_cache(self, file: DiscoveredFile) -> dict[str, ContentAttributes] | None:
        if self._cache is None:
            return None
        return self._cache.get(file.fingerprint)

    def _from_filename(self, file: DiscoveredFile) -> ResolveResult:
        try:
            parsed = self._filename_parser.parse(file.name)
        except UnresolvedMetadataError as exc:
            return ResolveResult(
                contents=None,
                failure=ResolveFailure.UNRESOLVED_METADATA,
                detail=exc.message,
            )
        attributes = ContentAttributes.of(parsed.title_id, parsed.version)
        return ResolveResult(
            contents={attributes.title_id: attributes},
            source=MetadataSource.FILENAME,
        )

    def __call__(self, file: DiscoveredFile) -> ResolveResult:
        if self.deep_scan:
            cached = self._from_cache(file)
            if cached:
                return ResolveResult(contents=cached, source=MetadataSource.CACHE)

            reader = self._container_reader(file)
            if reader is not None:
                parsed = reader(file.path)
                if parsed.failure is None and parsed.contents:
                    contents = dict(parsed.contents)
                    if self._cache is not None:
                        _ = self._cache.put(file.fingerprint, contents)
                    return ResolveResult(contents=contents, source=MetadataSource.CONTAINER)
                if parsed.failure == ParseFailureReason.MALFORMED:
                    self._logger.error("[file:%s] %s", file.name, parsed.detail)
                    return ResolveResult(
                        contents=None,
                        failure=ResolveFailure.MALFORMED_FILE,
                        detail=parsed.detail,
                    )
                self._logger.debug(
                    "Container metadata unavailable for %s: %s", file.name, parsed.detail
                )

        return self._from_filename(file)
