from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType
from typing import Any, final, override

from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.results import ParseResult
from switch_library_indexer.domain.protocols.container_parser_protocol import (
    ContainerParserProtocol,
)


@final
class NszContainerGateway(ContainerParserProtocol):
    def __init__(self, keys_path: Path, logger: logging.Logger) -> None:
        self._keys_path = keys_path
        self._logger = logger
        self._lock = threading.Lock()
        self._fs: ModuleType | None = None
        self._available: bool | None = None

    def _load_modules(self) -> bool:
        try:
            keys = importlib.import_module("nsz.nut.Keys")
            self._fs = importlib.import_module("nsz.Fs")
        except Exception as exc:
            self._logger.warning("NSZ modules are not available: %s", exc)
            return False

        try:
            _ = keys.load(str(self._keys_path))
        except Exception as exc:
            self._logger.warning("Failed to load keys from %s: %s", self._keys_path, exc)
            return False
        loaded = bool(getattr(keys, "keys_loaded", False))
        if not loaded:
            self._logger.warning("Keys file %s has no usable header key", self._keys_path)
        return loaded

    @override
    def deep_scan_available(self) -> bool:
        with self._lock:
            if self._available is None:
                if not self._keys_path.is_file():
                    self._logger.info("Keys file not found: %s", self._keys_path)
                    self._available = False
                else:
                    self._available = self._load_modules()
            return self._available

    def _cnmt_sections(self, container: Any) -> Iterable[Any]:
        fs = self._fs
        if fs is None:
            return []
        if isinstance(container, fs.Nsp.Nsp):
            return [container.cnmt()]
        if isinstance(container, fs.Xci.Xci):
            secure = container.hfs0["secure"]
            return [
                nca
                for nca in secure
                if isinstance(nca, fs.Nca.Nca)
                and nca.header.contentType == fs.Type.Content.META
            ]
        return []

    def _read_container(self, path: Path) -> ParseResult:
        if not self.deep_scan_available() or self._fs is None:
            return ParseResult.unavailable("deep scan is not available")

        contents: dict[str, ContentAttributes] = {}
        try:
            container = self._fs.factory(path.resolve())
            container.open(str(path), "rb")
            try:
                for sections in self._cnmt_sections(container):
                    for section in sections:
                        if not isinstance(section, self._fs.Pfs0.Pfs0):
                            continue
                        cnmt = section.getCnmt()
                        attributes = ContentAttributes.of(cnmt.titleId, cnmt.version)
                        contents[attributes.title_id] = attributes
            finally:
                container.close()
        except Exception as exc:
            return ParseResult.malformed(f"failed to read NSP [reason: {exc}]")

        if not contents:
            return ParseResult.malformed("failed to read NSP [reason: no content meta found]")
        return ParseResult.ok(contents)

    @override
    def read_nsp(self, path: Path) -> ParseResult:
        return self._read_container(path)

    @override
    def read_xci(self, path: Path) -> ParseResult:
        return self._read_container(path)

    @override
    def read_split(self, first_segment: Path) -> ParseResult:
        # nsz has no reader for segmented dumps
        return ParseResult.unavailable(
            f"split package reading is not supported: {first_segment.name}"
        )
