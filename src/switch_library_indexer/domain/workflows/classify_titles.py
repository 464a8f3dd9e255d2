from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import final

from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.content_type import ContentType
from switch_library_indexer.domain.models.discovered_file import DiscoveredFile
from switch_library_indexer.domain.models.library_catalog import LibraryCatalog
from switch_library_indexer.domain.models.skip_record import SkipReason
from switch_library_indexer.domain.models.title_record import FileEntry, TitleRecord


@final
class ClassifyTitles:
    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _classify_base(
        self,
        entry: FileEntry,
        record: TitleRecord,
        catalog: LibraryCatalog,
    ) -> None:
        if record.base is not None:
            existing = record.base.file.name
            _ = catalog.skip(
                entry.file, SkipReason.DUPLICATE, f"duplicate base file ({existing})"
            )
            self._logger.warning(
                "Duplicate base file found [%s] and [%s]", entry.file.name, existing
            )
            return
        record.base = entry

    def _classify_update(
        self,
        entry: FileEntry,
        record: TitleRecord,
        catalog: LibraryCatalog,
    ) -> None:
        version = entry.attributes.version
        existing = record.updates.get(version) or record.superseded_updates.get(version)
        if existing is not None:
            _ = catalog.skip(
                entry.file,
                SkipReason.DUPLICATE,
                f"duplicate update file ({existing.file.name})",
            )
            self._logger.warning(
                "Duplicate update file found [%s] and [%s]", existing.file.name, entry.file.name
            )
            return

        if record.updates and version <= record.latest_update:
            _ = catalog.skip(
                entry.file,
                SkipReason.SUPERSEDED_BY_NEWER,
                "old update file, newer update exist locally",
            )
            record.superseded_updates[version] = entry
            return

        previous = record.latest_update_entry
        if previous is not None:
            del record.updates[record.latest_update]
            record.superseded_updates[record.latest_update] = previous
            _ = catalog.skip(
                previous.file,
                SkipReason.SUPERSEDED_BY_NEWER,
                "old update file, newer update exist locally",
            )
        record.updates[version] = entry
        record.latest_update = version

    def _classify_dlc(
        self,
        entry: FileEntry,
        record: TitleRecord,
        catalog: LibraryCatalog,
    ) -> None:
        title_id = entry.attributes.title_id
        existing = record.dlc.get(title_id)
        if existing is not None:
            stored_version = existing.attributes.version
            if entry.attributes.version < stored_version:
                _ = catalog.skip(
                    entry.file,
                    SkipReason.SUPERSEDED_BY_NEWER,
                    "old DLC file, newer version exist locally",
                )
                self._logger.warning(
                    "Old DLC file found [%s] and [%s]", entry.file.name, existing.file.name
                )
                return
            if entry.attributes.version == stored_version:
                _ = catalog.skip(
                    entry.file,
                    SkipReason.DUPLICATE,
                    f"duplicate DLC file ({existing.file.name})",
                )
                self._logger.warning(
                    "Duplicate DLC file found [%s] and [%s]", entry.file.name, existing.file.name
                )
                return
        # a higher version overwrites the stored DLC without a skip record
        record.dlc[title_id] = entry

    def __call__(
        self,
        file: DiscoveredFile,
        contents: Mapping[str, ContentAttributes],
        catalog: LibraryCatalog,
        is_split: bool = False,
    ) -> None:
        multi_content = len(contents) > 1
        for attributes in contents.values():
            record = catalog.title(
                attributes.title_prefix, multi_content=multi_content, is_split=is_split
            )
            entry = FileEntry(file=file, attributes=attributes)

            if attributes.content_type == ContentType.BASE:
                self._classify_base(entry, record, catalog)
            elif attributes.content_type == ContentType.UPDATE:
                self._classify_update(entry, record, catalog)
            else:
                self._classify_dlc(entry, record, catalog)
