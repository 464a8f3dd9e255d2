from __future__ import annotations

from dataclasses import dataclass, field

from switch_library_indexer.domain.models.discovered_file import DiscoveredFile
from switch_library_indexer.domain.models.skip_record import SkipReason, SkipRecord
from switch_library_indexer.domain.models.title_record import TitleRecord


@dataclass(slots=True)
class LibraryCatalog:
    titles: dict[str, TitleRecord] = field(default_factory=dict)
    skipped: dict[DiscoveredFile, SkipRecord] = field(default_factory=dict)
    num_files: int = 0

    def title(
        self, prefix: str, multi_content: bool = False, is_split: bool = False
    ) -> TitleRecord:
        record = self.titles.get(prefix)
        if record is None:
            record = TitleRecord(multi_content=multi_content, is_split=is_split)
            self.titles[prefix] = record
        return record

    def skip(self, file: DiscoveredFile, reason: SkipReason, detail: str) -> bool:
        # first reason recorded for a file is the one reported
        if file in self.skipped:
            return False
        self.skipped[file] = SkipRecord(reason=reason, detail=detail)
        return True

    def catalogued_files(self) -> set[DiscoveredFile]:
        files: set[DiscoveredFile] = set()
        for record in self.titles.values():
            files.update(record.files())
        return files
