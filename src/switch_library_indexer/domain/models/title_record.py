from __future__ import annotations

from dataclasses import dataclass, field

from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.discovered_file import DiscoveredFile


@dataclass(frozen=True, slots=True)
class FileEntry:
    file: DiscoveredFile
    attributes: ContentAttributes


@dataclass(slots=True)
class TitleRecord:
    base: FileEntry | None = None
    updates: dict[int, FileEntry] = field(default_factory=dict)
    dlc: dict[str, FileEntry] = field(default_factory=dict)
    # update versions seen but not installed, first claimant per version
    superseded_updates: dict[int, FileEntry] = field(default_factory=dict)
    multi_content: bool = False
    is_split: bool = False
    latest_update: int = 0

    @property
    def base_exists(self) -> bool:
        return self.base is not None

    @property
    def latest_update_entry(self) -> FileEntry | None:
        return self.updates.get(self.latest_update)

    def files(self) -> list[DiscoveredFile]:
        entries: list[FileEntry] = []
        if self.base is not None:
            entries.append(self.base)
        entries.extend(self.updates.values())
        entries.extend(self.dlc.values())
        return [entry.file for entry in entries]
