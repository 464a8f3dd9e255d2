from __future__ import annotations

from typing import ClassVar, final

from tabulate import tabulate

from switch_library_indexer.domain.models.library_catalog import LibraryCatalog
from switch_library_indexer.domain.models.title_record import TitleRecord
from switch_library_indexer.domain.workflows.filename_parser import FilenameParser


@final
class LibraryReport:
    TITLE_HEADERS: ClassVar[tuple[str, ...]] = ("Title", "Name", "Base", "Update", "DLC", "Flags")
    SKIPPED_HEADERS: ClassVar[tuple[str, ...]] = ("File", "Reason", "Detail")

    def __init__(self, catalog: LibraryCatalog, tablefmt: str = "fancy_outline") -> None:
        self._catalog = catalog
        self._tablefmt = tablefmt

    @staticmethod
    def _display_name(record: TitleRecord) -> str:
        files = record.files()
        if not files:
            return ""
        source = record.base.file if record.base is not None else files[0]
        return FilenameParser.display_title(source.name)

    @staticmethod
    def _flags(record: TitleRecord) -> str:
        flags: list[str] = []
        if record.multi_content:
            flags.append("multi")
        if record.is_split:
            flags.append("split")
        return ", ".join(flags)

    def title_rows(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for prefix in sorted(self._catalog.titles):
            record = self._catalog.titles[prefix]
            latest = record.latest_update_entry
            rows.append(
                [
                    prefix,
                    self._display_name(record),
                    "yes" if record.base_exists else "no",
                    f"v{latest.attributes.version}" if latest is not None else "",
                    str(len(record.dlc)),
                    self._flags(record),
                ]
            )
        return rows

    def skipped_rows(self) -> list[list[str]]:
        entries = sorted(self._catalog.skipped.items(), key=lambda item: str(item[0].path))
        return [[file.name, skip.reason.value, skip.detail] for file, skip in entries]

    def render(self) -> str:
        sections = [
            f"Files: {self._catalog.num_files}  "
            f"Titles: {len(self._catalog.titles)}  "
            f"Skipped: {len(self._catalog.skipped)}",
        ]
        if self._catalog.titles:
            sections.append(
                tabulate(self.title_rows(), headers=self.TITLE_HEADERS, tablefmt=self._tablefmt)
            )
        if self._catalog.skipped:
            sections.append(
                tabulate(
                    self.skipped_rows(), headers=self.SKIPPED_HEADERS, tablefmt=self._tablefmt
                )
            )
        return "\n".join(sections)
