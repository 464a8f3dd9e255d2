from __future__ import annotations

import re
from typing import ClassVar, final

from switch_library_indexer.domain.errors import NoTitleIdFoundError, NoVersionFoundError
from switch_library_indexer.domain.models.results import FilenameMetadata


@final
class FilenameParser:
    _VERSION_REGEX: ClassVar[re.Pattern[str]] = re.compile(r"\[[vV]?(\d{1,10})\]")
    _TITLE_ID_REGEX: ClassVar[re.Pattern[str]] = re.compile(r"\[([A-Za-z0-9]{16})\]")

    @classmethod
    def parse_version(cls, name: str) -> int:
        match = cls._VERSION_REGEX.search(str(name or ""))
        if match is None:
            raise NoVersionFoundError(name)
        return int(match.group(1))

    @classmethod
    def parse_title_id(cls, name: str) -> str:
        match = cls._TITLE_ID_REGEX.search(str(name or ""))
        if match is None:
            raise NoTitleIdFoundError(name)
        return match.group(1).lower()

    @classmethod
    def parse(cls, name: str) -> FilenameMetadata:
        version = cls.parse_version(name)
        title_id = cls.parse_title_id(name)
        return FilenameMetadata(title_id=title_id, version=version)

    @staticmethod
    def display_title(name: str) -> str:
        value = str(name or "")
        index = value.find("[")
        if index < 0:
            return value.strip()
        return value[:index].strip()
