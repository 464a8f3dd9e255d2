from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.content_type import ContentType
from switch_library_indexer.domain.models.discovered_file import DiscoveredFile
from switch_library_indexer.domain.models.library_catalog import LibraryCatalog
from switch_library_indexer.domain.models.results import (
    FilenameMetadata,
    MetadataSource,
    ParseFailureReason,
    ParseResult,
    ResolveFailure,
    ResolveResult,
)
from switch_library_indexer.domain.models.skip_record import SkipReason, SkipRecord
from switch_library_indexer.domain.models.title_record import FileEntry, TitleRecord

__all__ = [
    "ContentAttributes",
    "ContentType",
    "DiscoveredFile",
    "FileEntry",
    "FilenameMetadata",
    "LibraryCatalog",
    "MetadataSource",
    "ParseFailureReason",
    "ParseResult",
    "ResolveFailure",
    "ResolveResult",
    "SkipReason",
    "SkipRecord",
    "TitleRecord",
]
