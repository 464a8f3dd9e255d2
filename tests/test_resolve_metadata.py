from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import override

from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.results import (
    MetadataSource,
    ParseResult,
    ResolveFailure,
)
from switch_library_indexer.domain.protocols.container_parser_protocol import (
    ContainerParserProtocol,
)
from switch_library_indexer.domain.protocols.metadata_cache_protocol import MetadataCacheProtocol
from switch_library_indexer.domain.workflows.resolve_metadata import ResolveMetadata


class _FakeParser(ContainerParserProtocol):
    def __init__(self, available: bool = True, result: ParseResult | None = None) -> None:
        self._available = available
        self._result = result or ParseResult.ok(
            {"0100abcdef123000": ContentAttributes.of("0100abcdef123000", 0)}
        )
        self.calls: list[tuple[str, Path]] = []

    @override
    def deep_scan_available(self) -> bool:
        return self._available

    @override
    def read_nsp(self, path: Path) -> ParseResult:
        self.calls.append(("nsp", path))
        return self._result

    @override
    def read_xci(self, path: Path) -> ParseResult:
        self.calls.append(("xci", path))
        return self._result

    @override
    def read_split(self, first_segment: Path) -> ParseResult:
        self.calls.append(("split", first_segment))
        return self._result


class _MemoryCache(MetadataCacheProtocol):
    def __init__(self) -> None:
        self.entries: dict[str, dict[str, ContentAttributes]] = {}
        self.puts = 0

    @override
    def get(self, fingerprint: str) -> dict[str, ContentAttributes] | None:
        stored = self.entries.get(fingerprint)
        return dict(stored) if stored is not None else None

    @override
    def put(self, fingerprint: str, contents: Mapping[str, ContentAttributes]) -> bool:
        self.puts += 1
        self.entries[fingerprint] = dict(contents)
        return True


def _resolver(parser: _FakeParser, cache: _MemoryCache | None) -> ResolveMetadata:
    return ResolveMetadata(parser=parser, cache=cache, logger=logging.getLogger("test"))


def test_resolve_metadata_given_deep_scan_when_resolved_twice_then_second_is_cache_hit(make_file):
    parser = _FakeParser()
    cache = _MemoryCache()
    resolve = _resolver(parser, cache)
    file = make_file("Game [0100ABCDEF123000][v0].nsp")

    first = resolve(file)
    second = resolve(file)

    assert first.source == MetadataSource.CONTAINER
    assert second.source == MetadataSource.CACHE
    assert second.contents == first.contents
    assert len(parser.calls) == 1
    assert cache.puts == 1


def test_resolve_metadata_given_extension_when_resolved_then_picks_matching_reader(make_file):
    parser = _FakeParser()
    resolve = _resolver(parser, None)

    _ = resolve(make_file("a.nsz"))
    _ = resolve(make_file("b.XCZ"))
    _ = resolve(make_file("c.xc00"))

    assert [kind for kind, _path in parser.calls] == ["nsp", "xci", "split"]


def test_resolve_metadata_given_no_deep_scan_when_resolved_then_uses_filename_without_cache(
    make_file,
):
    parser = _FakeParser(available=False)
    cache = _MemoryCache()
    resolve = _resolver(parser, cache)
    file = make_file("Some Game [0100ABCDEF123456][v65536].nsp")

    result = resolve(file)

    assert result.source == MetadataSource.FILENAME
    assert result.contents == {
        "0100abcdef123456": ContentAttributes.of("0100abcdef123456", 65536)
    }
    assert parser.calls == []
    assert cache.entries == {}


def test_resolve_metadata_given_malformed_container_when_resolved_then_malformed_failure(
    make_file,
):
    parser = _FakeParser(result=ParseResult.malformed("failed to read NSP [reason: bad header]"))
    cache = _MemoryCache()
    resolve = _resolver(parser, cache)

    result = resolve(make_file("Game [0100ABCDEF123000][v0].nsp"))

    assert result.resolved is False
    assert result.failure == ResolveFailure.MALFORMED_FILE
    assert result.detail == "failed to read NSP [reason: bad header]"
    assert cache.puts == 0


def test_resolve_metadata_given_unavailable_parser_when_resolved_then_falls_back_to_filename(
    make_file,
):
    parser = _FakeParser(result=ParseResult.unavailable("no split reader"))
    cache = _MemoryCache()
    resolve = _resolver(parser, cache)

    result = resolve(make_file("Game [0100ABCDEF123800][v131072].xc00"))

    assert result.source == MetadataSource.FILENAME
    assert result.contents is not None
    assert result.contents["0100abcdef123800"].version == 131072
    assert cache.puts == 0


def test_resolve_metadata_given_unparseable_name_when_resolved_then_unresolved_failure(
    make_file,
):
    resolve = _resolver(_FakeParser(available=False), None)

    result = resolve(make_file("Some Game [0100ABCDEF123456].nsp"))

    assert result.failure == ResolveFailure.UNRESOLVED_METADATA
    assert result.detail == "failed to parse name - no version id found"


def test_resolve_metadata_given_empty_cached_entry_when_resolved_then_reads_container(make_file):
    parser = _FakeParser()
    cache = _MemoryCache()
    resolve = _resolver(parser, cache)
    file = make_file("Game [0100ABCDEF123000][v0].nsp")
    cache.entries[file.fingerprint] = {}

    result = resolve(file)

    assert result.source == MetadataSource.CONTAINER
    assert result.contents == {"0100abcdef123000": ContentAttributes.of("0100abcdef123000", 0)}
    assert len(parser.calls) == 1
    assert cache.puts == 1
