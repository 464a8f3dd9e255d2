from __future__ import annotations

import logging

from switch_library_indexer.application.reporting.library_report import LibraryReport
from switch_library_indexer.domain.models.content_attributes import ContentAttributes
from switch_library_indexer.domain.models.library_catalog import LibraryCatalog
from switch_library_indexer.domain.models.skip_record import SkipReason
from switch_library_indexer.domain.workflows.classify_titles import ClassifyTitles


def _catalog(make_file) -> LibraryCatalog:
    catalog = LibraryCatalog(num_files=3)
    classify = ClassifyTitles(logging.getLogger("test"))
    base = ContentAttributes.of("0100abcdef123000", 0)
    update = ContentAttributes.of("0100abcdef123800", 65536)
    classify(make_file("Zelda [0100ABCDEF123000][v0].nsp"), {base.title_id: base}, catalog)
    classify(make_file("Zelda [0100ABCDEF123800][v65536].nsp"), {update.title_id: update}, catalog)
    _ = catalog.skip(
        make_file("notes.txt"), SkipReason.UNSUPPORTED_TYPE, "file type is not supported"
    )
    return catalog


def test_library_report_given_catalog_when_title_rows_then_summarizes_each_title(make_file):
    report = LibraryReport(_catalog(make_file))

    assert report.title_rows() == [["0100abcdef12", "Zelda", "yes", "v65536", "0", ""]]


def test_library_report_given_skipped_files_when_skipped_rows_then_lists_reason(make_file):
    report = LibraryReport(_catalog(make_file))

    assert report.skipped_rows() == [
        ["notes.txt", "unsupported_type", "file type is not supported"]
    ]


def test_library_report_given_catalog_when_render_then_includes_totals_and_tables(make_file):
    rendered = LibraryReport(_catalog(make_file), tablefmt="plain").render()

    assert rendered.splitlines()[0] == "Files: 3  Titles: 1  Skipped: 1"
    assert "Zelda" in rendered
    assert "notes.txt" in rendered


def test_library_report_given_empty_catalog_when_render_then_only_totals():
    rendered = LibraryReport(LibraryCatalog()).render()

    assert rendered == "Files: 0  Titles: 0  Skipped: 0"
