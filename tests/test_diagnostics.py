# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic ranges, publication and storage."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from stanwatch.diagnostics import (
    DiagnosticCollection,
    DocumentLineSource,
    NullLineSource,
    compute_range,
    line_index,
    map_message,
    publish_diagnostics,
)
from stanwatch.models import AnalysisOutput, Diagnostic, DiagnosticRange, Message
from tests.helpers.fakes import FakeDocument, RecordingCollection


def _output(files: dict[str, list[dict[str, object]]]) -> AnalysisOutput:
    return AnalysisOutput.model_validate(
        {
            "totals": {"errors": 0, "file_errors": sum(len(items) for items in files.values())},
            "files": {path: {"errors": len(items), "messages": items} for path, items in files.items()},
        },
    )


def test_compute_range_trims_both_sides() -> None:
    assert compute_range("   $x = 1;   ", 4) == DiagnosticRange(line=4, start=3, end=10)


def test_compute_range_handles_tabs_and_newlines() -> None:
    assert compute_range("\t\techo $a;\r\n", 0) == DiagnosticRange(line=0, start=2, end=10)


@pytest.mark.parametrize("text", [None, "", "     ", "\t\n"])
def test_compute_range_falls_back_for_blank_text(text: str | None) -> None:
    assert compute_range(text, 7) == DiagnosticRange(line=7, start=0, end=1)


@pytest.mark.parametrize(("line", "expected"), [(None, 0), (0, 0), (1, 0), (12, 11)])
def test_line_index_is_zero_based(line: int | None, expected: int) -> None:
    assert line_index(Message(message="m", line=line)) == expected


def test_map_message_prefixes_text() -> None:
    diagnostic = map_message("/a.php", Message(message="Oops", line=3), NullLineSource())

    assert diagnostic.message == "[phpstan] Oops"
    assert diagnostic.range == DiagnosticRange(line=2, start=0, end=1)


def test_document_line_source_serves_only_its_document(tmp_path: Path) -> None:
    document = FakeDocument(tmp_path / "a.php", "<?php\n  foo();\n")
    source = DocumentLineSource(document)

    assert source.line_text(str(tmp_path / "a.php"), 1) == "  foo();"
    assert source.line_text(str(tmp_path / "b.php"), 1) is None
    assert DocumentLineSource(None).line_text(str(tmp_path / "a.php"), 1) is None


def test_publish_ranges_active_document_only(tmp_path: Path) -> None:
    active = tmp_path / "Active.php"
    other = tmp_path / "Other.php"
    document = FakeDocument(active, "<?php\n\n    return $missing;  \n")
    output = _output(
        {
            str(active): [{"message": "Undefined variable", "line": 3}],
            str(other): [{"message": "Unknown class", "line": 3}],
        },
    )
    sink = DiagnosticCollection()

    published = publish_diagnostics(output, sink, DocumentLineSource(document))

    assert published[str(active)][0].range == DiagnosticRange(line=2, start=4, end=20)
    assert published[str(other)][0].range == DiagnosticRange(line=2, start=0, end=1)
    assert sink.get(str(other))[0].message == "[phpstan] Unknown class"


def test_publish_replaces_previous_diagnostics() -> None:
    sink = RecordingCollection()
    stale = Diagnostic(file="/a.php", range=DiagnosticRange(line=0, start=0, end=1), message="old")
    sink.set("/a.php", [stale, stale, stale])

    publish_diagnostics(_output({"/a.php": []}), sink, NullLineSource())

    assert sink.get("/a.php") == ()
    assert sink.calls[-2:] == [("delete", "/a.php", 0), ("set", "/a.php", 0)]


def test_publish_keeps_reported_order() -> None:
    sink = DiagnosticCollection()
    output = _output({"/a.php": [{"message": "second", "line": 9}, {"message": "first", "line": 1}]})

    publish_diagnostics(output, sink, NullLineSource())

    assert [diagnostic.message for diagnostic in sink.get("/a.php")] == ["[phpstan] second", "[phpstan] first"]


def test_collection_drops_empty_batches() -> None:
    collection = DiagnosticCollection()
    diagnostic = Diagnostic(file="/b.php", range=DiagnosticRange(line=1, start=0, end=1), message="x")
    collection.set("/b.php", [diagnostic])
    collection.set("/a.php", [diagnostic, diagnostic])

    assert collection.files() == ["/a.php", "/b.php"]
    assert len(collection) == 3

    collection.set("/a.php", [])
    assert collection.files() == ["/b.php"]
    assert list(collection) == [diagnostic]

    collection.clear()
    assert len(collection) == 0


def test_diagnostic_location_is_one_based() -> None:
    diagnostic = Diagnostic(file="/a.php", range=DiagnosticRange(line=4, start=3, end=10), message="m")

    assert diagnostic.location() == "/a.php:5:3-10"


def test_range_end_must_not_precede_start() -> None:
    with pytest.raises(ValidationError):
        DiagnosticRange(line=0, start=5, end=2)
