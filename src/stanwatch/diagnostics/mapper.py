# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert PHPStan messages into ranged diagnostics.

PHPStan only reports line numbers. When the host can supply the live text of
that line the range is tightened to its non-whitespace content; otherwise the
diagnostic covers the first character of the line. Files other than the live
document are never read from disk.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ..constants import DIAGNOSTIC_PREFIX
from ..interfaces.host import DiagnosticSink, Document, LineSource
from ..models import AnalysisOutput, Diagnostic, DiagnosticRange, FileReport, Message


def same_file(left: str | Path, right: str | Path) -> bool:
    """Return ``True`` when both paths name the same absolute location."""

    return os.path.normcase(os.path.abspath(left)) == os.path.normcase(os.path.abspath(right))


class NullLineSource(LineSource):
    """Line source for hosts without live document access."""

    def line_text(self, path: str, line: int) -> str | None:
        del path, line
        return None


@dataclass(frozen=True, slots=True)
class DocumentLineSource(LineSource):
    """Serve lines from a single live document and nothing else."""

    document: Document | None

    def line_text(self, path: str, line: int) -> str | None:
        if self.document is None or not same_file(path, self.document.path):
            return None
        return self.document.line_at(line)


def line_index(message: Message) -> int:
    """Return the zero-based line for ``message``, ``0`` when it has none."""

    return max((message.line or 1) - 1, 0)


def fallback_range(line: int) -> DiagnosticRange:
    """Return the single-character range at column zero of ``line``."""

    return DiagnosticRange(line=line, start=0, end=1)


def compute_range(text: str | None, line: int) -> DiagnosticRange:
    """Return the span of ``text`` with surrounding whitespace trimmed.

    Args:
        text: Live text of the line, ``None`` when unavailable.
        line: Zero-based line index.

    Returns:
        DiagnosticRange: Tight range over the line's content, or the
        single-character fallback when the text is blank or missing.
    """

    if text is None:
        return fallback_range(line)
    content = text.rstrip("\r\n")
    end = len(content.rstrip())
    start = len(content) - len(content.lstrip())
    if end <= start:
        return fallback_range(line)
    return DiagnosticRange(line=line, start=start, end=end)


def map_message(path: str, message: Message, line_source: LineSource) -> Diagnostic:
    """Build the diagnostic for one reported ``message`` in ``path``."""

    line = line_index(message)
    return Diagnostic(
        file=path,
        range=compute_range(line_source.line_text(path, line), line),
        message=f"{DIAGNOSTIC_PREFIX}{message.message}",
    )


def map_file_report(path: str, report: FileReport, line_source: LineSource) -> list[Diagnostic]:
    """Build diagnostics for every message of ``report`` in reported order."""

    return [map_message(path, message, line_source) for message in report.messages]


def publish_diagnostics(
    output: AnalysisOutput,
    sink: DiagnosticSink,
    line_source: LineSource,
) -> Mapping[str, list[Diagnostic]]:
    """Replace the diagnostics of every file in ``output``.

    Each file's previous diagnostics are deleted before the new batch is
    written, so a file reported with no messages ends up empty.

    Args:
        output: Parsed PHPStan report.
        sink: Host storage receiving the diagnostics.
        line_source: Provider of live line text.

    Returns:
        Mapping[str, list[Diagnostic]]: Diagnostics written, keyed by file.
    """

    published: dict[str, list[Diagnostic]] = {}
    for path, report in output.files.items():
        sink.delete(path)
        diagnostics = map_file_report(path, report, line_source)
        sink.set(path, diagnostics)
        published[path] = diagnostics
    return published


__all__ = [
    "DocumentLineSource",
    "NullLineSource",
    "compute_range",
    "fallback_range",
    "line_index",
    "map_file_report",
    "map_message",
    "publish_diagnostics",
    "same_file",
]
