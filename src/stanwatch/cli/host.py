# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Terminal implementation of the analysis host."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..constants import PHP_LANGUAGE_ID
from ..diagnostics.collection import DiagnosticCollection
from ..interfaces.host import AnalysisHost, Document
from .shared import CLILogger

_LANGUAGE_BY_SUFFIX = {".php": PHP_LANGUAGE_ID, ".phtml": PHP_LANGUAGE_ID}


@dataclass(slots=True)
class FileDocument(Document):
    """Document backed by a file on disk, read lazily on first line access."""

    file_path: Path
    _lines: list[str] | None = field(default=None, init=False, repr=False)

    @property
    def path(self) -> Path:
        return self.file_path

    @property
    def language_id(self) -> str:
        return _LANGUAGE_BY_SUFFIX.get(self.file_path.suffix.lower(), "plaintext")

    def line_at(self, index: int) -> str | None:
        if self._lines is None:
            try:
                self._lines = self.file_path.read_text(encoding="utf-8", errors="replace").splitlines()
            except OSError:
                self._lines = []
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None


class ConsoleHost(AnalysisHost):
    """Host for one-shot command-line runs.

    The explicit file target, when there is one, plays the role of the live
    document so its diagnostics get tight ranges.
    """

    def __init__(
        self,
        logger: CLILogger,
        *,
        roots: Sequence[Path],
        document: Document | None = None,
    ) -> None:
        self._logger = logger
        self._roots = tuple(roots)
        self._document = document
        self._diagnostics = DiagnosticCollection()
        self.status: str | None = None
        self.errors: list[str] = []

    @property
    def diagnostics(self) -> DiagnosticCollection:
        return self._diagnostics

    def show_status(self, text: str) -> None:
        self.status = text
        self._logger.debug(f"status={text!r}")

    def hide_status(self) -> None:
        self.status = None

    def show_error(self, message: str) -> None:
        self.errors.append(message)
        self._logger.fail(message.strip())

    def active_document(self) -> Document | None:
        return self._document

    def workspace_roots(self) -> Sequence[Path]:
        return self._roots


__all__ = ["ConsoleHost", "FileDocument"]
