# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interfaces the host editing environment must satisfy."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models import Diagnostic


@runtime_checkable
class Document(Protocol):
    """A document open in the host editor."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Return the absolute filesystem path backing the document."""

    @property
    @abstractmethod
    def language_id(self) -> str:
        """Return the host's language identifier, e.g. ``"php"``."""

    @abstractmethod
    def line_at(self, index: int) -> str | None:
        """Return the live text of zero-based line ``index``, ``None`` when out of range."""


@runtime_checkable
class LineSource(Protocol):
    """Provide the live text of a line, when the host has it."""

    @abstractmethod
    def line_text(self, path: str, line: int) -> str | None:
        """Return the text of zero-based ``line`` in ``path`` or ``None`` when unavailable."""


@runtime_checkable
class DiagnosticSink(Protocol):
    """Per-file, replace-all diagnostic storage owned by the host."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove every diagnostic recorded for ``path``."""

    @abstractmethod
    def set(self, path: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace the diagnostics recorded for ``path``."""


@runtime_checkable
class AnalysisHost(Protocol):
    """Status display, diagnostics and editor state exposed by the host."""

    @property
    @abstractmethod
    def diagnostics(self) -> DiagnosticSink:
        """Return the sink receiving published diagnostics."""

    @abstractmethod
    def show_status(self, text: str) -> None:
        """Display a short status string."""

    @abstractmethod
    def hide_status(self) -> None:
        """Hide the status display."""

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Surface an error message to the user."""

    @abstractmethod
    def active_document(self) -> Document | None:
        """Return the document in the focused editor, if any."""

    @abstractmethod
    def workspace_roots(self) -> Sequence[Path]:
        """Return the workspace folders currently open."""


__all__ = ["AnalysisHost", "DiagnosticSink", "Document", "LineSource"]
