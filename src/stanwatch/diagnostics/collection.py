# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory diagnostic storage keyed by file."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from threading import Lock

from ..interfaces.host import DiagnosticSink
from ..models import Diagnostic


class DiagnosticCollection(DiagnosticSink):
    """Thread-safe, replace-all diagnostic store.

    Files with an empty batch are dropped entirely rather than kept as empty
    entries.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: dict[str, tuple[Diagnostic, ...]] = {}

    def delete(self, path: str) -> None:
        with self._lock:
            self._entries.pop(path, None)

    def set(self, path: str, diagnostics: Sequence[Diagnostic]) -> None:
        with self._lock:
            if diagnostics:
                self._entries[path] = tuple(diagnostics)
            else:
                self._entries.pop(path, None)

    def get(self, path: str) -> tuple[Diagnostic, ...]:
        """Return the diagnostics recorded for ``path``."""

        with self._lock:
            return self._entries.get(path, ())

    def clear(self) -> None:
        """Drop every recorded diagnostic."""

        with self._lock:
            self._entries.clear()

    def files(self) -> list[str]:
        """Return the paths that currently carry diagnostics, sorted."""

        with self._lock:
            return sorted(self._entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        with self._lock:
            snapshot = [self._entries[path] for path in sorted(self._entries)]
        for batch in snapshot:
            yield from batch

    def __len__(self) -> int:
        with self._lock:
            return sum(len(batch) for batch in self._entries.values())


__all__ = ["DiagnosticCollection"]
