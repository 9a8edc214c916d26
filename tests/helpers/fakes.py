# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Test doubles for hosts, documents and process runners."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from threading import Event

from stanwatch.core.runtime.process import ProcessResult
from stanwatch.diagnostics.collection import DiagnosticCollection
from stanwatch.invocation import Invocation
from stanwatch.models import Diagnostic


@dataclass
class FakeDocument:
    """In-memory document standing in for the live editor buffer."""

    path: Path
    text: str = ""
    language_id: str = "php"

    def line_at(self, index: int) -> str | None:
        lines = self.text.splitlines()
        if 0 <= index < len(lines):
            return lines[index]
        return None


class RecordingCollection(DiagnosticCollection):
    """Diagnostic collection that also records the calls it receives."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, str, int]] = []

    def delete(self, path: str) -> None:
        self.calls.append(("delete", path, 0))
        super().delete(path)

    def set(self, path: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.calls.append(("set", path, len(diagnostics)))
        super().set(path, diagnostics)


@dataclass
class FakeHost:
    """Host double recording status, errors and diagnostics."""

    roots: list[Path] = field(default_factory=list)
    document: FakeDocument | None = None
    statuses: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    hidden: int = 0
    sink: RecordingCollection = field(default_factory=RecordingCollection)

    @property
    def diagnostics(self) -> RecordingCollection:
        return self.sink

    def show_status(self, text: str) -> None:
        self.statuses.append(text)

    def hide_status(self) -> None:
        self.hidden += 1

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def active_document(self) -> FakeDocument | None:
        return self.document

    def workspace_roots(self) -> list[Path]:
        return self.roots


class ScriptedRunner:
    """Process runner returning canned results, optionally blocking on a gate."""

    def __init__(self, *results: ProcessResult, gate: Event | None = None) -> None:
        self._results = list(results) or [make_result()]
        self.gate = gate
        self.calls: list[Invocation] = []
        self.timeouts: list[float | None] = []
        self.started = Event()

    def __call__(self, invocation: Invocation, timeout: float | None) -> ProcessResult:
        self.calls.append(invocation)
        self.timeouts.append(timeout)
        self.started.set()
        if self.gate is not None:
            self.gate.wait(5)
        if len(self._results) > 1:
            return self._results.pop(0)
        return self._results[0]


def make_result(returncode: int = 0, stdout: str = "", stderr: str = "", *, timed_out: bool = False) -> ProcessResult:
    """Build a :class:`ProcessResult` for a fake ``phpstan`` run."""

    return ProcessResult(
        args=("phpstan",),
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
        timed_out=timed_out,
    )


def report_json(files: dict[str, list[dict[str, object]]], *, errors: int = 0) -> str:
    """Return a PHPStan JSON report for ``files`` (path -> messages).

    ``errors`` is the count of general errors; ``file_errors`` is derived from
    the messages, as PHPStan reports it.
    """

    count = sum(len(messages) for messages in files.values())
    payload = {
        "totals": {"errors": errors, "file_errors": count},
        "files": {path: {"error": len(messages), "messages": messages} for path, messages in files.items()},
        "errors": [],
    }
    return json.dumps(payload)

