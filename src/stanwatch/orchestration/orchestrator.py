# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single-flight orchestration of PHPStan runs for an editor host.

The orchestrator owns the only mutable state of the engine: a lock-guarded
"analysis in progress" flag and the debouncer for implicit triggers. At most
one PHPStan process is in flight; requests arriving meanwhile are dropped, not
queued, and a running process is never cancelled by a new trigger. The flag is
released whenever a run finishes, whatever its outcome.
"""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from threading import Event, Lock, Thread
from typing import Final, Protocol

from ..config import AnalysisConfig
from ..constants import STATUS_PREFIX
from ..core.runtime.process import CommandOptions, ProcessResult, run_command
from ..diagnostics.mapper import DocumentLineSource, publish_diagnostics
from ..filesystem.resolver import TargetKind, target_kind
from ..interfaces.host import AnalysisHost, Document
from ..invocation import Invocation, build_invocation
from .debounce import Debouncer
from .outcome import ErrorReported, Failed, Outcome, Succeeded, Unknown, classify

LOGGER = logging.getLogger(__name__)

STATUS_ANALYSING: Final[str] = f"{STATUS_PREFIX} analysing..."
STATUS_PASSED: Final[str] = f"{STATUS_PREFIX} passed"
STATUS_FAILED: Final[str] = f"{STATUS_PREFIX} failed"
STATUS_UNKNOWN: Final[str] = f"{STATUS_PREFIX} unknown"


def error_status(count: int) -> str:
    """Return the status line for a run that reported ``count`` errors."""

    return f"{STATUS_PREFIX} error {count}"


class ProcessRunner(Protocol):
    """Callable that runs an invocation to completion."""

    def __call__(self, invocation: Invocation, timeout: float | None) -> ProcessResult:
        """Run ``invocation`` and return its exit status and output streams."""


def run_invocation(invocation: Invocation, timeout: float | None) -> ProcessResult:
    """Run ``invocation`` with the hardened subprocess wrapper."""

    return run_command(invocation.argv, options=CommandOptions(cwd=invocation.cwd, timeout=timeout))


class AnalysisOrchestrator:
    """Coordinate triggers, PHPStan processes and diagnostic publication.

    Construct one instance per host session and call :meth:`close` when the
    session ends.
    """

    def __init__(
        self,
        host: AnalysisHost,
        config: AnalysisConfig | None = None,
        *,
        runner: ProcessRunner | None = None,
    ) -> None:
        """Initialise the orchestrator.

        Args:
            host: Editor host receiving status, errors and diagnostics.
            config: Initial analysis settings; defaults apply when omitted.
            runner: Process runner, replaceable for hosts with their own
                spawning facilities.
        """

        self._host = host
        self._config = config or AnalysisConfig()
        self._runner: ProcessRunner = runner or run_invocation
        self._lock = Lock()
        self._running = False
        self._closed = False
        self._idle = Event()
        self._idle.set()
        self._last_outcome: Outcome | None = None
        self._debouncer: Debouncer[Document | None] = Debouncer(self.analyse_document, self._config.debounce)

    @property
    def config(self) -> AnalysisConfig:
        """Return the active analysis settings."""

        return self._config

    @property
    def is_running(self) -> bool:
        """Return ``True`` while a PHPStan process is in flight."""

        with self._lock:
            return self._running

    @property
    def last_outcome(self) -> Outcome | None:
        """Return the outcome of the most recently finished run."""

        return self._last_outcome

    def reload_config(self, config: AnalysisConfig) -> None:
        """Apply settings from a configuration-change notification.

        The new settings take effect for the next run; a run in flight keeps
        the settings it started with.
        """

        self._config = config
        self._debouncer.wait = config.debounce

    # Implicit triggers -------------------------------------------------

    def request_analysis(self, document: Document | None = None) -> None:
        """Debounce a request to analyse ``document`` or the active document."""

        if not self._closed:
            self._debouncer.trigger(document)

    def on_document_saved(self, document: Document | None = None) -> None:
        self.request_analysis(document)

    def on_document_opened(self, document: Document | None = None) -> None:
        self.request_analysis(document)

    def on_selection_changed(self) -> None:
        self.request_analysis()

    def on_window_state_changed(self) -> None:
        self.request_analysis()

    # Explicit commands -------------------------------------------------

    def analyse_document(self, document: Document | None = None) -> bool:
        """Analyse ``document`` (or the active one) when its language qualifies.

        Args:
            document: Document to analyse; the active document when ``None``.

        Returns:
            bool: ``True`` when a PHPStan process was started.
        """

        if document is None:
            document = self._host.active_document()
            if document is None:
                return False
        if document.language_id not in self._config.languages:
            self._host.hide_status()
            return False
        return self.analyse(document.path)

    def analyse_file(self, target: str | PathLike[str] | Document | None = None) -> bool:
        """Analyse an explicit file path, a document, or the active document."""

        if isinstance(target, (str, PathLike)):
            return self.analyse(Path(target))
        return self.analyse_document(target)

    def analyse_folder(self, folder: Path | None = None) -> bool:
        """Analyse ``folder`` or, when omitted, the active document's directory."""

        if folder is not None:
            return self.analyse(folder)
        document = self._host.active_document()
        if document is None:
            self._host.hide_status()
            return False
        return self.analyse(document.path.parent)

    # Core --------------------------------------------------------------

    def analyse(self, target: Path) -> bool:
        """Start a PHPStan run for ``target`` unless one is already in flight.

        Args:
            target: File or directory to analyse.

        Returns:
            bool: ``True`` when a process was started, ``False`` when the
            request was dropped.
        """

        path = Path(target).absolute()
        kind = target_kind(path)
        if kind is None:
            LOGGER.debug("analysis target %s is neither a file nor a directory", path)
            self._host.hide_status()
            return False

        with self._lock:
            if self._closed or self._running:
                LOGGER.debug("analysis in progress; dropping request for %s", path)
                return False
            self._running = True
            self._idle.clear()

        config = self._config
        try:
            self._host.show_status(STATUS_ANALYSING)
            if kind is TargetKind.FILE:
                self._host.diagnostics.delete(str(path))
            invocation = build_invocation(config, path, self._host.workspace_roots())
        except BaseException:
            self._release()
            raise

        LOGGER.debug("running %s (cwd=%s)", " ".join(invocation.argv), invocation.cwd)
        worker = Thread(
            target=self._execute,
            args=(invocation, config.timeout),
            name="stanwatch-analysis",
            daemon=True,
        )
        worker.start()
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no run is in flight.

        Returns:
            bool: ``False`` when ``timeout`` elapsed first.
        """

        return self._idle.wait(timeout)

    def close(self) -> None:
        """Stop accepting triggers and drop any pending debounced request."""

        with self._lock:
            self._closed = True
        self._debouncer.cancel()

    def __enter__(self) -> AnalysisOrchestrator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _execute(self, invocation: Invocation, timeout: float | None) -> None:
        try:
            try:
                result = self._runner(invocation, timeout)
            except OSError as exc:
                outcome: Outcome = Failed(message=str(exc))
            else:
                if result.timed_out:
                    LOGGER.error("%s timed out after %ss and was killed", invocation.executable, timeout)
                outcome = classify(result)
            self._last_outcome = outcome
            self._report(outcome)
        finally:
            self._release()

    def _release(self) -> None:
        with self._lock:
            self._running = False
        self._idle.set()

    def _report(self, outcome: Outcome) -> None:
        match outcome:
            case Succeeded():
                self._host.show_status(STATUS_PASSED)
            case Failed(message=message):
                LOGGER.error("%s failed: %s", STATUS_PREFIX, message)
                self._host.show_error(message)
                self._host.show_status(STATUS_FAILED)
            case ErrorReported(output=output):
                line_source = DocumentLineSource(self._host.active_document())
                publish_diagnostics(output, self._host.diagnostics, line_source)
                self._host.show_status(error_status(output.error_count))
            case Unknown(raw=raw, reason=reason):
                if reason is not None:
                    LOGGER.warning("%s unparseable output (%s): %s", STATUS_PREFIX, reason, raw)
                self._host.show_status(STATUS_UNKNOWN)


__all__ = [
    "AnalysisOrchestrator",
    "ProcessRunner",
    "STATUS_ANALYSING",
    "STATUS_FAILED",
    "STATUS_PASSED",
    "STATUS_UNKNOWN",
    "error_status",
    "run_invocation",
]
