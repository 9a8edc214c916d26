# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classification of finished PHPStan runs.

A run ends in exactly one of four outcomes, chosen by strict precedence:

1. exit status ``0`` is :class:`Succeeded`, whatever was printed;
2. a non-zero status with stderr text is :class:`Failed`;
3. a non-zero status with only stdout is :class:`ErrorReported` when the
   report parses, :class:`Unknown` when it does not;
4. anything else is :class:`Unknown`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from ..core.runtime.process import ProcessResult
from ..models import AnalysisOutput
from ..parsers.phpstan import MalformedOutputError, parse_output


class OutcomeKind(str, Enum):
    """Enumerate high level categories for analyser exit behaviour."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERROR_REPORTED = "error_reported"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Succeeded:
    """PHPStan exited cleanly."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.SUCCEEDED


@dataclass(frozen=True, slots=True)
class Failed:
    """PHPStan could not run; ``message`` is its stderr text."""

    message: str
    kind: ClassVar[OutcomeKind] = OutcomeKind.FAILED


@dataclass(frozen=True, slots=True)
class ErrorReported:
    """PHPStan ran and reported issues."""

    output: AnalysisOutput
    kind: ClassVar[OutcomeKind] = OutcomeKind.ERROR_REPORTED


@dataclass(frozen=True, slots=True)
class Unknown:
    """The run ended in a way that could not be interpreted.

    Attributes:
        raw: Captured stdout, kept for diagnosis.
        reason: Parser error message when a report was expected.
    """

    raw: str = ""
    reason: str | None = None
    kind: ClassVar[OutcomeKind] = OutcomeKind.UNKNOWN


Outcome = Succeeded | Failed | ErrorReported | Unknown


def classify(result: ProcessResult) -> Outcome:
    """Return the outcome for a finished process.

    Args:
        result: Exit status and captured streams of the PHPStan process.

    Returns:
        Outcome: Exactly one of the four outcome variants.
    """

    if result.returncode == 0:
        return Succeeded()
    if result.stderr:
        return Failed(message=result.stderr)
    if result.stdout:
        try:
            return ErrorReported(output=parse_output(result.stdout))
        except MalformedOutputError as exc:
            return Unknown(raw=exc.raw, reason=str(exc))
    return Unknown()


__all__ = [
    "ErrorReported",
    "Failed",
    "Outcome",
    "OutcomeKind",
    "Succeeded",
    "Unknown",
    "classify",
]
