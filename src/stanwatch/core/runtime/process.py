# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; the wrapper normalises arguments and
# never enables ``shell=True``.
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper enforces safe execution.
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ...constants import TIMEOUT_RETURNCODE


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Exit status and both captured output streams of a finished process."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text, or empty when nothing was captured."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="replace")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Validated argument list with the executable resolved.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If a bare executable name is not on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> ProcessResult:
    """Execute ``args`` and capture stdout and stderr as separate streams.

    A process that outlives ``options.timeout`` is killed and reported with
    exit status ``124`` and a timeout note appended to its stderr.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory and timeout for the run.

    Returns:
        ProcessResult: Exit status and decoded output streams.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args)
    try:
        # Bandit: argv comes from the invocation builder; no shell expansion.
        completed = subprocess.run(  # nosec B603 - controlled arguments, not user supplied
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            check=False,
            capture_output=True,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
        result = ProcessResult(
            args=tuple(normalized),
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
            timed_out=True,
        )
    else:
        result = ProcessResult(
            args=tuple(normalized),
            returncode=completed.returncode,
            stdout=_ensure_text(completed.stdout),
            stderr=_ensure_text(completed.stderr),
        )

    return result


__all__ = [
    "CommandOptions",
    "ProcessResult",
    "run_command",
]
