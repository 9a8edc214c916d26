# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build PHPStan command lines from an :class:`AnalysisConfig`."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .config import AnalysisConfig
from .constants import DEFAULT_LEVEL, LOCAL_BIN_DIR, TOOL_NAME, WINDOWS_TOOL_NAME
from .filesystem.resolver import ResolutionResult, resolve_target


@dataclass(frozen=True, slots=True)
class Invocation:
    """Everything needed to spawn one PHPStan process.

    Attributes:
        executable: Local ``vendor/bin`` binary or the bare tool name.
        args: Arguments following the executable.
        cwd: Working directory, ``None`` to inherit the orchestrator's.
        target: File or directory being analysed.
        resolution: Resolver output the invocation was built from.
    """

    executable: str
    args: tuple[str, ...]
    cwd: Path | None
    target: Path
    resolution: ResolutionResult

    @property
    def argv(self) -> tuple[str, ...]:
        """Return the executable followed by its arguments."""

        return (self.executable, *self.args)


def build_command_args(config: AnalysisConfig) -> tuple[str, ...]:
    """Return the ordered PHPStan argument list for ``config``.

    ``config`` must already carry the resolved ``configuration`` and
    ``autoload_file`` values and the target ``path``.

    Args:
        config: Analysis settings with resolution applied.

    Returns:
        tuple[str, ...]: Arguments beginning with ``analyse`` and ending with
        the target path.
    """

    cmd = ["analyse", "--error-format=json"]
    if not config.defers_level:
        level = config.level if config.level is not None else DEFAULT_LEVEL
        cmd.append(f"--level={level}")
    if config.no_progress:
        cmd.append("--no-progress")
    if config.memory_limit:
        cmd.append(f"--memory-limit={config.memory_limit}")
    if config.configuration is not None:
        cmd.append(f"--configuration={config.configuration}")
    if config.autoload_file is not None:
        cmd.append(f"--autoload-file={config.autoload_file}")
    if config.path is not None:
        cmd.append(str(config.path))
    return tuple(cmd)


def local_executable_name() -> str:
    """Return the platform-specific file name of the project-local binary."""

    return WINDOWS_TOOL_NAME if sys.platform == "win32" else TOOL_NAME


def resolve_executable(cwd: Path | None, default: str) -> str:
    """Prefer ``<cwd>/vendor/bin/phpstan`` when present and executable.

    Args:
        cwd: Working directory chosen for the run; the process working
            directory is inspected when ``None``.
        default: Tool name resolved through ``PATH`` as the fallback.

    Returns:
        str: Absolute path of the local binary or ``default``.
    """

    base = cwd if cwd is not None else Path.cwd()
    binary = (base / LOCAL_BIN_DIR / local_executable_name()).absolute()
    if binary.is_file() and os.access(binary, os.X_OK):
        return str(binary)
    return default


def build_invocation(
    config: AnalysisConfig,
    target: Path,
    roots: Iterable[Path] = (),
) -> Invocation:
    """Resolve paths for ``target`` and assemble the full invocation.

    Args:
        config: Host-level analysis settings.
        target: File or directory to analyse.
        roots: Workspace folders used when explicit paths bypass the search.

    Returns:
        Invocation: Executable, arguments and working directory for the run.

    Raises:
        FileNotFoundError: If ``target`` does not exist.
    """

    absolute = target.absolute()
    resolution = resolve_target(config, absolute, roots)
    resolved_config = config.model_copy(
        update={
            "configuration": resolution.configuration,
            "autoload_file": resolution.autoload_file,
            "path": absolute,
        },
    )
    return Invocation(
        executable=resolve_executable(resolution.cwd, config.executable),
        args=build_command_args(resolved_config),
        cwd=resolution.cwd,
        target=absolute,
        resolution=resolution,
    )


__all__ = [
    "Invocation",
    "build_command_args",
    "build_invocation",
    "local_executable_name",
    "resolve_executable",
]
