# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Locate PHPStan configuration, autoload files and project roots.

Every helper here is a pure existence check against the filesystem: no file is
opened or parsed. Upward searches stop once ``Path.parent`` stops changing,
which is how the filesystem root is detected on every platform.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path

from ..config import AnalysisConfig
from ..constants import (
    AUTOLOAD_RELATIVE_PATH,
    CONFIGURATION_FILENAMES,
    WORK_PATH_CANDIDATES,
    WORK_PATH_MARKERS,
)

_Pathish = str | PathLike[str] | Path


class TargetKind(str, Enum):
    """Enumerate the kinds of analysis target the resolver understands."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Describe where and how PHPStan should run for a single target.

    Attributes:
        configuration: Configuration file passed via ``--configuration``.
        autoload_file: Bootstrap file passed via ``--autoload-file``.
        cwd: Working directory for the subprocess, ``None`` to inherit ours.
    """

    configuration: Path | None = None
    autoload_file: Path | None = None
    cwd: Path | None = None


def target_kind(target: _Pathish) -> TargetKind | None:
    """Return whether ``target`` is a file, a directory, or neither."""

    path = Path(target)
    if path.is_file():
        return TargetKind.FILE
    if path.is_dir():
        return TargetKind.DIRECTORY
    return None


def _ascend(base: _Pathish) -> Iterable[Path]:
    """Yield ``base`` and each of its ancestors up to the filesystem root."""

    current = Path(base).absolute()
    while True:
        yield current
        parent = current.parent
        if parent == current:
            return
        current = parent


def _up_find(base: _Pathish, names: Sequence[str]) -> Path | None:
    for directory in _ascend(base):
        for name in names:
            candidate = directory / name
            if candidate.exists():
                return candidate
    return None


def up_find_configuration(base: _Pathish) -> Path | None:
    """Return the nearest PHPStan configuration file at or above ``base``.

    ``phpstan.neon`` wins over ``phpstan.neon.dist`` within the same
    directory; both are checked before moving to the parent.

    Args:
        base: Directory where the search starts.

    Returns:
        Path | None: Path of the first configuration file found, ``None`` when
        the filesystem root is reached without a match.
    """

    return _up_find(base, CONFIGURATION_FILENAMES)


def up_find_autoload_file(base: _Pathish) -> Path | None:
    """Return the nearest ``vendor/autoload.php`` at or above ``base``."""

    return _up_find(base, (AUTOLOAD_RELATIVE_PATH,))


def down_find_real_work_path(base: _Pathish) -> Path | None:
    """Return the first source subdirectory of ``base`` that looks like a project.

    Candidates (``src``, ``source``, ``sources``) are tried in order; a
    candidate qualifies when it directly contains a configuration file or
    ``vendor/autoload.php``.

    Args:
        base: Directory selected by the user for analysis.

    Returns:
        Path | None: Qualifying subdirectory, ``None`` when no candidate matches.
    """

    root = Path(base).absolute()
    for name in WORK_PATH_CANDIDATES:
        work_path = root / name
        if not work_path.exists():
            continue
        if any((work_path / marker).exists() for marker in WORK_PATH_MARKERS):
            return work_path
    return None


def get_current_work_path(base: _Pathish, roots: Iterable[_Pathish]) -> Path | None:
    """Return the deepest workspace root containing ``base``.

    Args:
        base: Directory derived from the analysis target.
        roots: Workspace folders currently open in the host.

    Returns:
        Path | None: Longest matching root, ``None`` when ``base`` lies outside
        every root.
    """

    target = Path(base).absolute()
    best: Path | None = None
    for raw_root in roots:
        root = Path(raw_root).absolute()
        if not target.is_relative_to(root):
            continue
        if best is None or len(root.parts) > len(best.parts):
            best = root
    return best


def resolve_target(
    config: AnalysisConfig,
    target: _Pathish,
    roots: Iterable[_Pathish] = (),
) -> ResolutionResult:
    """Resolve configuration, autoload file and working directory for ``target``.

    Explicit ``configuration``/``autoload_file`` settings bypass the search and
    the working directory becomes the enclosing workspace root. Otherwise the
    configuration search runs first, then the autoload search, then (for
    directory targets only) the downward source-directory probe.

    Args:
        config: Analysis settings supplied by the host.
        target: File or directory being analysed.
        roots: Workspace folders used when explicit paths are configured.

    Returns:
        ResolutionResult: Resolved paths; ``cwd`` may be ``None``.

    Raises:
        FileNotFoundError: If ``target`` is neither a file nor a directory.
    """

    path = Path(target).absolute()
    kind = target_kind(path)
    if kind is None:
        raise FileNotFoundError(f"Analysis target does not exist: {path}")
    base = path.parent if kind is TargetKind.FILE else path

    if config.has_explicit_paths:
        return ResolutionResult(
            configuration=config.configuration,
            autoload_file=config.autoload_file,
            cwd=get_current_work_path(base, roots),
        )

    configuration = up_find_configuration(base)
    if configuration is not None:
        return ResolutionResult(configuration=configuration, cwd=configuration.parent)

    autoload_file = up_find_autoload_file(base)
    if autoload_file is not None:
        # vendor/autoload.php lives one level below the project root.
        return ResolutionResult(autoload_file=autoload_file, cwd=autoload_file.parent.parent)

    if kind is TargetKind.DIRECTORY:
        return ResolutionResult(cwd=down_find_real_work_path(base))
    return ResolutionResult()


__all__ = [
    "ResolutionResult",
    "TargetKind",
    "down_find_real_work_path",
    "get_current_work_path",
    "resolve_target",
    "target_kind",
    "up_find_autoload_file",
    "up_find_configuration",
]
