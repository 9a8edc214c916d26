# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers for locating PHPStan project layout."""

from __future__ import annotations

from .resolver import (
    ResolutionResult,
    TargetKind,
    down_find_real_work_path,
    get_current_work_path,
    resolve_target,
    target_kind,
    up_find_autoload_file,
    up_find_configuration,
)

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
