# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers for spawning external processes."""

from .process import CommandOptions, ProcessResult, run_command

__all__ = [
    "CommandOptions",
    "ProcessResult",
    "run_command",
]
