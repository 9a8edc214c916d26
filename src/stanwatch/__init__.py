# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""stanwatch: debounced, single-flight PHPStan orchestration with ranged diagnostics."""

from __future__ import annotations

from .config import AnalysisConfig, ConfigError
from .config_loader import ConfigLoader, load_config
from .diagnostics import DiagnosticCollection, compute_range, publish_diagnostics
from .filesystem import (
    ResolutionResult,
    down_find_real_work_path,
    get_current_work_path,
    resolve_target,
    up_find_autoload_file,
    up_find_configuration,
)
from .invocation import Invocation, build_command_args, build_invocation, resolve_executable
from .models import AnalysisOutput, Diagnostic, DiagnosticRange, FileReport, Message, Totals
from .orchestration import AnalysisOrchestrator, Outcome, OutcomeKind, classify
from .parsers import MalformedOutputError, parse_output

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig",
    "AnalysisOrchestrator",
    "AnalysisOutput",
    "ConfigError",
    "ConfigLoader",
    "Diagnostic",
    "DiagnosticCollection",
    "DiagnosticRange",
    "FileReport",
    "Invocation",
    "MalformedOutputError",
    "Message",
    "Outcome",
    "OutcomeKind",
    "ResolutionResult",
    "Totals",
    "build_command_args",
    "build_invocation",
    "classify",
    "compute_range",
    "down_find_real_work_path",
    "get_current_work_path",
    "load_config",
    "parse_output",
    "publish_diagnostics",
    "resolve_executable",
    "resolve_target",
    "up_find_autoload_file",
    "up_find_configuration",
]
