# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestration of debounced, single-flight PHPStan runs."""

from __future__ import annotations

from .debounce import Debouncer
from .orchestrator import AnalysisOrchestrator, ProcessRunner, error_status, run_invocation
from .outcome import ErrorReported, Failed, Outcome, OutcomeKind, Succeeded, Unknown, classify

__all__ = [
    "AnalysisOrchestrator",
    "Debouncer",
    "ErrorReported",
    "Failed",
    "Outcome",
    "OutcomeKind",
    "ProcessRunner",
    "Succeeded",
    "Unknown",
    "classify",
    "error_status",
    "run_invocation",
]
