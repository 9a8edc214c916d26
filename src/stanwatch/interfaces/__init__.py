# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols describing collaborators outside the orchestration core."""

from __future__ import annotations

from .config import ConfigFragment, ConfigSource
from .host import AnalysisHost, DiagnosticSink, Document, LineSource

__all__ = [
    "AnalysisHost",
    "ConfigFragment",
    "ConfigSource",
    "DiagnosticSink",
    "Document",
    "LineSource",
]
