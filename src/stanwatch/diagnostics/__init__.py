# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic mapping and storage."""

from __future__ import annotations

from .collection import DiagnosticCollection
from .mapper import (
    DocumentLineSource,
    NullLineSource,
    compute_range,
    fallback_range,
    line_index,
    map_file_report,
    map_message,
    publish_diagnostics,
    same_file,
)

__all__ = [
    "DiagnosticCollection",
    "DocumentLineSource",
    "NullLineSource",
    "compute_range",
    "fallback_range",
    "line_index",
    "map_file_report",
    "map_message",
    "publish_diagnostics",
    "same_file",
]
