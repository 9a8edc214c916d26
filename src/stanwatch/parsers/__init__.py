# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers that convert PHPStan output into structured reports."""

from __future__ import annotations

from .phpstan import MalformedOutputError, extract_payload, parse_output

__all__ = ["MalformedOutputError", "extract_payload", "parse_output"]
