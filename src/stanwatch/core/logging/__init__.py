# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared logging helpers for user-facing console output."""

from __future__ import annotations

from .public import emoji, fail, info, ok, section, warn
from .setup import enable_debug_logging

__all__ = [
    "emoji",
    "enable_debug_logging",
    "fail",
    "info",
    "ok",
    "section",
    "warn",
]
