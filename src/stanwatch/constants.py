# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across stanwatch modules."""

from __future__ import annotations

import sys
from typing import Final

TOOL_NAME: Final[str] = "phpstan"
WINDOWS_TOOL_NAME: Final[str] = "phpstan.bat"
DEFAULT_EXECUTABLE: Final[str] = WINDOWS_TOOL_NAME if sys.platform == "win32" else TOOL_NAME

DIAGNOSTIC_PREFIX: Final[str] = "[phpstan] "
STATUS_PREFIX: Final[str] = "[phpstan]"

CONFIGURATION_FILENAMES: Final[tuple[str, ...]] = ("phpstan.neon", "phpstan.neon.dist")
AUTOLOAD_RELATIVE_PATH: Final[str] = "vendor/autoload.php"
LOCAL_BIN_DIR: Final[str] = "vendor/bin"

WORK_PATH_CANDIDATES: Final[tuple[str, ...]] = ("src", "source", "sources")
WORK_PATH_MARKERS: Final[tuple[str, ...]] = (*CONFIGURATION_FILENAMES, AUTOLOAD_RELATIVE_PATH)

PAYLOAD_MARKER: Final[str] = '{"totals":'

LEVEL_FROM_CONFIG: Final[str] = "config"
DEFAULT_LEVEL: Final[str] = "max"
DEFAULT_MEMORY_LIMIT: Final[str] = "256M"
DEFAULT_DEBOUNCE_SECONDS: Final[float] = 2.0
DEFAULT_TIMEOUT_SECONDS: Final[float] = 300.0
TIMEOUT_RETURNCODE: Final[int] = 124

PHP_LANGUAGE_ID: Final[str] = "php"

__all__ = [
    "AUTOLOAD_RELATIVE_PATH",
    "CONFIGURATION_FILENAMES",
    "DEFAULT_DEBOUNCE_SECONDS",
    "DEFAULT_EXECUTABLE",
    "DEFAULT_LEVEL",
    "DEFAULT_MEMORY_LIMIT",
    "DEFAULT_TIMEOUT_SECONDS",
    "DIAGNOSTIC_PREFIX",
    "LEVEL_FROM_CONFIG",
    "LOCAL_BIN_DIR",
    "PAYLOAD_MARKER",
    "PHP_LANGUAGE_ID",
    "STATUS_PREFIX",
    "TIMEOUT_RETURNCODE",
    "TOOL_NAME",
    "WINDOWS_TOOL_NAME",
    "WORK_PATH_CANDIDATES",
    "WORK_PATH_MARKERS",
]
