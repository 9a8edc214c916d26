# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Developer logging configuration for the ``stanwatch`` logger tree."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER_NAME = "stanwatch"


def enable_debug_logging() -> logging.Logger:
    """Stream ``stanwatch.*`` debug records to stderr.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if getattr(logger, "_stanwatch_verbose_configured", False):
        return logger
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_stanwatch_verbose_configured", True)
    return logger


__all__ = ["PACKAGE_LOGGER_NAME", "enable_debug_logging"]
