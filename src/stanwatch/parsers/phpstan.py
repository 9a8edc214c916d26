# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse PHPStan ``--error-format=json`` output.

PHPStan and its bootstrap code may print banners or deprecation notices
before the report, so the payload is located by its ``{"totals":`` prefix and
everything before it is discarded.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from ..constants import PAYLOAD_MARKER
from ..models import AnalysisOutput


class MalformedOutputError(ValueError):
    """Raised when captured output does not hold a usable PHPStan report."""

    def __init__(self, message: str, *, raw: str) -> None:
        """Initialise the error with the captured text for later logging.

        Args:
            message: Short description of the failure.
            raw: Complete captured standard output.
        """

        super().__init__(message)
        self.raw = raw


def extract_payload(text: str) -> str:
    """Return ``text`` from the first ``{"totals":`` onwards.

    Args:
        text: Raw captured standard output.

    Returns:
        str: Substring starting at the report object.

    Raises:
        MalformedOutputError: If the marker is absent.
    """

    index = text.find(PAYLOAD_MARKER)
    if index < 0:
        raise MalformedOutputError("no PHPStan JSON report found in output", raw=text)
    return text[index:]


def parse_output(text: str) -> AnalysisOutput:
    """Parse captured standard output into an :class:`AnalysisOutput`.

    Text before the report is ignored, as is anything following the closing
    brace of the report object.

    Args:
        text: Raw captured standard output.

    Returns:
        AnalysisOutput: Validated report.

    Raises:
        MalformedOutputError: If no report is present, the JSON is invalid, or
            the decoded object does not match the report shape.
    """

    payload = extract_payload(text)
    try:
        document, _end = json.JSONDecoder().raw_decode(payload)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(f"invalid PHPStan JSON report: {exc}", raw=text) from exc
    try:
        return AnalysisOutput.model_validate(document)
    except ValidationError as exc:
        raise MalformedOutputError(f"unexpected PHPStan report shape: {exc}", raw=text) from exc


__all__ = ["MalformedOutputError", "extract_payload", "parse_output"]
