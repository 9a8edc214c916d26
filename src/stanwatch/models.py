# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models for PHPStan output and the diagnostics derived from it."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class Totals(BaseModel):
    """Aggregate counters from the ``totals`` object of a PHPStan report.

    ``errors`` counts general errors not bound to a file; ``file_errors``
    counts the issues reported against files.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    errors: int = 0
    file_errors: int = Field(default=0, validation_alias=AliasChoices("file_errors", "files"))


class Message(BaseModel):
    """A single issue reported against a file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str
    line: int | None = None
    ignorable: bool = False


class FileReport(BaseModel):
    """Issues reported for one file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    errors: int = Field(default=0, validation_alias=AliasChoices("errors", "error"))
    messages: tuple[Message, ...] = Field(default_factory=tuple)


class AnalysisOutput(BaseModel):
    """Structured PHPStan JSON report.

    Attributes:
        totals: Aggregate counters.
        files: Mapping of absolute file path to its report, in tool order.
        errors: General errors not bound to any file.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    totals: Totals
    files: dict[str, FileReport] = Field(default_factory=dict)
    errors: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("files", mode="before")
    @classmethod
    def _empty_files_array(cls, value: Any) -> Any:
        # PHP serialises an empty associative array as ``[]``.
        if isinstance(value, list) and not value:
            return {}
        return value

    @property
    def error_count(self) -> int:
        """Return the total number of errors, file-bound and general."""

        return self.totals.errors + self.totals.file_errors

    @property
    def message_count(self) -> int:
        """Return the number of file-bound messages in the report."""

        return sum(len(report.messages) for report in self.files.values())


class DiagnosticRange(BaseModel):
    """Zero-based, half-open column span on a single line."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> DiagnosticRange:
        if self.end < self.start:
            raise ValueError("range end must not precede its start")
        return self


class Diagnostic(BaseModel):
    """Renderable diagnostic handed to the host."""

    model_config = ConfigDict(frozen=True)

    file: str
    range: DiagnosticRange
    message: str

    def location(self) -> str:
        """Return a ``path:line:start-end`` label using one-based lines."""

        return f"{self.file}:{self.range.line + 1}:{self.range.start}-{self.range.end}"


__all__ = [
    "AnalysisOutput",
    "Diagnostic",
    "DiagnosticRange",
    "FileReport",
    "Message",
    "Totals",
]
