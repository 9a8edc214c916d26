# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the stanwatch analysis orchestrator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_EXECUTABLE,
    DEFAULT_LEVEL,
    DEFAULT_MEMORY_LIMIT,
    DEFAULT_TIMEOUT_SECONDS,
    LEVEL_FROM_CONFIG,
    PHP_LANGUAGE_ID,
)


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


LevelValue = int | str | None


class AnalysisConfig(BaseModel):
    """Settings used to build a single PHPStan invocation.

    ``configuration`` and ``autoload_file`` double as resolution inputs: when
    either is supplied explicitly the filesystem search is skipped. ``level``
    accepts an integer, a level name such as ``"max"``, or ``"config"`` to
    defer to the level declared in the configuration file.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    autoload_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("autoload_file", "autoloadFile", "autoload-file"),
    )
    configuration: Path | None = None
    level: LevelValue = DEFAULT_LEVEL
    memory_limit: str | None = Field(
        default=DEFAULT_MEMORY_LIMIT,
        validation_alias=AliasChoices("memory_limit", "memoryLimit", "memory-limit"),
    )
    no_progress: bool = Field(
        default=True,
        validation_alias=AliasChoices("no_progress", "noProgress", "no-progress"),
    )
    path: Path | None = None
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    debounce: float = DEFAULT_DEBOUNCE_SECONDS
    executable: str = DEFAULT_EXECUTABLE
    languages: tuple[str, ...] = (PHP_LANGUAGE_ID,)

    @field_validator("level", mode="before")
    @classmethod
    def _normalise_level(cls, value: Any) -> LevelValue:
        """Coerce level input into an int, a trimmed name, or ``None``.

        Args:
            value: Raw level value supplied by a configuration source.

        Returns:
            LevelValue: Normalised level, ``None`` when the value is blank.

        Raises:
            ValueError: If the value is a negative number or an unsupported type.
        """

        if isinstance(value, bool):
            raise ValueError("level must be an integer or a string")
        if value is None:
            return None
        if isinstance(value, int):
            if value < 0:
                raise ValueError("level must be non-negative")
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            return int(stripped) if stripped.isdigit() else stripped
        raise ValueError("level must be an integer or a string")

    @field_validator("memory_limit", mode="before")
    @classmethod
    def _blank_memory_limit(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("timeout")
    @classmethod
    def _validate_timeout(cls, value: float | None) -> float | None:
        # Zero or negative timeouts disable the kill path.
        if value is not None and value <= 0:
            return None
        return value

    @field_validator("debounce")
    @classmethod
    def _validate_debounce(cls, value: float) -> float:
        if value < 0:
            raise ValueError("debounce must be non-negative")
        return value

    @property
    def defers_level(self) -> bool:
        """Return ``True`` when the level should come from the configuration file."""

        return isinstance(self.level, str) and self.level == LEVEL_FROM_CONFIG

    @property
    def has_explicit_paths(self) -> bool:
        """Return ``True`` when the caller supplied a configuration or autoload path."""

        return self.configuration is not None or self.autoload_file is not None


__all__ = ["AnalysisConfig", "ConfigError", "LevelValue"]
