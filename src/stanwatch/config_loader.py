# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence.

Sources are applied in order (defaults, ``[tool.stanwatch]`` in
``pyproject.toml``, ``.stanwatch.toml``, then caller overrides) and later
sources win key by key. Keys may be spelled in snake_case, kebab-case or the
camelCase used by editor settings; they are canonicalised before merging so a
later ``memoryLimit`` replaces an earlier ``memory_limit``.
"""

from __future__ import annotations

import copy
import os
import re
import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import AnalysisConfig, ConfigError
from .interfaces.config import ConfigFragment, ConfigSource

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILENAME: Final[str] = ".stanwatch.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "stanwatch"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")

_KEY_ALIASES: Final[dict[str, str]] = {
    "autoloadFile": "autoload_file",
    "autoload-file": "autoload_file",
    "memoryLimit": "memory_limit",
    "memory-limit": "memory_limit",
    "noProgress": "no_progress",
    "no-progress": "no_progress",
}
_PATH_KEYS: Final[frozenset[str]] = frozenset({"autoload_file", "configuration"})

_TOML_CACHE: dict[tuple[Path, int], Mapping[str, Any]] = {}


def canonical_key(key: str) -> str:
    """Return the canonical snake_case spelling for a configuration key."""

    return _KEY_ALIASES.get(key, key.replace("-", "_"))


def _canonicalise(data: Mapping[str, Any]) -> dict[str, Any]:
    return {canonical_key(str(key)): value for key, value in data.items()}


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: _lookup_env(match, env), value)
    if isinstance(value, list):
        return [_expand_env_value(item, env) for item in value]
    return value


def _lookup_env(match: re.Match[str], env: Mapping[str, str]) -> str:
    key = match.group(1) or match.group(2)
    if key is None:
        return match.group(0)
    return env.get(key, match.group(0))


def _anchor_paths(data: Mapping[str, Any], base_dir: Path) -> dict[str, Any]:
    """Resolve relative path values against ``base_dir``."""

    anchored = dict(data)
    for key in _PATH_KEYS:
        value = anchored.get(key)
        if isinstance(value, str) and value.strip():
            candidate = Path(value).expanduser()
            anchored[key] = candidate if candidate.is_absolute() else base_dir / candidate
    return anchored


def _read_toml(path: Path) -> Mapping[str, Any]:
    resolved = path.resolve()
    stat = resolved.stat()
    cache_key = (resolved, stat.st_mtime_ns)
    if cached := _TOML_CACHE.get(cache_key):
        return copy.deepcopy(cached)
    try:
        with resolved.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    _TOML_CACHE[cache_key] = copy.deepcopy(data)
    return data


class DefaultConfigSource(ConfigSource):
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> ConfigFragment:
        return AnalysisConfig().model_dump()

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource(ConfigSource):
    """Load configuration data from a standalone TOML document."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._path = path
        self.name = name or str(path)
        self._env = env if env is not None else os.environ

    def load(self) -> ConfigFragment:
        if not self._path.is_file():
            return {}
        data = self._select(_read_toml(self._path))
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self._path} must be a table")
        expanded = _expand_env(_canonicalise(data), self._env)
        return _anchor_paths(expanded, self._path.parent)

    def _select(self, document: Mapping[str, Any]) -> Any:
        return dict(document)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.stanwatch]`` within ``pyproject.toml``."""

    def _select(self, document: Mapping[str, Any]) -> Any:
        tool_section = document.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if section is None:
            return {}
        return dict(section) if isinstance(section, Mapping) else section

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


@dataclass(slots=True)
class ConfigLoadResult:
    """Container bundling a resolved config with the sources that shaped it."""

    config: AnalysisConfig
    sources: list[str] = field(default_factory=list)


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(cls, project_root: Path, *, project_config: Path | None = None) -> ConfigLoader:
        """Build a loader that respects defaults, pyproject and project files.

        Args:
            project_root: Directory searched for ``pyproject.toml`` and ``.stanwatch.toml``.
            project_config: Optional explicit TOML file used instead of ``.stanwatch.toml``.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        return cls(
            sources=[
                DefaultConfigSource(),
                PyProjectConfigSource(root / PYPROJECT_FILENAME),
                TomlConfigSource(project_config or root / PROJECT_CONFIG_FILENAME),
            ],
        )

    def load_with_trace(self, overrides: Mapping[str, Any] | None = None) -> ConfigLoadResult:
        """Merge every source plus ``overrides`` into a validated configuration.

        Args:
            overrides: Highest-precedence values, typically from CLI flags.
                ``None`` entries are ignored so unset flags do not mask files.

        Returns:
            ConfigLoadResult: Validated configuration and contributing sources.

        Raises:
            ConfigError: If a source is malformed or the merged data fails validation.
        """

        merged: dict[str, Any] = {}
        applied: list[str] = []
        for source in self._sources:
            fragment = source.load()
            if fragment:
                merged.update(_canonicalise(fragment))
                applied.append(source.describe())
        if overrides:
            explicit = {key: value for key, value in _canonicalise(overrides).items() if value is not None}
            if explicit:
                merged.update(explicit)
                applied.append("Command-line overrides")
        try:
            config = AnalysisConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
        return ConfigLoadResult(config=config, sources=applied)

    def load(self, overrides: Mapping[str, Any] | None = None) -> AnalysisConfig:
        """Return the merged configuration, discarding provenance."""

        return self.load_with_trace(overrides).config


def load_config(project_root: Path, overrides: Mapping[str, Any] | None = None) -> AnalysisConfig:
    """Return the configuration for ``project_root`` with ``overrides`` applied."""

    return ConfigLoader.for_root(project_root).load(overrides)


__all__ = [
    "ConfigLoadResult",
    "ConfigLoader",
    "DefaultConfigSource",
    "PROJECT_CONFIG_FILENAME",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "canonical_key",
    "load_config",
]
