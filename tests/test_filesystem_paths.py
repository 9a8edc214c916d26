# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration, autoload and work-path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from stanwatch.config import AnalysisConfig
from stanwatch.filesystem import (
    ResolutionResult,
    TargetKind,
    down_find_real_work_path,
    get_current_work_path,
    resolve_target,
    target_kind,
    up_find_autoload_file,
    up_find_configuration,
)


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def test_up_find_configuration_walks_to_ancestor(tmp_path: Path) -> None:
    config = _touch(tmp_path / "root" / "phpstan.neon")
    base = tmp_path / "root" / "a" / "b"
    base.mkdir(parents=True)

    assert up_find_configuration(base) == config


def test_up_find_configuration_prefers_neon_over_dist(tmp_path: Path) -> None:
    neon = _touch(tmp_path / "phpstan.neon")
    _touch(tmp_path / "phpstan.neon.dist")

    assert up_find_configuration(tmp_path) == neon


def test_up_find_configuration_nearest_directory_wins(tmp_path: Path) -> None:
    _touch(tmp_path / "root" / "phpstan.neon")
    nearer = _touch(tmp_path / "root" / "a" / "phpstan.neon.dist")
    base = tmp_path / "root" / "a" / "b"
    base.mkdir(parents=True)

    assert up_find_configuration(base) == nearer


def test_up_find_configuration_stops_at_filesystem_root(tmp_path: Path) -> None:
    base = tmp_path / "nothing" / "here"
    base.mkdir(parents=True)

    assert up_find_configuration(base) is None
    assert up_find_configuration(Path(tmp_path.anchor)) is None


def test_up_find_autoload_file(tmp_path: Path) -> None:
    autoload = _touch(tmp_path / "app" / "vendor" / "autoload.php")
    base = tmp_path / "app" / "src" / "Http"
    base.mkdir(parents=True)

    assert up_find_autoload_file(base) == autoload


def test_down_find_real_work_path_checks_candidates_in_order(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    _touch(tmp_path / "source" / "phpstan.neon.dist")
    _touch(tmp_path / "sources" / "vendor" / "autoload.php")

    assert down_find_real_work_path(tmp_path) == tmp_path / "source"


def test_down_find_real_work_path_accepts_autoload_marker(tmp_path: Path) -> None:
    _touch(tmp_path / "sources" / "vendor" / "autoload.php")

    assert down_find_real_work_path(tmp_path) == tmp_path / "sources"


def test_down_find_real_work_path_without_markers(tmp_path: Path) -> None:
    _touch(tmp_path / "src" / "index.php")

    assert down_find_real_work_path(tmp_path) is None


def test_get_current_work_path_prefers_longest_root(tmp_path: Path) -> None:
    outer = tmp_path / "ws"
    inner = outer / "packages" / "core"
    base = inner / "src"
    base.mkdir(parents=True)

    assert get_current_work_path(base, [outer, inner]) == inner
    assert get_current_work_path(base, [inner, outer]) == inner


def test_get_current_work_path_matches_whole_components(tmp_path: Path) -> None:
    root = tmp_path / "app"
    sibling = tmp_path / "application" / "src"
    sibling.mkdir(parents=True)

    assert get_current_work_path(sibling, [root]) is None


def test_target_kind(tmp_path: Path) -> None:
    file_path = _touch(tmp_path / "index.php")

    assert target_kind(file_path) is TargetKind.FILE
    assert target_kind(tmp_path) is TargetKind.DIRECTORY
    assert target_kind(tmp_path / "missing.php") is None


def test_resolve_target_uses_configuration_directory(php_project: Path) -> None:
    target = php_project / "src" / "Domain" / "User.php"

    result = resolve_target(AnalysisConfig(), target)

    assert result == ResolutionResult(configuration=php_project / "phpstan.neon", cwd=php_project)


def test_resolve_target_falls_back_to_autoload(tmp_path: Path) -> None:
    autoload = _touch(tmp_path / "app" / "vendor" / "autoload.php")
    target = _touch(tmp_path / "app" / "src" / "index.php")

    result = resolve_target(AnalysisConfig(), target)

    assert result.configuration is None
    assert result.autoload_file == autoload
    assert result.cwd == tmp_path / "app"


def test_resolve_target_directory_probes_source_dirs(tmp_path: Path) -> None:
    _touch(tmp_path / "repo" / "src" / "phpstan.neon")

    result = resolve_target(AnalysisConfig(), tmp_path / "repo")

    assert result == ResolutionResult(cwd=tmp_path / "repo" / "src")


def test_resolve_target_file_without_markers(tmp_path: Path) -> None:
    target = _touch(tmp_path / "loose" / "script.php")

    assert resolve_target(AnalysisConfig(), target) == ResolutionResult()


def test_resolve_target_explicit_paths_skip_search(php_project: Path, tmp_path: Path) -> None:
    explicit = _touch(tmp_path / "custom.neon")
    target = php_project / "src" / "Domain" / "User.php"
    config = AnalysisConfig(configuration=explicit)

    result = resolve_target(config, target, [tmp_path, php_project])

    assert result.configuration == explicit
    assert result.autoload_file is None
    assert result.cwd == php_project


def test_resolve_target_explicit_paths_outside_roots(php_project: Path, tmp_path: Path) -> None:
    explicit = _touch(tmp_path / "bootstrap.php")
    config = AnalysisConfig(autoload_file=explicit)

    result = resolve_target(config, php_project / "src", [tmp_path / "elsewhere"])

    assert result == ResolutionResult(autoload_file=explicit, cwd=None)


def test_resolve_target_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        resolve_target(AnalysisConfig(), tmp_path / "gone.php")
