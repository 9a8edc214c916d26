# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for PHPStan command construction."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from stanwatch.config import AnalysisConfig
from stanwatch.invocation import (
    build_command_args,
    build_invocation,
    local_executable_name,
    resolve_executable,
)

TARGET = Path("/work/app/src/User.php")


def test_default_arguments_in_order() -> None:
    args = build_command_args(AnalysisConfig(path=TARGET))

    assert args == (
        "analyse",
        "--error-format=json",
        "--level=max",
        "--no-progress",
        "--memory-limit=256M",
        str(TARGET),
    )


def test_full_arguments_in_order() -> None:
    config = AnalysisConfig(
        level=7,
        memory_limit="1G",
        configuration=Path("/work/app/phpstan.neon"),
        autoload_file=Path("/work/app/vendor/autoload.php"),
        path=TARGET,
    )

    assert build_command_args(config) == (
        "analyse",
        "--error-format=json",
        "--level=7",
        "--no-progress",
        "--memory-limit=1G",
        "--configuration=/work/app/phpstan.neon",
        "--autoload-file=/work/app/vendor/autoload.php",
        str(TARGET),
    )


def test_level_config_defers_to_configuration_file() -> None:
    args = build_command_args(AnalysisConfig(level="config", path=TARGET))

    assert not any(arg.startswith("--level") for arg in args)


def test_missing_level_defaults_to_max() -> None:
    args = build_command_args(AnalysisConfig(level=None, path=TARGET))

    assert "--level=max" in args


def test_level_zero_is_passed_through() -> None:
    args = build_command_args(AnalysisConfig(level=0, path=TARGET))

    assert "--level=0" in args


def test_optional_flags_omitted() -> None:
    config = AnalysisConfig(no_progress=False, memory_limit="", path=TARGET)

    assert build_command_args(config) == ("analyse", "--error-format=json", "--level=max", str(TARGET))


def test_resolve_executable_defaults_without_local_binary(tmp_path: Path) -> None:
    assert resolve_executable(tmp_path, "phpstan") == "phpstan"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits required")
def test_resolve_executable_prefers_local_binary(tmp_path: Path) -> None:
    binary = tmp_path / "vendor" / "bin" / local_executable_name()
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\n", encoding="utf-8")
    binary.chmod(0o755)

    assert resolve_executable(tmp_path, "phpstan") == str(binary)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX symlinks required")
def test_resolve_executable_keeps_composer_symlink(tmp_path: Path) -> None:
    package_binary = tmp_path / "vendor" / "phpstan" / "phpstan" / "phpstan"
    package_binary.parent.mkdir(parents=True)
    package_binary.write_text("#!/bin/sh\n", encoding="utf-8")
    package_binary.chmod(0o755)
    link = tmp_path / "vendor" / "bin" / local_executable_name()
    link.parent.mkdir(parents=True)
    link.symlink_to(package_binary)

    assert resolve_executable(tmp_path, "phpstan") == str(link)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits required")
def test_resolve_executable_ignores_non_executable_binary(tmp_path: Path) -> None:
    binary = tmp_path / "vendor" / "bin" / local_executable_name()
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\n", encoding="utf-8")
    binary.chmod(0o644)

    assert resolve_executable(tmp_path, "phpstan") == "phpstan"


def test_build_invocation_uses_resolution(php_project: Path) -> None:
    target = php_project / "src" / "Domain" / "User.php"

    invocation = build_invocation(AnalysisConfig(), target)

    assert invocation.cwd == php_project
    assert invocation.executable == AnalysisConfig().executable
    assert invocation.args[-1] == str(target)
    assert f"--configuration={php_project / 'phpstan.neon'}" in invocation.args
    assert not any(arg.startswith("--autoload-file") for arg in invocation.args)
    assert invocation.argv[0] == invocation.executable


def test_build_invocation_does_not_mutate_config(php_project: Path) -> None:
    config = AnalysisConfig()

    build_invocation(config, php_project / "src")

    assert config.configuration is None
    assert config.path is None


def test_build_invocation_missing_target(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        build_invocation(AnalysisConfig(), tmp_path / "missing.php")
