# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def php_project(tmp_path: Path) -> Path:
    """Create a project with a configuration file, sources and an autoloader."""

    root = tmp_path / "project"
    (root / "src" / "Domain").mkdir(parents=True)
    (root / "vendor").mkdir()
    (root / "phpstan.neon").write_text("parameters:\n  level: 5\n", encoding="utf-8")
    (root / "vendor" / "autoload.php").write_text("<?php\n", encoding="utf-8")
    (root / "src" / "Domain" / "User.php").write_text(
        "<?php\n\nfunction greet() {\n    echo $name;   \n}\n",
        encoding="utf-8",
    )
    return root
