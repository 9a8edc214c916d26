# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m stanwatch``."""

from stanwatch.cli.app import main

if __name__ == "__main__":
    main()
