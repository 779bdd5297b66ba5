# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m eslint_bridge``."""

from __future__ import annotations

from .cli.app import main

# Spawned workers re-import this module as ``__mp_main__``.
if __name__ == "__main__":
    main()
