# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from eslint_bridge.resolution.find_cache import clear_find_cache


@pytest.fixture(autouse=True)
def _fresh_find_cache() -> Iterator[None]:
    clear_find_cache()
    yield
    clear_find_cache()


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``Path.home`` at a scratch directory."""

    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home_dir)
    return home_dir


@pytest.fixture
def project(tmp_path: Path, home: Path) -> Path:
    """Return a project directory holding an ESLint configuration."""

    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / ".eslintrc.json").write_text("{}", encoding="utf-8")
    return root
