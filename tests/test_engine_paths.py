# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the path and working directory handed to ESLint."""

from __future__ import annotations

from pathlib import Path

from eslint_bridge.config.settings import LinterSettings, PathResolution
from eslint_bridge.resolution.paths import engine_cwd, relativize_path, resolve_engine_target


def _layout(tmp_path: Path) -> tuple[Path, Path]:
    root = tmp_path / "mono"
    file_path = root / "packages" / "web" / "src" / "index.js"
    file_path.parent.mkdir(parents=True)
    file_path.write_text("", encoding="utf-8")
    return root, file_path


def test_absolute_mode_reports_absolute_path(tmp_path: Path) -> None:
    root, file_path = _layout(tmp_path)
    config = LinterSettings(path_resolution=PathResolution.ABSOLUTE)

    target = resolve_engine_target(file_path.parent, file_path, config, root)

    assert target.file_path == str(file_path)
    assert target.cwd == file_path.parent


def test_project_mode_anchors_at_ignore_file_directory(tmp_path: Path) -> None:
    root, file_path = _layout(tmp_path)
    package_root = root / "packages" / "web"
    (package_root / ".eslintignore").write_text("build/\n", encoding="utf-8")

    target = resolve_engine_target(file_path.parent, file_path, LinterSettings(), root)

    assert target.cwd == package_root
    assert target.file_path == str(Path("src") / "index.js")


def test_project_mode_ignores_ignore_file_when_disabled(tmp_path: Path) -> None:
    root, file_path = _layout(tmp_path)
    (root / "packages" / "web" / ".eslintignore").write_text("build/\n", encoding="utf-8")
    config = LinterSettings(disable_eslint_ignore=True)

    assert relativize_path(file_path.parent, file_path, config, root) == str(
        Path("packages") / "web" / "src" / "index.js"
    )
    assert engine_cwd(file_path.parent, file_path, config, root) == root


def test_project_mode_falls_back_to_basename_outside_project(tmp_path: Path) -> None:
    _root, file_path = _layout(tmp_path)
    elsewhere = tmp_path / "other"
    elsewhere.mkdir()

    target = resolve_engine_target(file_path.parent, file_path, LinterSettings(), elsewhere)

    assert target.cwd == file_path.parent
    assert target.file_path == "index.js"


def test_project_mode_without_project_uses_basename(tmp_path: Path) -> None:
    _root, file_path = _layout(tmp_path)

    assert relativize_path(file_path.parent, file_path, LinterSettings()) == "index.js"


def test_relative_path_has_no_trailing_separator(tmp_path: Path) -> None:
    root, file_path = _layout(tmp_path)

    relative = relativize_path(str(file_path.parent) + "/", str(file_path), LinterSettings(), str(root) + "/")

    assert not relative.endswith(("/", "\\"))
    assert relative == str(Path("packages") / "web" / "src" / "index.js")
