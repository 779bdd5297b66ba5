# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for ESLint installation discovery."""

from __future__ import annotations

import json
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from eslint_bridge.config.settings import LinterSettings
from eslint_bridge.core.errors import EngineInitError
from eslint_bridge.engine.locator import InstallationType, locate_eslint, node_prefix_path


def _install(modules_dir: Path, version: str = "8.57.0") -> Path:
    package = modules_dir / "eslint"
    (package / "bin").mkdir(parents=True)
    (package / "bin" / "eslint.js").write_text("", encoding="utf-8")
    (package / "package.json").write_text(json.dumps({"name": "eslint", "version": version}), encoding="utf-8")
    return package


def _never_called(args, *, options):  # noqa: ANN001
    raise AssertionError(f"unexpected command {args}")


def test_local_project_installation(tmp_path: Path) -> None:
    package = _install(tmp_path / "node_modules")

    installation = locate_eslint(tmp_path / "node_modules", LinterSettings(), runner=_never_called)

    assert installation.type is InstallationType.LOCAL_PROJECT
    assert installation.path == package
    assert installation.version == "8.57.0"
    assert installation.command() == ["node", str(package / "bin" / "eslint.js")]


def test_advanced_path_is_resolved_against_project(tmp_path: Path) -> None:
    package = _install(tmp_path / "tools" / "node_modules", version="9.1.0")
    config = LinterSettings(advanced_local_node_modules="tools/node_modules")

    installation = locate_eslint(None, config, str(tmp_path), runner=_never_called)

    assert installation.type is InstallationType.ADVANCED_SPECIFIED
    assert installation.path == package
    assert installation.version == "9.1.0"


def test_global_installation_uses_configured_prefix(tmp_path: Path) -> None:
    package = _install(tmp_path / "prefix" / "lib" / "node_modules")
    config = LinterSettings(use_global_eslint=True, global_node_path=str(tmp_path / "prefix"))

    installation = locate_eslint(None, config, runner=_never_called)

    assert installation.type is InstallationType.GLOBAL
    assert installation.path == package


def test_global_installation_asks_npm_for_prefix(tmp_path: Path) -> None:
    package = _install(tmp_path / "npm-prefix" / "node_modules")

    def fake_runner(args, *, options):  # noqa: ANN001
        assert list(args) == ["npm", "get", "prefix"]
        return CompletedProcess(args=args, returncode=0, stdout=f"{tmp_path / 'npm-prefix'}\n", stderr="")

    installation = locate_eslint(None, LinterSettings(use_global_eslint=True), runner=fake_runner)

    assert installation.path == package


def test_missing_global_installation_raises(tmp_path: Path) -> None:
    config = LinterSettings(use_global_eslint=True, global_node_path=str(tmp_path / "empty"))

    with pytest.raises(EngineInitError, match="global Node path"):
        locate_eslint(None, config, runner=_never_called)


def test_falls_back_to_eslint_on_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    executable = tmp_path / "bin" / "eslint"
    monkeypatch.setattr("eslint_bridge.engine.locator.shutil.which", lambda name: str(executable))

    def fake_runner(args, *, options):  # noqa: ANN001
        assert list(args) == [str(executable), "--version"]
        return CompletedProcess(args=args, returncode=0, stdout="v8.50.0\n", stderr="")

    installation = locate_eslint(tmp_path / "node_modules", LinterSettings(), runner=fake_runner)

    assert installation.type is InstallationType.SYSTEM_FALLBACK
    assert installation.version == "8.50.0"
    assert installation.command() == [str(executable)]


def test_no_installation_anywhere_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("eslint_bridge.engine.locator.shutil.which", lambda name: None)

    with pytest.raises(EngineInitError, match="ESLint not found"):
        locate_eslint(None, LinterSettings(), runner=_never_called)


def test_node_prefix_path_without_npm() -> None:
    def fake_runner(args, *, options):  # noqa: ANN001
        raise FileNotFoundError("npm")

    assert node_prefix_path(runner=fake_runner) is None
