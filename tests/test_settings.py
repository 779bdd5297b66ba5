# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for settings snapshots, derived state and settings files."""

from __future__ import annotations

from pathlib import Path

import pytest

from eslint_bridge.config.loader import load_settings
from eslint_bridge.config.settings import (
    DEFAULT_SCOPES,
    EMBEDDED_HTML_SCOPE,
    LinterSettings,
    PathResolution,
    settings_from_mapping,
)
from eslint_bridge.config.state import SettingsState
from eslint_bridge.core.errors import SettingsError


def test_defaults_match_documented_values() -> None:
    settings = LinterSettings()

    assert settings.scopes == DEFAULT_SCOPES
    assert settings.show_rule_id_in_message is True
    assert settings.disable_when_no_eslint_config is True
    assert settings.fix_on_save is False
    assert settings.path_resolution is PathResolution.PROJECT


def test_camel_case_aliases_and_comma_lists() -> None:
    settings = settings_from_mapping(
        {
            "fixOnSave": True,
            "rulesToSilenceWhileTyping": "no-unused-vars, no-console ,",
            "pathResolution": "absolute",
            "disableFSCache": True,
        }
    )

    assert settings.fix_on_save is True
    assert settings.rules_to_silence_while_typing == ("no-unused-vars", "no-console")
    assert settings.path_resolution is PathResolution.ABSOLUTE
    assert settings.disable_fs_cache is True


def test_unknown_or_invalid_settings_raise() -> None:
    with pytest.raises(SettingsError):
        settings_from_mapping({"notASetting": 1})
    with pytest.raises(SettingsError):
        settings_from_mapping({"pathResolution": "sideways"})


def test_snapshots_are_frozen_and_updated_by_copy() -> None:
    settings = LinterSettings()

    changed = settings.with_changes({"fix_on_save": True, "lint-html-files": True})

    assert settings.fix_on_save is False
    assert changed.fix_on_save is True
    assert changed.lint_html_files is True
    with pytest.raises(ValueError):
        settings.fix_on_save = True  # type: ignore[misc]


def test_public_dict_uses_surface_names() -> None:
    payload = LinterSettings().to_public_dict()

    assert payload["showRuleIdInMessage"] is True
    assert payload["pathResolution"] == "project"
    assert payload["scopes"] == list(DEFAULT_SCOPES)


def test_state_derives_scopes_and_rule_overrides() -> None:
    state = SettingsState(
        LinterSettings(
            lint_html_files=True,
            rules_to_silence_while_typing=["no-console"],
            rules_to_disable_while_fixing=["prefer-const", "no-var"],
        )
    )

    assert state.scopes == (*DEFAULT_SCOPES, EMBEDDED_HTML_SCOPE)
    assert dict(state.silence_while_typing) == {"no-console": 0}
    assert dict(state.disable_while_fixing) == {"prefer-const": 0, "no-var": 0}


def test_state_rebuilds_only_changed_values() -> None:
    state = SettingsState(LinterSettings(rules_to_disable_while_fixing=["no-var"]))
    fixing_before = state.disable_while_fixing

    state.update(state.settings.with_changes({"rulesToSilenceWhileTyping": ["semi"]}))

    assert dict(state.silence_while_typing) == {"semi": 0}
    assert dict(state.disable_while_fixing) == dict(fixing_before)
    with pytest.raises(TypeError):
        state.silence_while_typing["semi"] = 2  # type: ignore[index]


def test_load_settings_from_pyproject_and_dedicated_file(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.eslint-bridge]\nfix-on-save = true\nshowRuleIdInMessage = false\n',
        encoding="utf-8",
    )
    (tmp_path / ".eslint-bridge.toml").write_text('showRuleIdInMessage = true\nscopes = ["source.ts"]\n', encoding="utf-8")

    settings = load_settings(tmp_path)

    assert settings.fix_on_save is True
    assert settings.show_rule_id_in_message is True
    assert settings.scopes == ("source.ts",)


def test_load_settings_defaults_when_no_files(tmp_path: Path) -> None:
    assert load_settings(tmp_path) == LinterSettings()


def test_explicit_settings_file_wins_and_expands_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RULES_HOME", "/opt/rules")
    (tmp_path / ".eslint-bridge.toml").write_text("fixOnSave = true\n", encoding="utf-8")
    explicit = tmp_path / "custom.toml"
    explicit.write_text('eslint_rules_dirs = ["${RULES_HOME}/team"]\n', encoding="utf-8")

    settings = load_settings(tmp_path, explicit=explicit)

    assert settings.fix_on_save is False
    assert settings.eslint_rules_dirs == ("/opt/rules/team",)


def test_invalid_settings_files_raise(tmp_path: Path) -> None:
    (tmp_path / ".eslint-bridge.toml").write_text("fixOnSave = [", encoding="utf-8")

    with pytest.raises(SettingsError):
        load_settings(tmp_path)
    with pytest.raises(SettingsError):
        load_settings(tmp_path, explicit=tmp_path / "missing.toml")
