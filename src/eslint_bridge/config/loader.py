# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load settings from ``.eslint-bridge.toml`` or ``[tool.eslint-bridge]`` in ``pyproject.toml``."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from ..core.errors import SettingsError
from .settings import LinterSettings, canonical_keys, settings_from_mapping

SETTINGS_FILE_NAME: Final[str] = ".eslint-bridge.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "eslint-bridge"


class TomlSettingsSource:
    """Read settings from a dedicated TOML document."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        self.path = path
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        """Return the raw settings mapping, or an empty mapping when the file is missing.

        Raises:
            SettingsError: If the document is not valid TOML.
        """

        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise SettingsError(f"Unable to read settings from {self.path}: {exc}") from exc
        return {key: _expand_env(value, self._env) for key, value in self._section(data).items()}

    def _section(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        return data

    def describe(self) -> str:
        return f"TOML settings at {self.path}"


class PyProjectSettingsSource(TomlSettingsSource):
    """Read settings from ``[tool.eslint-bridge]`` within ``pyproject.toml``."""

    def _section(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        return section if isinstance(section, Mapping) else {}

    def describe(self) -> str:
        return f"pyproject.toml ({self.path})"


def _expand_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        expanded = value
        for key, replacement in env.items():
            expanded = expanded.replace(f"${{{key}}}", replacement)
        return expanded
    if isinstance(value, list):
        return [_expand_env(item, env) for item in value]
    return value


def load_settings(root: Path, *, explicit: Path | None = None) -> LinterSettings:
    """Build a settings snapshot for ``root``.

    ``explicit`` wins when given. Otherwise ``pyproject.toml`` is read first
    and ``.eslint-bridge.toml`` layered on top of it.

    Args:
        root: Directory whose configuration files are consulted.
        explicit: Optional settings file supplied by the user.

    Returns:
        LinterSettings: Validated settings snapshot.

    Raises:
        SettingsError: If a file is unreadable or holds invalid values.
    """

    if explicit is not None:
        if not explicit.is_file():
            raise SettingsError(f"Settings file {explicit} does not exist")
        source_cls = PyProjectSettingsSource if explicit.name == PYPROJECT_FILE_NAME else TomlSettingsSource
        return settings_from_mapping(canonical_keys(source_cls(explicit).load()))

    merged: dict[str, Any] = {}
    for source in (PyProjectSettingsSource(root / PYPROJECT_FILE_NAME), TomlSettingsSource(root / SETTINGS_FILE_NAME)):
        merged.update(canonical_keys(source.load()))
    return settings_from_mapping(merged)


__all__ = [
    "PyProjectSettingsSource",
    "SETTINGS_FILE_NAME",
    "TomlSettingsSource",
    "load_settings",
]
