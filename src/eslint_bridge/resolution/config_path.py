# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Locate the ESLint configuration that applies to a file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Final

from ..core.models import ResolvedConfigLocation
from .find_cache import find_cached

CONFIG_FILE_NAMES: Final[tuple[str, ...]] = (
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.yaml",
    ".eslintrc.yml",
    ".eslintrc.json",
    ".eslintrc",
    "package.json",
)
PACKAGE_MANIFEST: Final[str] = "package.json"
PACKAGE_CONFIG_KEY: Final[str] = "eslintConfig"
IGNORE_FILE_NAME: Final[str] = ".eslintignore"


def _is_config_file(candidate: Path) -> bool:
    """Return ``True`` when ``candidate`` holds ESLint configuration.

    A ``package.json`` only counts when it embeds an ``eslintConfig`` object;
    a manifest that cannot be read or parsed is skipped so the search keeps
    climbing.
    """

    if not candidate.is_file():
        return False
    if candidate.name != PACKAGE_MANIFEST:
        return True
    try:
        manifest = json.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return False
    return isinstance(manifest, dict) and PACKAGE_CONFIG_KEY in manifest


def resolve_config_path(start_dir: Path | str) -> ResolvedConfigLocation:
    """Find the nearest ESLint configuration at or above ``start_dir``.

    Args:
        start_dir: Directory of the file being linted.

    Returns:
        ResolvedConfigLocation: Location of the first configuration file, or
        an empty location when none exists up to the filesystem root.
    """

    return ResolvedConfigLocation(path=find_cached(start_dir, CONFIG_FILE_NAMES, matcher=_is_config_file))


def is_config_at_home_root(config_path: Path | str) -> bool:
    """Return ``True`` when ``config_path`` lives directly in the user's home.

    ESLint falls back to ``~/.eslintrc*`` when a project has no configuration
    of its own; such a file does not count as project configuration.
    """

    return Path(config_path).absolute().parent == Path.home().absolute()


def has_project_config(location: ResolvedConfigLocation) -> bool:
    """Return ``True`` when ``location`` is a real per-project configuration."""

    return location.path is not None and not is_config_at_home_root(location.path)


def find_ignore_file(start_dir: Path | str) -> Path | None:
    return find_cached(start_dir, IGNORE_FILE_NAME)


__all__ = [
    "CONFIG_FILE_NAMES",
    "IGNORE_FILE_NAME",
    "PACKAGE_CONFIG_KEY",
    "find_ignore_file",
    "has_project_config",
    "is_config_at_home_root",
    "resolve_config_path",
]
