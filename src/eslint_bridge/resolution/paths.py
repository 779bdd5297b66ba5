# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compute the path and working directory ESLint sees for a file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from ..config.settings import LinterSettings, PathResolution
from .config_path import find_ignore_file

_Pathish = str | PathLike[str] | Path


@dataclass(frozen=True, slots=True)
class EngineTarget:
    """Working directory for the engine and the file path reported to it.

    ESLint matches ignore patterns and per-directory overrides against the
    reported path relative to its working directory, so both travel together.
    """

    cwd: Path
    file_path: str


def _normalise(path: _Pathish) -> str:
    normalised = os.path.normpath(os.fspath(path))
    drive, tail = os.path.splitdrive(normalised)
    return f"{drive.upper()}{tail}" if drive else normalised


def _relative_to(anchor: Path, file_path: Path) -> str | None:
    try:
        return _normalise(os.path.relpath(file_path, anchor))
    except ValueError:
        # Different drives on Windows.
        return None


def resolve_engine_target(
    file_dir: _Pathish,
    file_path: _Pathish,
    config: LinterSettings,
    project_path: _Pathish | None = None,
) -> EngineTarget:
    """Return where ESLint should run and which path it should be told about.

    In absolute mode the engine runs from the file's directory and receives
    the absolute path. In project mode the path is made relative to, in
    order of preference, the directory holding the nearest ``.eslintignore``
    (when ignore files are honoured), the project root, or the file's own
    directory.

    Args:
        file_dir: Directory containing the file.
        file_path: Absolute path of the file.
        config: Settings snapshot carried by the job.
        project_path: Root of the enclosing project, if known.

    Returns:
        EngineTarget: Working directory and reported path.
    """

    directory = Path(_normalise(Path(file_dir).absolute()))
    target = Path(_normalise(Path(file_path).absolute()))
    if config.path_resolution is PathResolution.ABSOLUTE:
        return EngineTarget(cwd=directory, file_path=str(target))

    if not config.disable_eslint_ignore:
        ignore_file = find_ignore_file(directory)
        if ignore_file is not None:
            relative = _relative_to(ignore_file.parent, target)
            if relative is not None:
                return EngineTarget(cwd=ignore_file.parent, file_path=relative)

    if project_path:
        project_root = Path(_normalise(Path(project_path).absolute()))
        relative = _relative_to(project_root, target)
        if relative is not None and relative != os.pardir and not relative.startswith(os.pardir + os.sep):
            return EngineTarget(cwd=project_root, file_path=relative)

    return EngineTarget(cwd=directory, file_path=target.name)


def relativize_path(
    file_dir: _Pathish,
    file_path: _Pathish,
    config: LinterSettings,
    project_path: _Pathish | None = None,
) -> str:
    """Return the file path ESLint should use for ignore and override matching."""

    return resolve_engine_target(file_dir, file_path, config, project_path).file_path


def engine_cwd(
    file_dir: _Pathish,
    file_path: _Pathish,
    config: LinterSettings,
    project_path: _Pathish | None = None,
) -> Path:
    return resolve_engine_target(file_dir, file_path, config, project_path).cwd


__all__ = [
    "EngineTarget",
    "engine_cwd",
    "relativize_path",
    "resolve_engine_target",
]
