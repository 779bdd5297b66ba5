# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Find the ESLint installation a job should use."""

from __future__ import annotations

import json
import logging
import os
import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from ..config.settings import LinterSettings
from ..core.errors import EngineInitError
from ..core.runtime.process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

Runner = Callable[..., CompletedProcess[str]]

ESLINT_PACKAGE: Final[str] = "eslint"
NODE_MODULES: Final[str] = "node_modules"
ESLINT_BIN: Final[tuple[str, ...]] = ("bin", "eslint.js")
NODE_EXECUTABLE: Final[str] = "node"
_NPM_PREFIX_COMMAND: Final[tuple[str, ...]] = ("npm", "get", "prefix")
_PROBE_TIMEOUT: Final[float] = 10.0


class InstallationType(str, Enum):
    """Enumerate where an ESLint installation was found."""

    GLOBAL = "global"
    LOCAL_PROJECT = "local project"
    ADVANCED_SPECIFIED = "advanced specified"
    SYSTEM_FALLBACK = "system fallback"


@dataclass(frozen=True, slots=True)
class EslintInstallation:
    """Resolved ESLint installation.

    Attributes:
        path: Package directory, or the executable for the system fallback.
        type: How the installation was found.
        version: Version declared by the package manifest, when readable.
    """

    path: Path
    type: InstallationType
    version: str | None = None

    def command(self) -> list[str]:
        """Return the argv prefix that launches this installation."""

        if self.path.is_dir():
            return [NODE_EXECUTABLE, str(self.path.joinpath(*ESLINT_BIN))]
        return [str(self.path)]


def _clean_path(raw: str) -> str:
    return os.path.expandvars(os.path.expanduser(raw.strip())) if raw else ""


def _read_version(package_dir: Path) -> str | None:
    try:
        manifest = json.loads((package_dir / "package.json").read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    version = manifest.get("version") if isinstance(manifest, dict) else None
    return str(version) if version else None


def node_prefix_path(*, runner: Runner = run_command) -> Path | None:
    """Return the global npm prefix, or ``None`` when npm is unavailable."""

    try:
        completed = runner(list(_NPM_PREFIX_COMMAND), options=CommandOptions(timeout=_PROBE_TIMEOUT))
    except FileNotFoundError:
        return None
    prefix = completed.stdout.strip() if completed.returncode == 0 else ""
    return Path(prefix) if prefix else None


def _global_candidates(config: LinterSettings, runner: Runner) -> Sequence[Path]:
    prefix = _clean_path(config.global_node_path)
    prefix_path = Path(prefix) if prefix else node_prefix_path(runner=runner)
    if prefix_path is None:
        return ()
    # npm on Windows and yarn everywhere use <prefix>/node_modules; npm elsewhere uses lib/.
    return (
        prefix_path / NODE_MODULES / ESLINT_PACKAGE,
        prefix_path / "lib" / NODE_MODULES / ESLINT_PACKAGE,
    )


def _system_fallback(runner: Runner) -> EslintInstallation:
    executable = shutil.which(ESLINT_PACKAGE)
    if executable is None:
        raise EngineInitError("ESLint not found: install it in the project or make `eslint` available on PATH.")
    version: str | None = None
    completed = runner([executable, "--version"], options=CommandOptions(timeout=_PROBE_TIMEOUT))
    if completed.returncode == 0:
        version = completed.stdout.strip().lstrip("v") or None
    return EslintInstallation(path=Path(executable), type=InstallationType.SYSTEM_FALLBACK, version=version)


def locate_eslint(
    modules_dir: Path | None,
    config: LinterSettings,
    project_path: str | None = None,
    *,
    runner: Runner = run_command,
) -> EslintInstallation:
    """Resolve the ESLint installation for a job.

    Args:
        modules_dir: Nearest ``node_modules`` directory above the linted file.
        config: Settings snapshot carried by the job.
        project_path: Project root used for relative advanced paths.
        runner: Command runner used for npm and version lookups.

    Returns:
        EslintInstallation: The selected installation.

    Raises:
        EngineInitError: If a global installation was requested but not
            found, or no installation exists at all.
    """

    if config.use_global_eslint:
        for candidate in _global_candidates(config, runner):
            if candidate.is_dir():
                return EslintInstallation(candidate, InstallationType.GLOBAL, _read_version(candidate))
        raise EngineInitError("ESLint not found, please ensure the global Node path is set correctly.")

    advanced = _clean_path(config.advanced_local_node_modules)
    if advanced:
        base = Path(advanced) if os.path.isabs(advanced) else Path(project_path or "") / advanced
        candidate = base / ESLINT_PACKAGE
        location_type = InstallationType.ADVANCED_SPECIFIED
    else:
        candidate = (modules_dir or Path()) / ESLINT_PACKAGE
        location_type = InstallationType.LOCAL_PROJECT

    if (modules_dir is not None or advanced) and candidate.is_dir():
        return EslintInstallation(candidate, location_type, _read_version(candidate))
    LOGGER.debug("no %s ESLint at %s, falling back to PATH", location_type.value, candidate)
    return _system_fallback(runner)


__all__ = [
    "ESLINT_PACKAGE",
    "EslintInstallation",
    "InstallationType",
    "NODE_MODULES",
    "locate_eslint",
    "node_prefix_path",
]
