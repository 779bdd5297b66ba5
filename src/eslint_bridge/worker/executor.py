# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Execute lint, fix and debug jobs against the analysis engine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Final

from ..config.settings import LinterSettings
from ..core.errors import BridgeError, EngineRuntimeError
from ..core.models import (
    DebugResponse,
    EngineMessage,
    FixResponse,
    Job,
    JobKind,
    JobResponse,
    LintResponse,
    ResolvedConfigLocation,
)
from ..engine.base import Engine, EngineOptions
from ..engine.cli import EslintCliEngine
from ..engine.locator import ESLINT_PACKAGE, NODE_MODULES, EslintInstallation, locate_eslint
from ..resolution.config_path import find_ignore_file, has_project_config
from ..resolution.find_cache import find_cached
from ..resolution.paths import resolve_engine_target

LOGGER = logging.getLogger(__name__)

IGNORED_MESSAGES: Final[frozenset[str]] = frozenset(
    {
        # ESLint 1.x
        "File ignored because of your .eslintignore file. Use --no-ignore to override.",
        # ESLint 2.x
        "File ignored because of a matching ignore pattern. Use --no-ignore to override.",
        # ESLint 2.11.1 and later
        'File ignored because of a matching ignore pattern. Use "--no-ignore" to override.',
        # Files ignored by ESLint's built-in defaults
        "File ignored by default.  Use a negated ignore pattern (like "
        "\"--ignore-pattern '!<relative/path/to/filename>'\") to override.",
        "File ignored by default. Use \"--ignore-pattern '!node_modules/*'\" to override.",
        "File ignored by default. Use \"--ignore-pattern '!bower_components/*'\" to override.",
    }
)
FIX_COMPLETE: Final[str] = "ESLint: Fix complete."
FIX_INCOMPLETE: Final[str] = "ESLint: Fix attempt complete, but linting errors remain."

_DISABLED_RESPONSES: Final[dict[JobKind, type[LintResponse | FixResponse | DebugResponse]]] = {
    JobKind.LINT: LintResponse,
    JobKind.FIX: FixResponse,
    JobKind.DEBUG: DebugResponse,
}

EngineFactory = Callable[[Path, LinterSettings, str], Engine]
InstallationLocator = Callable[[Path | None, LinterSettings, str], EslintInstallation]


def should_be_reported(message: EngineMessage) -> bool:
    """Return ``False`` for the pseudo-messages ESLint emits for ignored files."""

    return message.message not in IGNORED_MESSAGES


def reportable(messages: Iterable[EngineMessage]) -> list[EngineMessage]:
    return [message for message in messages if should_be_reported(message)]


def default_engine_factory(file_dir: Path, config: LinterSettings, project_path: str) -> Engine:
    """Build a CLI engine bound to the installation nearest ``file_dir``."""

    modules_dir = find_cached(file_dir, NODE_MODULES)
    installation = locate_eslint(modules_dir, config, project_path or None)
    LOGGER.debug("using %s ESLint at %s", installation.type.value, installation.path)
    return EslintCliEngine(installation.command())


def _default_locator(modules_dir: Path | None, config: LinterSettings, project_path: str) -> EslintInstallation:
    return locate_eslint(modules_dir, config, project_path or None)


class JobExecutor:
    """Run one job given the configuration location resolved for its file."""

    def __init__(
        self,
        *,
        engine_factory: EngineFactory = default_engine_factory,
        locator: InstallationLocator = _default_locator,
    ) -> None:
        self._engine_factory = engine_factory
        self._locator = locator

    def execute(self, job: Job, location: ResolvedConfigLocation) -> JobResponse:
        """Execute ``job`` and return its single response.

        Args:
            job: Job received from the dispatcher.
            location: Configuration location resolved for the job's file.

        Returns:
            JobResponse: Lint messages, fix status or debug description.

        Raises:
            EngineInitError: If ESLint cannot be set up for the file.
            EngineRuntimeError: If ESLint fails unexpectedly.
        """

        file_path = Path(job.file_path)
        file_dir = file_path.parent
        if job.config.disable_when_no_eslint_config and not has_project_config(location):
            LOGGER.debug("no project configuration for %s, skipping ESLint", file_path)
            return _DISABLED_RESPONSES[job.kind]()
        if job.kind is JobKind.DEBUG:
            return self._debug(file_dir, job)

        try:
            engine = self._engine_factory(file_dir, job.config, job.project_path)
            options = self._engine_options(job, location)
            if job.kind is JobKind.FIX:
                report = engine.fix_file(options=options)
                return FixResponse(status=FIX_INCOMPLETE if reportable(report.first_messages()) else FIX_COMPLETE)
            if job.text is not None:
                report = engine.lint_text(job.text, options=options)
            else:
                report = engine.lint_file(options=options)
        except BridgeError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise EngineRuntimeError(f"{type(exc).__name__}: {exc}") from exc
        return LintResponse(messages=reportable(report.first_messages()))

    @staticmethod
    def _engine_options(job: Job, location: ResolvedConfigLocation) -> EngineOptions:
        config = job.config
        file_path = Path(job.file_path)
        target = resolve_engine_target(file_path.parent, file_path, config, job.project_path or None)
        ignore_path = None if config.disable_eslint_ignore else find_ignore_file(file_path.parent)
        config_file = Path(config.eslintrc_path).expanduser() if config.eslintrc_path and not location.found else None
        return EngineOptions(
            cwd=target.cwd,
            file_path=target.file_path,
            rules=dict(job.rule_overrides),
            ignore=not config.disable_eslint_ignore,
            ignore_path=ignore_path,
            fix=job.kind is JobKind.FIX,
            config_file=config_file,
            rule_paths=tuple(_rule_dir(entry, job.project_path) for entry in config.eslint_rules_dirs),
        )

    def _debug(self, file_dir: Path, job: Job) -> DebugResponse:
        eslint_dir = find_cached(file_dir, f"{NODE_MODULES}/{ESLINT_PACKAGE}")
        modules_dir = eslint_dir.parent if eslint_dir is not None else None
        installation = self._locator(modules_dir, job.config, job.project_path)
        return DebugResponse(
            eslint_path=str(installation.path),
            eslint_type=installation.type.value,
            eslint_version=installation.version,
        )


def _rule_dir(entry: str, project_path: str) -> Path:
    path = Path(entry).expanduser()
    if path.is_absolute() or not project_path:
        return path
    return Path(project_path) / path


__all__ = [
    "FIX_COMPLETE",
    "FIX_INCOMPLETE",
    "IGNORED_MESSAGES",
    "JobExecutor",
    "default_engine_factory",
    "reportable",
    "should_be_reported",
]
