# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run ESLint through its command line interface."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import replace
from subprocess import CompletedProcess
from typing import Final

from pydantic import ValidationError

from ..core.errors import ConfigNotFound, EngineInitError, EngineRuntimeError
from ..core.runtime.process import TIMEOUT_RETURNCODE, CommandOptions, run_command
from .base import EngineOptions, EngineReport, FileResult

LOGGER = logging.getLogger(__name__)

Runner = Callable[..., CompletedProcess[str]]

_BANNER_PREFIXES: Final[tuple[str, ...]] = ("Oops! Something went wrong", "ESLint: ", "at ")
_REPORT_EXIT_CODES: Final[frozenset[int]] = frozenset({0, 1})
_MISSING_CONFIG: Final[re.Pattern[str]] = re.compile(r"No ESLint configuration found", re.IGNORECASE)
_CONFIG_FAILURE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    _MISSING_CONFIG,
    re.compile(r"Cannot read config file", re.IGNORECASE),
    re.compile(r"Failed to load (config|plugin|parser)", re.IGNORECASE),
    re.compile(r"ESLint couldn't find (the|a) (config|plugin)", re.IGNORECASE),
    re.compile(r"ESLint configuration in .* is invalid", re.IGNORECASE),
    re.compile(r"Configuration for rule .* is invalid", re.IGNORECASE),
)


def build_arguments(options: EngineOptions, *, stdin: bool) -> list[str]:
    """Translate ``options`` into ESLint command line arguments.

    Args:
        options: Invocation options.
        stdin: ``True`` when the source text is piped on stdin.

    Returns:
        list[str]: Arguments following the executable.
    """

    args = ["--format", "json"]
    if options.fix:
        args.append("--fix")
    if options.config_file is not None:
        args.extend(["--config", str(options.config_file)])
    for rule_path in options.rule_paths:
        args.extend(["--rulesdir", str(rule_path)])
    if not options.ignore:
        args.append("--no-ignore")
    elif options.ignore_path is not None:
        args.extend(["--ignore-path", str(options.ignore_path)])
    # Command line rules take precedence over every configuration file.
    for rule_id, level in options.rules.items():
        args.extend(["--rule", json.dumps({rule_id: level})])
    if stdin:
        args.extend(["--stdin", "--stdin-filename", options.file_path])
    else:
        args.append(options.file_path)
    return args


def _first_error_line(stderr: str, stdout: str) -> str:
    for stream in (stderr, stdout):
        for line in stream.splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith(_BANNER_PREFIXES):
                return stripped.removeprefix("Error: ").strip()
    return "ESLint exited without output"


def _is_config_failure(text: str) -> bool:
    return any(pattern.search(text) for pattern in _CONFIG_FAILURE_PATTERNS)


def parse_report(completed: CompletedProcess[str]) -> EngineReport:
    """Parse an ESLint process outcome into a report.

    Args:
        completed: Finished ESLint process.

    Returns:
        EngineReport: Parsed per-file results.

    Raises:
        ConfigNotFound: If ESLint found no configuration for the file.
        EngineInitError: If ESLint failed while loading its configuration.
        EngineRuntimeError: For any other failure, including timeouts and
            output that is not a JSON report.
    """

    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    if completed.returncode == TIMEOUT_RETURNCODE:
        raise EngineRuntimeError(_first_error_line(stderr, ""))
    if completed.returncode not in _REPORT_EXIT_CODES:
        combined = f"{stderr}\n{stdout}"
        message = _first_error_line(stderr, stdout)
        if _is_config_failure(combined):
            message = next(line.strip() for line in combined.splitlines() if _is_config_failure(line))
            if _MISSING_CONFIG.search(message):
                raise ConfigNotFound(message)
            raise EngineInitError(message)
        raise EngineRuntimeError(message)
    try:
        payload = json.loads(stdout) if stdout.strip() else []
    except json.JSONDecodeError as exc:
        raise EngineRuntimeError(f"ESLint produced unreadable output: {exc}") from exc
    if not isinstance(payload, list):
        raise EngineRuntimeError("ESLint produced a report that is not a list of results")
    try:
        return EngineReport(results=[FileResult.model_validate(entry) for entry in payload if isinstance(entry, dict)])
    except ValidationError as exc:
        raise EngineRuntimeError(f"ESLint produced an unexpected report: {exc}") from exc


class EslintCliEngine:
    """Engine implementation that shells out to an ESLint installation."""

    def __init__(self, command: Sequence[str], *, runner: Runner = run_command, timeout: float | None = None) -> None:
        """Bind the engine to an ESLint executable.

        Args:
            command: Argv prefix launching ESLint, e.g. ``["node", ".../bin/eslint.js"]``.
            runner: Command runner, replaceable in tests.
            timeout: Optional per-invocation timeout in seconds.
        """

        self._command = list(command)
        self._runner = runner
        self._timeout = timeout

    @property
    def command(self) -> tuple[str, ...]:
        return tuple(self._command)

    def _run(self, options: EngineOptions, *, text: str | None) -> EngineReport:
        argv = [*self._command, *build_arguments(options, stdin=text is not None)]
        LOGGER.debug("running %s in %s", argv, options.cwd)
        command_options = CommandOptions(cwd=options.cwd, timeout=self._timeout).with_input(text)
        try:
            completed = self._runner(argv, options=command_options)
        except FileNotFoundError as exc:
            raise EngineInitError(str(exc)) from exc
        except OSError as exc:
            raise EngineRuntimeError(f"Unable to run ESLint: {exc}") from exc
        return parse_report(completed)

    def lint_text(self, text: str, *, options: EngineOptions) -> EngineReport:
        return self._run(options, text=text)

    def lint_file(self, *, options: EngineOptions) -> EngineReport:
        return self._run(options, text=None)

    def fix_file(self, *, options: EngineOptions) -> EngineReport:
        """Run ESLint with ``--fix``; ESLint itself writes the corrected file."""

        return self._run(replace(options, fix=True), text=None)


__all__ = [
    "EslintCliEngine",
    "build_arguments",
    "parse_report",
]
