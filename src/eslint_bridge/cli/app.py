# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer application exposing the lint, fix and debug actions."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Final

import typer
from rich.logging import RichHandler

from ..config.loader import SETTINGS_FILE_NAME, load_settings
from ..core.errors import BridgeError
from ..core.models import Diagnostic
from ..core.severity import Severity
from ..dispatch.dispatcher import Dispatcher
from ..resolution.find_cache import find_cached
from ..session.controller import DEFAULT_JOB_TIMEOUT, SessionController
from ..worker.executor import FIX_INCOMPLETE
from .shared import CLIError, CLILogger, build_cli_logger
from .surface import FileDocument, FileWorkspace

EXIT_FINDINGS: Final[int] = 1
EXIT_FAILURE: Final[int] = 2
_PROJECT_MARKERS: Final[tuple[str, ...]] = (SETTINGS_FILE_NAME, "package.json", "pyproject.toml", ".git")
_PACKAGE_LOGGER: Final[str] = "eslint_bridge"

app = typer.Typer(
    name="eslint-bridge",
    help="Run ESLint through a background worker and report its findings.",
    no_args_is_help=True,
    add_completion=False,
)

PathArgument = Annotated[
    Path,
    typer.Argument(exists=True, dir_okay=False, resolve_path=True, help="JavaScript file to process."),
]
SettingsOption = Annotated[
    Path | None,
    typer.Option("--settings", "-s", dir_okay=False, help="Settings file (TOML or pyproject.toml)."),
]
RootOption = Annotated[
    Path | None,
    typer.Option("--root", "-r", file_okay=False, help="Project root; detected from the file when omitted."),
]
TimeoutOption = Annotated[
    float,
    typer.Option("--timeout", min=0.1, help="Seconds to wait for the worker to answer."),
]


class _Preferences:
    emoji: bool = True
    no_color: bool = False


def build_dispatcher() -> Dispatcher:
    return Dispatcher()


def _project_root(file_path: Path, explicit: Path | None) -> Path:
    if explicit is not None:
        return explicit.absolute()
    marker = find_cached(file_path.parent, _PROJECT_MARKERS)
    return marker.parent if marker is not None else file_path.parent


@contextmanager
def _session(
    file_path: Path,
    *,
    root: Path | None,
    settings_file: Path | None,
    timeout: float,
) -> Iterator[tuple[SessionController, FileDocument, CLILogger]]:
    """Yield a controller wired to a file-backed workspace, shutting it down afterwards.

    Raises:
        CLIError: If the settings cannot be loaded.
    """

    logger = build_cli_logger(emoji=_Preferences.emoji, no_color=_Preferences.no_color)
    project_root = _project_root(file_path, root)
    try:
        settings = load_settings(project_root, explicit=settings_file)
    except BridgeError as exc:
        logger.error(str(exc))
        raise CLIError(str(exc), exit_code=EXIT_FAILURE) from exc
    document = FileDocument(file_path)
    workspace = FileWorkspace(project_root, document)
    controller = SessionController(build_dispatcher(), workspace, logger, settings, job_timeout=timeout)
    try:
        yield controller, document, logger
    finally:
        controller.shutdown()


def _render_diagnostic(diagnostic: Diagnostic, display_path: str) -> str:
    (row, column), _end = diagnostic.range.as_tuple()
    return f"{display_path}:{row + 1}:{column + 1}: {diagnostic.type.value}: {diagnostic.message}"


@app.callback()
def main_callback(
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate output with emoji.")] = True,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log worker and dispatcher activity.")] = False,
) -> None:
    """Run ESLint through a background worker and report its findings."""

    _Preferences.emoji = emoji
    _Preferences.no_color = no_color
    if verbose:
        package_logger = logging.getLogger(_PACKAGE_LOGGER)
        package_logger.setLevel(logging.DEBUG)
        package_logger.addHandler(RichHandler(show_path=False))


@app.command("lint")
def lint_command(
    path: PathArgument,
    settings: SettingsOption = None,
    root: RootOption = None,
    timeout: TimeoutOption = DEFAULT_JOB_TIMEOUT,
    as_json: Annotated[bool, typer.Option("--json", help="Emit diagnostics as JSON.")] = False,
) -> None:
    """Lint PATH and print its diagnostics."""

    try:
        with _session(path, root=root, settings_file=settings, timeout=timeout) as (controller, document, logger):
            try:
                diagnostics = controller.lint(document)
            except BridgeError as exc:
                logger.error(str(exc))
                raise CLIError(str(exc), exit_code=EXIT_FAILURE) from exc
            if diagnostics is None:
                logger.warning(f"{path} changed while it was being linted; results discarded")
                raise CLIError("stale result", exit_code=EXIT_FAILURE)
            if as_json:
                logger.echo(json.dumps([item.model_dump(mode="json") for item in diagnostics], indent=2))
            else:
                display_path = str(path.relative_to(Path.cwd())) if path.is_relative_to(Path.cwd()) else str(path)
                for diagnostic in diagnostics:
                    logger.echo(_render_diagnostic(diagnostic, display_path))
                if not diagnostics:
                    logger.success(f"{path.name}: no problems found")
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    if any(item.type is Severity.ERROR for item in diagnostics):
        raise typer.Exit(code=EXIT_FINDINGS)


@app.command("fix")
def fix_command(
    path: PathArgument,
    settings: SettingsOption = None,
    root: RootOption = None,
    timeout: TimeoutOption = DEFAULT_JOB_TIMEOUT,
) -> None:
    """Apply ESLint's automatic fixes to PATH in place."""

    try:
        with _session(path, root=root, settings_file=settings, timeout=timeout) as (controller, document, logger):
            status = controller.fix_job(document)
            if status is not None:
                document.reload()
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    if logger.warnings or logger.errors:
        raise typer.Exit(code=EXIT_FAILURE)
    if status == FIX_INCOMPLETE:
        raise typer.Exit(code=EXIT_FINDINGS)


@app.command("debug")
def debug_command(
    path: PathArgument,
    settings: SettingsOption = None,
    root: RootOption = None,
    timeout: TimeoutOption = DEFAULT_JOB_TIMEOUT,
) -> None:
    """Describe the ESLint installation and settings used for PATH."""

    try:
        with _session(path, root=root, settings_file=settings, timeout=timeout) as (controller, document, logger):
            try:
                controller.debug(document)
            except BridgeError as exc:
                logger.error(str(exc))
                raise CLIError(str(exc), exit_code=EXIT_FAILURE) from exc
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


def main() -> None:
    app()


__all__ = ["app", "build_dispatcher", "main"]
