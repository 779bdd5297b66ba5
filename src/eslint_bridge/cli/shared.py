# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (console output and errors)."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from ..core.logging import fail as core_fail
from ..core.logging import info as core_info
from ..core.logging import ok as core_ok
from ..core.logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Console notifier honouring the CLI's emoji and colour preferences.

    Implements the session ``Notifier`` protocol so controller notifications
    land on the terminal.
    """

    use_emoji: bool
    use_color: bool = True
    warnings: int = 0
    errors: int = 0

    def success(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str, *, detail: str | None = None) -> None:
        """Log an informational message, followed by its detail block if any.

        Args:
            message: Headline text.
            detail: Optional multi-line body printed verbatim.
        """

        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)
        if detail:
            self.echo(detail)

    def warning(self, message: str) -> None:
        self.warnings += 1
        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def error(self, message: str) -> None:
        self.errors += 1
        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided preferences.

    Args:
        emoji: Whether log output may include emoji glyphs.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger writing through the shared notification consoles.
    """

    return CLILogger(use_emoji=emoji, use_color=not no_color)


__all__ = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
]
