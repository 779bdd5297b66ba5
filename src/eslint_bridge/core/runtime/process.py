# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution of the ESLint command line."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    input_text: str | None = None
    timeout: float | None = None

    def with_input(self, text: str | None) -> CommandOptions:
        """Return a copy that feeds ``text`` to the process on stdin.

        Args:
            text: Text written to stdin, or ``None`` to discard stdin.

        Returns:
            CommandOptions: Updated options instance.
        """

        return replace(self, input_text=text)


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose head is an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    The process never inherits the caller's stdin. Output is always captured
    as text and a non-zero exit status is returned, not raised; callers
    interpret exit codes themselves.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring working directory, environment, stdin and timeout.

    Returns:
        CompletedProcess[str]: Completed process with stdout and stderr captured.
        A timeout is reported as exit status ``124``.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    try:
        # Bandit: commands are built from resolved ESLint installations.
        return subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=resolved_options.timeout,
            input=resolved_options.input_text,
            stdin=subprocess.DEVNULL if resolved_options.input_text is None else None,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = exc.stdout.decode(errors="ignore") if isinstance(exc.stdout, bytes) else exc.stdout or ""
        stderr = exc.stderr.decode(errors="ignore") if isinstance(exc.stderr, bytes) else exc.stderr
        timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
        return subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=stdout,
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )


__all__ = [
    "CommandOptions",
    "TIMEOUT_RETURNCODE",
    "run_command",
]
