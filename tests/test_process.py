# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the hardened subprocess wrapper."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from eslint_bridge.core.runtime.process import TIMEOUT_RETURNCODE, CommandOptions, run_command


def test_run_command_captures_output_and_feeds_stdin(tmp_path: Path) -> None:
    script = "import os, sys; print(os.getcwd()); print(sys.stdin.read().upper())"
    options = CommandOptions(cwd=tmp_path).with_input("const a = 1;")

    result = run_command([sys.executable, "-c", script], options=options)

    assert result.returncode == 0
    cwd_line, text_line = result.stdout.splitlines()
    assert Path(cwd_line).resolve() == tmp_path.resolve()
    assert text_line == "CONST A = 1;"


def test_non_zero_exit_is_returned_not_raised() -> None:
    result = run_command([sys.executable, "-c", "import sys; sys.exit(2)"])

    assert result.returncode == 2


def test_timeout_maps_to_exit_124() -> None:
    result = run_command(
        [sys.executable, "-c", "import time; time.sleep(5)"],
        options=CommandOptions(timeout=0.2),
    )

    assert result.returncode == TIMEOUT_RETURNCODE
    assert "timed out" in result.stderr


def test_missing_executable_raises() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-an-eslint-binary"])
    with pytest.raises(ValueError):
        run_command([])
