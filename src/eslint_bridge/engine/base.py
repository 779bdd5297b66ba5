# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Engine abstraction used by the job executor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..core.models import EngineMessage
from ..core.severity import RuleOverrideSet


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """Options for a single engine invocation.

    Attributes:
        cwd: Working directory ESLint runs from.
        file_path: File path as reported to ESLint, relative to ``cwd`` when possible.
        rules: Rule overrides that take precedence over configuration files.
        ignore: ``False`` disables ``.eslintignore`` handling entirely.
        ignore_path: Explicit ignore file, when one was located.
        fix: ``True`` asks ESLint to write fixes to disk.
        config_file: Fallback configuration used when the project has none.
        rule_paths: Additional directories holding custom rules.
    """

    cwd: Path
    file_path: str
    rules: RuleOverrideSet = field(default_factory=dict)
    ignore: bool = True
    ignore_path: Path | None = None
    fix: bool = False
    config_file: Path | None = None
    rule_paths: tuple[Path, ...] = ()


class FileResult(BaseModel):
    """Per-file entry of an ESLint JSON report."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file_path: str = Field(default="", alias="filePath")
    messages: list[EngineMessage] = Field(default_factory=list)
    output: str | None = None


class EngineReport(BaseModel):
    """Ordered results returned by one engine invocation."""

    results: list[FileResult] = Field(default_factory=list)

    def first_messages(self) -> Sequence[EngineMessage]:
        """Return the messages reported for the first (and only) file."""

        return self.results[0].messages if self.results else ()


@runtime_checkable
class Engine(Protocol):
    """Interface the executor relies on to run ESLint."""

    def lint_text(self, text: str, *, options: EngineOptions) -> EngineReport:
        """Lint in-memory ``text``; ``options.file_path`` is used only for matching."""
        ...

    def lint_file(self, *, options: EngineOptions) -> EngineReport:
        """Lint the file on disk."""
        ...

    def fix_file(self, *, options: EngineOptions) -> EngineReport:
        """Fix the file on disk and report what remains."""
        ...


__all__ = [
    "Engine",
    "EngineOptions",
    "EngineReport",
    "FileResult",
]
