# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared by the worker and the caller side."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config.settings import LinterSettings
from .severity import RuleOverrideSet, Severity


class JobKind(str, Enum):
    """Enumerate the job types understood by the worker."""

    LINT = "lint"
    FIX = "fix"
    DEBUG = "debug"


class Job(BaseModel):
    """One unit of work handed to the background worker."""

    model_config = ConfigDict(frozen=True)

    kind: JobKind
    file_path: str
    project_path: str = ""
    text: str | None = None
    config: LinterSettings = Field(default_factory=LinterSettings)
    rule_overrides: RuleOverrideSet = Field(default_factory=dict)


class ResolvedConfigLocation(BaseModel):
    """Outcome of the ancestor-directory search for an ESLint configuration."""

    model_config = ConfigDict(frozen=True)

    path: Path | None = None

    @property
    def found(self) -> bool:
        """Return ``True`` when a configuration file was located."""

        return self.path is not None


class MessageFix(BaseModel):
    """Fix attached to an engine message, expressed as character offsets."""

    model_config = ConfigDict(frozen=True)

    range: tuple[int, int]
    text: str = ""


class EngineMessage(BaseModel):
    """Raw ESLint message as emitted in the JSON report."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    rule_id: str | None = Field(default=None, alias="ruleId")
    severity: int = 2
    message: str = ""
    line: int | None = None
    column: int | None = None
    end_line: int | None = Field(default=None, alias="endLine")
    end_column: int | None = Field(default=None, alias="endColumn")
    fatal: bool = False
    fix: MessageFix | None = None


class Point(BaseModel):
    """Zero-based ``(row, column)`` position inside a document."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=0)
    column: int = Field(ge=0)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.column)


class TextRange(BaseModel):
    """Well-formed range between two points."""

    model_config = ConfigDict(frozen=True)

    start: Point
    end: Point

    @model_validator(mode="after")
    def _check_order(self) -> TextRange:
        """Reject ranges whose end precedes their start.

        Returns:
            TextRange: The validated range.

        Raises:
            ValueError: If ``end`` sorts before ``start``.
        """

        if self.end.as_tuple() < self.start.as_tuple():
            raise ValueError("range end precedes range start")
        return self

    @classmethod
    def from_points(cls, start: tuple[int, int], end: tuple[int, int]) -> TextRange:
        return cls(start=Point(row=start[0], column=start[1]), end=Point(row=end[0], column=end[1]))

    def as_tuple(self) -> tuple[tuple[int, int], tuple[int, int]]:
        return (self.start.as_tuple(), self.end.as_tuple())


class DiagnosticFix(BaseModel):
    """Replacement the editor can apply to resolve a diagnostic."""

    model_config = ConfigDict(frozen=True)

    range: TextRange
    new_text: str


class Diagnostic(BaseModel):
    """Finding reported to the editor for one engine message."""

    model_config = ConfigDict(frozen=True)

    type: Severity
    message: str
    file_path: str | None
    range: TextRange
    rule_id: str | None = None
    url: str | None = None
    fix: DiagnosticFix | None = None


class LintResponse(BaseModel):
    """Filtered engine messages for a lint job, in emission order."""

    kind: Literal["lint"] = "lint"
    messages: list[EngineMessage] = Field(default_factory=list)


class FixResponse(BaseModel):
    """Status line describing the outcome of a fix job."""

    kind: Literal["fix"] = "fix"
    status: str = ""


class DebugResponse(BaseModel):
    """Description of the ESLint installation a job would use.

    All fields are empty when ESLint is disabled for the file because no
    project configuration was found.
    """

    kind: Literal["debug"] = "debug"
    eslint_path: str | None = None
    eslint_type: str | None = None
    eslint_version: str | None = None

    @property
    def located(self) -> bool:
        return self.eslint_path is not None


JobResponse = Annotated[LintResponse | FixResponse | DebugResponse, Field(discriminator="kind")]


__all__ = [
    "DebugResponse",
    "Diagnostic",
    "DiagnosticFix",
    "EngineMessage",
    "FixResponse",
    "Job",
    "JobKind",
    "JobResponse",
    "LintResponse",
    "MessageFix",
    "Point",
    "ResolvedConfigLocation",
    "TextRange",
]
