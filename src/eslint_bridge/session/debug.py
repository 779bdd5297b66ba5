# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Render the debugging report shown by the ``debug`` action."""

from __future__ import annotations

import json
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

from .. import __version__
from ..config.settings import LinterSettings
from ..core.models import DebugResponse

DEBUG_TITLE: Final[str] = "ESLint debugging information"
NO_PROJECT_CONFIG: Final[str] = "ESLint disabled: no project configuration"
_SECONDS_PER_HOUR: Final[float] = 3600.0

_PROCESS_STARTED: Final[float] = time.monotonic()


@dataclass(frozen=True, slots=True)
class DebugReport:
    """Environment facts gathered for one debug request."""

    editor_version: str
    settings: LinterSettings
    installation: DebugResponse
    cursor_scopes: Sequence[Sequence[str]] = field(default_factory=tuple)
    package_version: str = __version__
    platform: str = sys.platform
    hours_since_start: float = 0.0

    def render(self) -> str:
        """Return the report as newline separated ``label: value`` lines."""

        scopes = [list(scope) for scope in self.cursor_scopes]
        if self.installation.located:
            source = f"Using {self.installation.eslint_type} ESLint from: {self.installation.eslint_path}"
        else:
            source = NO_PROJECT_CONFIG
        lines = [
            f"Editor version: {self.editor_version}",
            f"eslint-bridge version: {self.package_version}",
            f"ESLint version: {self.installation.eslint_version or 'unknown'}",
            f"Hours since eslint-bridge started: {self.hours_since_start:.1f}",
            f"Platform: {self.platform}",
            source,
            f"Current file's scopes: {json.dumps(scopes, indent=2)}",
            f"eslint-bridge configuration: {json.dumps(self.settings.to_public_dict(), indent=2)}",
        ]
        return "\n".join(lines)


def hours_since_start(now: float | None = None) -> float:
    elapsed = (time.monotonic() if now is None else now) - _PROCESS_STARTED
    return max(elapsed, 0.0) / _SECONDS_PER_HOUR


def build_debug_report(
    *,
    editor_version: str,
    settings: LinterSettings,
    installation: DebugResponse,
    cursor_scopes: Sequence[Sequence[str]] = (),
) -> DebugReport:
    return DebugReport(
        editor_version=editor_version,
        settings=settings,
        installation=installation,
        cursor_scopes=tuple(tuple(scope) for scope in cursor_scopes),
        hours_since_start=hours_since_start(),
    )


__all__ = [
    "DEBUG_TITLE",
    "NO_PROJECT_CONFIG",
    "DebugReport",
    "build_debug_report",
    "hours_since_start",
]
