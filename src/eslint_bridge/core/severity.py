# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, IntEnum
from typing import Final


class EslintLevel(IntEnum):
    """Numeric rule levels understood by ESLint."""

    OFF = 0
    WARN = 1
    ERROR = 2


class Severity(str, Enum):
    """Severity labels attached to diagnostics shown in the editor."""

    ERROR = "Error"
    WARNING = "Warning"


RuleOverrideSet = dict[str, int]

_DISABLED_LEVEL: Final[int] = int(EslintLevel.OFF)


def severity_from_level(level: int | None, *, fatal: bool = False) -> Severity:
    """Map an ESLint message level onto an editor severity.

    Args:
        level: Numeric level reported by ESLint (``1`` warning, ``2`` error).
        fatal: ``True`` when ESLint flagged the message as a fatal parse error.

    Returns:
        Severity: ``WARNING`` for non-fatal level ``1`` messages, ``ERROR`` otherwise.
    """
    if not fatal and level == EslintLevel.WARN:
        return Severity.WARNING
    return Severity.ERROR


def ids_to_disabled_rules(rule_ids: Iterable[str]) -> RuleOverrideSet:
    """Return a rule mapping that switches every id in ``rule_ids`` off.

    Args:
        rule_ids: Rule identifiers configured by the user.

    Returns:
        RuleOverrideSet: Mapping of rule id to the ESLint ``off`` level.
    """
    return {rule_id: _DISABLED_LEVEL for rule_id in rule_ids if rule_id}


__all__ = [
    "EslintLevel",
    "RuleOverrideSet",
    "Severity",
    "ids_to_disabled_rules",
    "severity_from_level",
]
