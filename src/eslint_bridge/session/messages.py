# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Convert raw ESLint messages into editor diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from pydantic import ValidationError

from ..core.errors import InvalidLocationError
from ..core.models import Diagnostic, DiagnosticFix, EngineMessage, TextRange
from ..core.severity import severity_from_level
from .text import TextIndex

CORE_RULE_URL: Final[str] = "https://eslint.org/docs/rules/{rule_id}"
FATAL_LABEL: Final[str] = "Fatal"


def rule_url(rule_id: str | None) -> str | None:
    """Return the documentation URL for a core ESLint rule.

    Plugin rules (``plugin/rule``) have no canonical location and yield ``None``.
    """

    if not rule_id or "/" in rule_id:
        return None
    return CORE_RULE_URL.format(rule_id=rule_id)


def _range(
    start: tuple[int, int],
    end: tuple[int, int],
    message: EngineMessage,
) -> TextRange:
    try:
        return TextRange.from_points(start, end)
    except ValidationError as exc:
        raise InvalidLocationError(
            f"Cannot mark {message.rule_id or FATAL_LABEL} at {start} to {end}: {message.message}"
        ) from exc


def _message_range(message: EngineMessage, index: TextIndex) -> TextRange:
    row = max((message.line or 1) - 1, 0)
    column = max((message.column or 1) - 1, 0)
    if message.end_line is not None and message.end_column is not None:
        end_row = max(message.end_line - 1, 0)
        end_column = max(message.end_column - 1, 0)
        index.validate_point(row, column)
        index.validate_point(end_row, end_column)
        return _range((row, column), (end_row, end_column), message)
    start, end = index.word_range(row, column)
    return _range(start, end, message)


def _message_text(message: EngineMessage, *, show_rule: bool) -> str:
    text = message.message.split("\n", 1)[0] if message.fatal else message.message
    if show_rule:
        text = f"{text} ({message.rule_id or FATAL_LABEL})"
    return text


def _fix(message: EngineMessage, index: TextIndex) -> DiagnosticFix | None:
    if message.fix is None:
        return None
    start_offset, end_offset = message.fix.range
    fix_range = _range(index.position_for_offset(start_offset), index.position_for_offset(end_offset), message)
    return DiagnosticFix(range=fix_range, new_text=message.fix.text)


def to_diagnostic(
    message: EngineMessage,
    index: TextIndex,
    file_path: str | None,
    *,
    show_rule: bool,
) -> Diagnostic:
    """Convert a single engine message using a prepared line index.

    Raises:
        InvalidLocationError: If the message points outside the document.
    """

    return Diagnostic(
        type=severity_from_level(message.severity, fatal=message.fatal),
        message=_message_text(message, show_rule=show_rule),
        file_path=file_path,
        range=_message_range(message, index),
        rule_id=message.rule_id,
        url=rule_url(message.rule_id),
        fix=_fix(message, index),
    )


def to_diagnostics(
    messages: Iterable[EngineMessage],
    document_text: str,
    file_path: str | None,
    *,
    show_rule: bool,
) -> list[Diagnostic]:
    """Convert ESLint messages into diagnostics against ``document_text``.

    Rows and columns are converted from ESLint's 1-based numbering. When
    ESLint omits an end position the range covers the word (or single
    character) at the reported point. Fix offsets are mapped onto the same
    text, so line breaks of any style count as one position boundary.

    Args:
        messages: Filtered engine messages in emission order.
        document_text: Text the job was run against.
        file_path: Path reported on every diagnostic.
        show_rule: Append the rule id (or ``Fatal``) to each message.

    Returns:
        list[Diagnostic]: One diagnostic per message, order preserved.

    Raises:
        InvalidLocationError: If any message points outside the document.
    """

    index = TextIndex(document_text)
    return [to_diagnostic(message, index, file_path, show_rule=show_rule) for message in messages]


__all__ = [
    "CORE_RULE_URL",
    "rule_url",
    "to_diagnostic",
    "to_diagnostics",
]
