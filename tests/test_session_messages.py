# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for turning ESLint messages into editor diagnostics."""

from __future__ import annotations

import pytest

from eslint_bridge.core.errors import InvalidLocationError
from eslint_bridge.core.models import EngineMessage
from eslint_bridge.core.severity import Severity
from eslint_bridge.session.messages import rule_url, to_diagnostics
from eslint_bridge.session.text import TextIndex

_SOURCE = "foo = 4200\n"


def _messages(*raw: dict) -> list[EngineMessage]:
    return [EngineMessage.model_validate(item) for item in raw]


def test_two_findings_keep_order_ranges_and_fix() -> None:
    messages = _messages(
        {"ruleId": "no-undef", "severity": 2, "message": "'foo' is not defined.", "line": 1, "column": 1},
        {
            "ruleId": "semi",
            "severity": 2,
            "message": "Missing semicolon.",
            "line": 1,
            "column": 9,
            "endLine": 1,
            "endColumn": 10,
            "fix": {"range": [6, 9], "text": "42"},
        },
    )

    diagnostics = to_diagnostics(messages, _SOURCE, "/work/app.js", show_rule=False)

    assert [item.rule_id for item in diagnostics] == ["no-undef", "semi"]
    assert diagnostics[0].range.as_tuple() == ((0, 0), (0, 3))
    assert diagnostics[0].fix is None
    assert diagnostics[1].range.as_tuple() == ((0, 8), (0, 9))
    assert diagnostics[1].fix is not None
    assert diagnostics[1].fix.range.as_tuple() == ((0, 6), (0, 9))
    assert diagnostics[1].fix.new_text == "42"
    assert all(item.file_path == "/work/app.js" for item in diagnostics)


def test_no_messages_yield_no_diagnostics() -> None:
    assert to_diagnostics([], _SOURCE, "/work/app.js", show_rule=True) == []


def test_rule_id_and_url_decoration() -> None:
    messages = _messages(
        {"ruleId": "no-undef", "message": "'foo' is not defined.", "line": 1, "column": 1},
        {"ruleId": "react/jsx-key", "severity": 1, "message": "Missing key.", "line": 1, "column": 7},
    )

    core, plugin = to_diagnostics(messages, _SOURCE, None, show_rule=True)

    assert core.message == "'foo' is not defined. (no-undef)"
    assert core.url == "https://eslint.org/docs/rules/no-undef"
    assert core.type is Severity.ERROR
    assert plugin.message == "Missing key. (react/jsx-key)"
    assert plugin.url is None
    assert plugin.type is Severity.WARNING


def test_fatal_messages_keep_first_line_and_label() -> None:
    messages = _messages(
        {
            "ruleId": None,
            "fatal": True,
            "severity": 2,
            "message": "Parsing error: Unexpected token\n\n> 1 | foo = ;",
            "line": 1,
            "column": 7,
        }
    )

    (diagnostic,) = to_diagnostics(messages, _SOURCE, None, show_rule=True)

    assert diagnostic.message == "Parsing error: Unexpected token (Fatal)"
    assert diagnostic.type is Severity.ERROR
    assert diagnostic.range.as_tuple() == ((0, 6), (0, 10))


def test_point_without_word_marks_single_character() -> None:
    messages = _messages({"ruleId": "space-infix-ops", "message": "Operator", "line": 1, "column": 5})

    (diagnostic,) = to_diagnostics(messages, _SOURCE, None, show_rule=False)

    assert diagnostic.range.as_tuple() == ((0, 4), (0, 5))


def test_fix_offsets_handle_crlf_line_breaks() -> None:
    text = "a;\r\nbar()\r\n"
    messages = _messages(
        {
            "ruleId": "semi",
            "message": "Missing semicolon.",
            "line": 2,
            "column": 6,
            "fix": {"range": [9, 9], "text": ";"},
        }
    )

    (diagnostic,) = to_diagnostics(messages, text, None, show_rule=False)

    assert diagnostic.fix.range.as_tuple() == ((1, 5), (1, 5))
    assert diagnostic.range.as_tuple() == ((1, 5), (1, 5))


def test_points_outside_document_raise() -> None:
    messages = _messages({"ruleId": "eol-last", "message": "Newline required.", "line": 5, "column": 1})

    with pytest.raises(InvalidLocationError):
        to_diagnostics(messages, _SOURCE, None, show_rule=False)


def test_column_past_line_end_raises() -> None:
    messages = _messages(
        {"ruleId": "semi", "message": "x", "line": 1, "column": 1, "endLine": 1, "endColumn": 40},
    )

    with pytest.raises(InvalidLocationError):
        to_diagnostics(messages, _SOURCE, None, show_rule=False)


def test_reversed_range_raises() -> None:
    messages = _messages(
        {"ruleId": "semi", "message": "x", "line": 1, "column": 5, "endLine": 1, "endColumn": 2},
    )

    with pytest.raises(InvalidLocationError):
        to_diagnostics(messages, _SOURCE, None, show_rule=False)


def test_text_index_positions() -> None:
    index = TextIndex("ab\ncd\r\nef")

    assert index.line_count == 3
    assert index.position_for_offset(0) == (0, 0)
    assert index.position_for_offset(3) == (1, 0)
    assert index.position_for_offset(7) == (2, 0)
    assert index.position_for_offset(100) == (2, 2)
    assert index.word_range(1, 0) == ((1, 0), (1, 2))


def test_rule_url() -> None:
    assert rule_url("semi") == "https://eslint.org/docs/rules/semi"
    assert rule_url(None) is None
    assert rule_url("import/no-unresolved") is None
