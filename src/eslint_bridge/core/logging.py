# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Terminal notifications with optional colour and emoji decoration."""

from __future__ import annotations

import sys
from enum import Enum
from functools import lru_cache
from typing import Literal

from rich.console import Console
from rich.text import Text


class NoticeLevel(Enum):
    """Notification kinds with their glyph and colour."""

    INFO = ("ℹ️ ", "cyan")
    SUCCESS = ("✅ ", "green")
    WARNING = ("⚠️ ", "yellow")
    ERROR = ("❌ ", "red")

    @property
    def glyph(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def notice_console(*, color: bool, emoji: bool, tty: bool) -> Console:
    """Return the shared console for one combination of output preferences.

    Args:
        color: ``True`` when ANSI colour output is wanted.
        emoji: ``True`` when Rich may render emoji glyphs.
        tty: ``True`` when stdout is a terminal.

    Returns:
        Console: Console writing to the current ``sys.stdout``.
    """

    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


def notify(level: NoticeLevel, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` decorated for ``level``.

    Args:
        level: Kind of notification.
        msg: Text shown to the user.
        use_emoji: Prefix the message with the level's glyph.
        use_color: Colour the message; follows TTY detection when ``None``.
    """

    tty = detect_tty()
    color_enabled = tty if use_color is None else use_color
    text = Text(f"{level.glyph if use_emoji else ''}{msg}")
    if color_enabled:
        text.stylize(level.style)
    notice_console(color=color_enabled, emoji=use_emoji, tty=tty).print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    notify(NoticeLevel.INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    notify(NoticeLevel.SUCCESS, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    notify(NoticeLevel.WARNING, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    notify(NoticeLevel.ERROR, msg, use_emoji=use_emoji, use_color=use_color)


__all__ = [
    "NoticeLevel",
    "detect_tty",
    "fail",
    "info",
    "notice_console",
    "notify",
    "ok",
    "warn",
]
