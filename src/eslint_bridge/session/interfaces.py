# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the editor surface the session controller talks to."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

Position = tuple[int, int]
Unsubscribe = Callable[[], None]


@runtime_checkable
class Document(Protocol):
    """Open text buffer as exposed by the editor."""

    @property
    def path(self) -> str | None:
        """Absolute path of the file backing the buffer, ``None`` when never saved."""
        ...

    @property
    def text(self) -> str:
        """Live buffer contents."""
        ...

    def is_modified(self) -> bool:
        """Return ``True`` when the buffer has unsaved changes."""
        ...

    def get_cursor_position(self) -> Position: ...

    def set_cursor_position(self, position: Position) -> None: ...

    def cursor_scopes(self) -> Sequence[Sequence[str]]:
        """Return the scope descriptors of every cursor, outermost first."""
        ...

    def on_did_reload(self, callback: Callable[[], None]) -> Unsubscribe:
        """Invoke ``callback`` after the buffer is reloaded from disk."""
        ...


@runtime_checkable
class Workspace(Protocol):
    """Editor-wide services."""

    def active_document(self) -> Document | None: ...

    def relativize_path(self, file_path: str) -> tuple[str | None, str]:
        """Return the enclosing project root (if any) and the path relative to it."""
        ...

    def editor_version(self) -> str: ...


@runtime_checkable
class Notifier(Protocol):
    """User-facing notification sink."""

    def success(self, message: str) -> None: ...

    def info(self, message: str, *, detail: str | None = None) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


__all__ = [
    "Document",
    "Notifier",
    "Position",
    "Unsubscribe",
    "Workspace",
]
