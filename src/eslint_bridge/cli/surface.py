# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""File-backed document and workspace used when running from the terminal."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path

from .. import __version__
from ..session.interfaces import Position, Unsubscribe

_JS_SCOPES: dict[str, str] = {
    ".js": "source.js",
    ".mjs": "source.js",
    ".cjs": "source.js",
    ".jsx": "source.js.jsx",
    ".html": "source.js.embedded.html",
}


class FileDocument:
    """Saved file on disk presented through the ``Document`` protocol.

    The text is re-read on every access, so edits made on disk while a
    job is running are seen by the staleness check.
    """

    def __init__(self, path: Path) -> None:
        self._path = path.absolute()
        self._cursor: Position = (0, 0)
        self._reload_callbacks: list[Callable[[], None]] = []

    @property
    def path(self) -> str:
        return str(self._path)

    @property
    def text(self) -> str:
        return self._path.read_text(encoding="utf-8")

    def is_modified(self) -> bool:
        return False

    def get_cursor_position(self) -> Position:
        return self._cursor

    def set_cursor_position(self, position: Position) -> None:
        self._cursor = position

    def cursor_scopes(self) -> Sequence[Sequence[str]]:
        scope = _JS_SCOPES.get(self._path.suffix.lower())
        return [[scope]] if scope else [[]]

    def on_did_reload(self, callback: Callable[[], None]) -> Unsubscribe:
        self._reload_callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._reload_callbacks:
                self._reload_callbacks.remove(callback)

        return _unsubscribe

    def reload(self) -> None:
        """Notify subscribers that the file was rewritten on disk."""

        for callback in list(self._reload_callbacks):
            callback()


class FileWorkspace:
    """Single project rooted at ``root`` holding one active document."""

    def __init__(self, root: Path, document: FileDocument | None = None) -> None:
        self.root = root.absolute()
        self.document = document

    def active_document(self) -> FileDocument | None:
        return self.document

    def relativize_path(self, file_path: str) -> tuple[str | None, str]:
        """Split ``file_path`` into the workspace root and the path below it.

        Files outside the root are returned unchanged with no project.
        """

        absolute = os.path.abspath(file_path)
        try:
            relative = os.path.relpath(absolute, self.root)
        except ValueError:
            return None, absolute
        if relative == os.pardir or relative.startswith(os.pardir + os.sep):
            return None, absolute
        return str(self.root), relative

    def editor_version(self) -> str:
        return f"eslint-bridge CLI {__version__}"


__all__ = [
    "FileDocument",
    "FileWorkspace",
]
