# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Process-wide cache for ancestor-directory lookups.

Every job walks up from the linted file looking for configuration files,
ignore files and ``node_modules`` folders. The answers rarely change, so they
are memoised per ``(directory, names)`` pair until the user asks for the
filesystem cache to be bypassed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Final

LOGGER = logging.getLogger(__name__)

Matcher = Callable[[Path], bool]
CacheKey = tuple[Path, tuple[str, ...], Matcher]


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Describe the cache state.

    Attributes:
        current_size: Number of cached lookups.
        hits: Number of lookups answered from the cache.
    """

    current_size: int
    hits: int


def _exists(candidate: Path) -> bool:
    return candidate.exists()


class FindCache:
    """Memoise "nearest ancestor containing one of ``names``" lookups."""

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Path | None] = {}
        self._hits = 0
        self._lock = Lock()

    def find(self, start_dir: Path, names: Sequence[str], *, matcher: Matcher = _exists) -> Path | None:
        """Return the first matching entry in ``start_dir`` or its ancestors.

        Within a directory ``names`` are tried in order, so earlier names win.

        Args:
            start_dir: Directory where the search starts.
            names: Candidate entry names, relative paths allowed.
            matcher: Predicate deciding whether a candidate counts as a hit.

        Returns:
            Path | None: Absolute path of the first hit, or ``None`` when the
            filesystem root is reached without one.
        """

        key: CacheKey = (Path(start_dir).absolute(), tuple(names), matcher)
        with self._lock:
            if key in self._entries:
                self._hits += 1
                return self._entries[key]
        result = _walk(key[0], key[1], matcher)
        with self._lock:
            self._entries[key] = result
        return result

    def clear(self) -> None:
        """Forget every cached lookup."""

        with self._lock:
            self._entries.clear()
            self._hits = 0
        LOGGER.debug("find cache cleared")

    def info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(current_size=len(self._entries), hits=self._hits)


def _walk(start_dir: Path, names: tuple[str, ...], matcher: Matcher) -> Path | None:
    for directory in (start_dir, *start_dir.parents):
        for name in names:
            candidate = directory / name
            if matcher(candidate):
                return candidate
    return None


FIND_CACHE: Final[FindCache] = FindCache()


def find_cached(start_dir: Path | str, names: str | Sequence[str], *, matcher: Matcher = _exists) -> Path | None:
    """Look up ``names`` above ``start_dir`` through the shared cache.

    Args:
        start_dir: Directory where the search starts.
        names: One entry name or an ordered sequence of names.
        matcher: Predicate deciding whether a candidate counts as a hit.

    Returns:
        Path | None: First matching path, or ``None`` when nothing matched.
    """

    candidates = (names,) if isinstance(names, str) else tuple(names)
    return FIND_CACHE.find(Path(start_dir), candidates, matcher=matcher)


def clear_find_cache() -> None:
    FIND_CACHE.clear()


__all__ = [
    "FIND_CACHE",
    "CacheInfo",
    "FindCache",
    "clear_find_cache",
    "find_cached",
]
