# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings state owned by the session controller and its derived caches."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from ..core.severity import RuleOverrideSet, ids_to_disabled_rules
from .settings import EMBEDDED_HTML_SCOPE, LinterSettings

LOGGER = logging.getLogger(__name__)


class SettingsState:
    """Current settings snapshot plus the values derived from it.

    Derived values are rebuilt only when :meth:`update` sees the relevant
    setting change; job construction reads them without recomputation.
    """

    def __init__(self, settings: LinterSettings | None = None) -> None:
        self._settings = settings or LinterSettings()
        self._scopes: tuple[str, ...] = ()
        self._silence_while_typing: RuleOverrideSet = {}
        self._disable_while_fixing: RuleOverrideSet = {}
        self._rebuild(previous=None)

    @property
    def settings(self) -> LinterSettings:
        return self._settings

    @property
    def scopes(self) -> tuple[str, ...]:
        """Return the editor scopes the linter applies to."""

        return self._scopes

    @property
    def silence_while_typing(self) -> Mapping[str, int]:
        return MappingProxyType(self._silence_while_typing)

    @property
    def disable_while_fixing(self) -> Mapping[str, int]:
        return MappingProxyType(self._disable_while_fixing)

    def update(self, settings: LinterSettings) -> None:
        """Adopt a new settings snapshot and refresh what depends on it.

        Args:
            settings: Snapshot delivered by the settings-change notification.
        """

        previous, self._settings = self._settings, settings
        self._rebuild(previous=previous)

    def _rebuild(self, *, previous: LinterSettings | None) -> None:
        current = self._settings
        if previous is None or (previous.scopes, previous.lint_html_files) != (
            current.scopes,
            current.lint_html_files,
        ):
            scopes = [scope for scope in current.scopes if scope != EMBEDDED_HTML_SCOPE]
            if current.lint_html_files:
                scopes.append(EMBEDDED_HTML_SCOPE)
            self._scopes = tuple(scopes)
        if previous is None or previous.rules_to_silence_while_typing != current.rules_to_silence_while_typing:
            self._silence_while_typing = ids_to_disabled_rules(current.rules_to_silence_while_typing)
            LOGGER.debug("rules silenced while typing: %s", sorted(self._silence_while_typing))
        if previous is None or previous.rules_to_disable_while_fixing != current.rules_to_disable_while_fixing:
            self._disable_while_fixing = ids_to_disabled_rules(current.rules_to_disable_while_fixing)
            LOGGER.debug("rules disabled while fixing: %s", sorted(self._disable_while_fixing))


__all__ = ["SettingsState"]
