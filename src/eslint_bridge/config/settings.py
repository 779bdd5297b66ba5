# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-configurable settings and the immutable snapshot sent with each job."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.errors import SettingsError

DEFAULT_SCOPES: Final[tuple[str, ...]] = (
    "source.js",
    "source.jsx",
    "source.js.jsx",
    "source.babel",
    "source.js-semantic",
)
EMBEDDED_HTML_SCOPE: Final[str] = "source.js.embedded.html"


class PathResolution(str, Enum):
    """Enumerate how file paths are reported to ESLint."""

    PROJECT = "project"
    ABSOLUTE = "absolute"


class LinterSettings(BaseModel):
    """Snapshot of every option the user can configure.

    Instances are frozen: a job carries the snapshot taken when it was built,
    so later settings changes never leak into work that is already in flight.
    Field aliases mirror the camelCase keys used by the settings surface.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    scopes: tuple[str, ...] = DEFAULT_SCOPES
    lint_html_files: bool = Field(default=False, alias="lintHtmlFiles")
    fix_on_save: bool = Field(default=False, alias="fixOnSave")
    show_rule_id_in_message: bool = Field(default=True, alias="showRuleIdInMessage")
    disable_when_no_eslint_config: bool = Field(default=True, alias="disableWhenNoEslintConfig")
    rules_to_silence_while_typing: tuple[str, ...] = Field(default=(), alias="rulesToSilenceWhileTyping")
    rules_to_disable_while_fixing: tuple[str, ...] = Field(default=(), alias="rulesToDisableWhileFixing")
    disable_fs_cache: bool = Field(default=False, alias="disableFSCache")
    disable_eslint_ignore: bool = Field(default=False, alias="disableEslintIgnore")
    path_resolution: PathResolution = Field(default=PathResolution.PROJECT, alias="pathResolution")
    use_global_eslint: bool = Field(default=False, alias="useGlobalEslint")
    global_node_path: str = Field(default="", alias="globalNodePath")
    advanced_local_node_modules: str = Field(default="", alias="advancedLocalNodeModules")
    eslintrc_path: str = Field(default="", alias="eslintrcPath")
    eslint_rules_dirs: tuple[str, ...] = Field(default=(), alias="eslintRulesDirs")

    @field_validator(
        "scopes",
        "rules_to_silence_while_typing",
        "rules_to_disable_while_fixing",
        "eslint_rules_dirs",
        mode="before",
    )
    @classmethod
    def _coerce_string_sequence(cls, value: Any) -> tuple[str, ...]:
        """Accept a comma separated string or any sequence of strings.

        Args:
            value: Raw value supplied by the settings surface.

        Returns:
            tuple[str, ...]: Stripped, non-empty entries in their original order.

        Raises:
            TypeError: If ``value`` is neither a string nor a sequence.
        """

        if value is None:
            return ()
        if isinstance(value, str):
            items: Sequence[Any] = value.split(",")
        elif isinstance(value, Sequence):
            items = value
        else:
            raise TypeError("expected a string or a sequence of strings")
        return tuple(str(item).strip() for item in items if str(item).strip())

    def with_changes(self, changes: Mapping[str, Any]) -> LinterSettings:
        """Return a new snapshot with ``changes`` applied and validated.

        Args:
            changes: Field names or camelCase aliases mapped to new values.

        Returns:
            LinterSettings: Validated snapshot carrying the updates.

        Raises:
            SettingsError: If the merged settings fail validation.
        """

        payload = self.model_dump(by_alias=True)
        payload.update(canonical_keys(changes))
        return settings_from_mapping(payload)

    def to_public_dict(self) -> dict[str, Any]:
        """Return the snapshot keyed by the settings-surface names."""

        return self.model_dump(mode="json", by_alias=True)


def canonical_keys(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite field names (snake or kebab case) to their camelCase aliases."""

    aliases = {name: field.alias for name, field in LinterSettings.model_fields.items() if field.alias}
    canonical: dict[str, Any] = {}
    for key, value in changes.items():
        name = key.replace("-", "_")
        canonical[aliases.get(name, name if name in LinterSettings.model_fields else key)] = value
    return canonical


def settings_from_mapping(data: Mapping[str, Any]) -> LinterSettings:
    """Validate raw settings data into a :class:`LinterSettings` snapshot.

    Args:
        data: Mapping keyed by field names or camelCase aliases.

    Returns:
        LinterSettings: Frozen snapshot.

    Raises:
        SettingsError: If validation fails.
    """

    try:
        return LinterSettings.model_validate(dict(data))
    except ValidationError as exc:
        raise SettingsError(f"Invalid eslint-bridge settings: {exc}") from exc


__all__ = [
    "DEFAULT_SCOPES",
    "EMBEDDED_HTML_SCOPE",
    "LinterSettings",
    "PathResolution",
    "canonical_keys",
    "settings_from_mapping",
]
