# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exception hierarchy shared by the worker and the caller side."""

from __future__ import annotations

from typing import Final


class BridgeError(RuntimeError):
    """Base class for every failure surfaced by eslint-bridge."""

    kind: str = "BridgeError"


class EngineInitError(BridgeError):
    """Raised when ESLint cannot be constructed for the resolved working directory."""

    kind = "EngineInitError"


class ConfigNotFound(EngineInitError):
    """Raised when ESLint reports that no configuration applies to a file."""

    kind = "ConfigNotFound"


class EngineRuntimeError(BridgeError):
    """Raised when ESLint fails unexpectedly while analysing a file."""

    kind = "EngineRuntimeError"


class WorkerUnavailable(BridgeError):
    """Raised when a job is sent to a worker that is not running."""

    kind = "WorkerUnavailable"


class DispatcherBusyError(BridgeError):
    """Raised when a second job is sent while another is still outstanding."""

    kind = "DispatcherBusyError"


class JobTimeoutError(BridgeError):
    """Raised when the worker does not answer a job within the allotted time."""

    kind = "JobTimeoutError"


class UnsavedDocument(BridgeError):
    """Raised when a fix is requested for a document with unsaved changes."""

    kind = "UnsavedDocument"


class InvalidLocationError(BridgeError):
    """Raised when an engine message points outside the document."""

    kind = "InvalidLocationError"


class SettingsError(BridgeError):
    """Raised when user settings cannot be loaded or validated."""

    kind = "SettingsError"


_ERROR_TYPES: Final[dict[str, type[BridgeError]]] = {
    cls.kind: cls
    for cls in (
        BridgeError,
        ConfigNotFound,
        EngineInitError,
        EngineRuntimeError,
        WorkerUnavailable,
        DispatcherBusyError,
        JobTimeoutError,
        UnsavedDocument,
        InvalidLocationError,
        SettingsError,
    )
}


def error_from_kind(kind: str, message: str) -> BridgeError:
    """Rebuild an exception reported across the worker boundary.

    Args:
        kind: Error kind recorded by the worker.
        message: Human-readable message recorded by the worker.

    Returns:
        BridgeError: Instance of the matching class, or ``EngineRuntimeError``
        when ``kind`` is not a known bridge error.
    """

    error_type = _ERROR_TYPES.get(kind, EngineRuntimeError)
    return error_type(message)


__all__ = [
    "BridgeError",
    "ConfigNotFound",
    "DispatcherBusyError",
    "EngineInitError",
    "EngineRuntimeError",
    "InvalidLocationError",
    "JobTimeoutError",
    "SettingsError",
    "UnsavedDocument",
    "WorkerUnavailable",
    "error_from_kind",
]
