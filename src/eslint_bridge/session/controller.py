# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decide when jobs run and turn their responses into editor updates."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import TimeoutError as FutureTimeoutError
from enum import Enum
from pathlib import Path
from threading import Lock
from typing import Final, TypeVar

from ..config.settings import LinterSettings
from ..config.state import SettingsState
from ..core.errors import BridgeError, EngineRuntimeError, JobTimeoutError, UnsavedDocument
from ..core.models import DebugResponse, Diagnostic, FixResponse, Job, JobKind, JobResponse, LintResponse
from ..dispatch.dispatcher import Dispatcher
from ..resolution.config_path import has_project_config, resolve_config_path
from ..resolution.find_cache import clear_find_cache
from .debug import DEBUG_TITLE, build_debug_report
from .interfaces import Document, Notifier, Unsubscribe, Workspace
from .messages import to_diagnostics

LOGGER = logging.getLogger(__name__)

SAVE_BEFORE_FIX: Final[str] = "ESLint: Please save before fixing"
DEFAULT_JOB_TIMEOUT: Final[float] = 30.0

_ResponseT = TypeVar("_ResponseT", LintResponse, FixResponse, DebugResponse)


class DocumentState(str, Enum):
    """Lint lifecycle of a single open document."""

    IDLE = "idle"
    LINTING = "linting"
    STALE_DISCARD = "stale-discard"


class SessionController:
    """Editor-facing orchestration of lint, fix and debug jobs.

    The controller owns the settings state and the dispatcher. Jobs are sent
    one at a time under a lock and each call blocks until the worker answers
    or ``job_timeout`` elapses.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        workspace: Workspace,
        notifier: Notifier,
        settings: LinterSettings | None = None,
        *,
        job_timeout: float | None = DEFAULT_JOB_TIMEOUT,
    ) -> None:
        self._dispatcher = dispatcher
        self._workspace = workspace
        self._notifier = notifier
        self._state = SettingsState(settings)
        self._job_timeout = job_timeout
        self._send_lock = Lock()
        self._states_lock = Lock()
        self._document_states: dict[int, DocumentState] = {}

    @property
    def settings(self) -> LinterSettings:
        return self._state.settings

    @property
    def scopes(self) -> tuple[str, ...]:
        return self._state.scopes

    def update_settings(self, settings: LinterSettings) -> None:
        """Adopt a new settings snapshot; jobs already sent keep their own copy."""

        self._state.update(settings)

    def state_of(self, document: Document) -> DocumentState:
        with self._states_lock:
            return self._document_states.get(id(document), DocumentState.IDLE)

    def lint(self, document: Document) -> list[Diagnostic] | None:
        """Lint the live text of ``document``.

        Args:
            document: Buffer to lint.

        Returns:
            list[Diagnostic] | None: Diagnostics in engine order, or ``None``
            when the buffer changed while the job was in flight and the
            result was discarded.

        Raises:
            BridgeError: If the job fails, times out or reports an invalid range.
        """

        text = document.text
        if not text:
            return []
        file_path = document.path or ""
        overrides = self._state.silence_while_typing if document.is_modified() else {}
        job = self._build_job(JobKind.LINT, file_path, text=text, overrides=overrides)

        self._set_state(document, DocumentState.LINTING)
        try:
            response = self._round_trip(job, LintResponse)
        except BaseException:
            self._set_state(document, DocumentState.IDLE)
            raise

        if document.text != text:
            LOGGER.debug("discarding stale lint result for %s", file_path)
            self._set_state(document, DocumentState.STALE_DISCARD)
            return None
        try:
            return to_diagnostics(
                response.messages,
                text,
                document.path,
                show_rule=self.settings.show_rule_id_in_message,
            )
        finally:
            self._set_state(document, DocumentState.IDLE)

    def fix_job(self, document: Document | None = None, *, is_save: bool = False) -> str | None:
        """Run ESLint's autofix over the saved file behind ``document``.

        Failures are reported through the notifier rather than raised.

        Args:
            document: Buffer to fix; the active document when omitted.
            is_save: ``True`` when triggered by a save, which suppresses the
                success notification.

        Returns:
            str | None: The fix status line, or ``None`` when nothing ran.
        """

        try:
            target, file_path = self._saved_document(document)
        except UnsavedDocument as exc:
            self._notifier.warning(str(exc))
            return None

        settings = self.settings
        if settings.disable_fs_cache:
            clear_find_cache()
        if settings.disable_when_no_eslint_config and not has_project_config(
            resolve_config_path(Path(file_path).parent)
        ):
            LOGGER.debug("no project configuration for %s, fix skipped", file_path)
            return None

        cursor = target.get_cursor_position()
        unsubscribe_holder: list[Unsubscribe] = []

        def _restore_cursor() -> None:
            target.set_cursor_position(cursor)
            if unsubscribe_holder:
                unsubscribe_holder.pop()()

        unsubscribe_holder.append(target.on_did_reload(_restore_cursor))
        job = self._build_job(JobKind.FIX, file_path, overrides=self._state.disable_while_fixing)
        try:
            response = self._round_trip(job, FixResponse)
        except BridgeError as exc:
            if unsubscribe_holder:
                unsubscribe_holder.pop()()
            self._notifier.warning(str(exc))
            return None

        if not is_save and response.status:
            self._notifier.success(response.status)
        target.set_cursor_position(cursor)
        return response.status

    def on_did_save(self, document: Document) -> str | None:
        """Fix ``document`` after a save when fix-on-save applies to it."""

        if not self.settings.fix_on_save:
            return None
        scopes = set(self._state.scopes)
        if not any(scope in scopes for cursor in document.cursor_scopes() for scope in cursor):
            return None
        return self.fix_job(document, is_save=True)

    def debug(self, document: Document | None = None) -> str:
        """Describe the ESLint installation and settings used for ``document``.

        The report is also shown as an informational notification.

        Raises:
            BridgeError: If the worker cannot describe the installation.
        """

        target = document if document is not None else self._workspace.active_document()
        file_path = (target.path if target is not None else None) or str(Path.cwd() / "debug.js")
        installation = self._round_trip(self._build_job(JobKind.DEBUG, file_path), DebugResponse)
        report = build_debug_report(
            editor_version=self._workspace.editor_version(),
            settings=self.settings,
            installation=installation,
            cursor_scopes=target.cursor_scopes() if target is not None else (),
        ).render()
        self._notifier.info(DEBUG_TITLE, detail=report)
        return report

    def shutdown(self) -> None:
        self._dispatcher.terminate()

    def _saved_document(self, document: Document | None) -> tuple[Document, str]:
        target = document if document is not None else self._workspace.active_document()
        if target is None or target.path is None or target.is_modified():
            raise UnsavedDocument(SAVE_BEFORE_FIX)
        return target, target.path

    def _build_job(
        self,
        kind: JobKind,
        file_path: str,
        *,
        text: str | None = None,
        overrides: Mapping[str, int] | None = None,
    ) -> Job:
        project_path, _relative = self._workspace.relativize_path(file_path)
        return Job(
            kind=kind,
            file_path=file_path,
            project_path=project_path or "",
            text=text,
            config=self.settings,
            rule_overrides=dict(overrides or {}),
        )

    def _round_trip(self, job: Job, expected: type[_ResponseT]) -> _ResponseT:
        with self._send_lock:
            future = self._dispatcher.send(job)
            try:
                response: JobResponse = future.result(timeout=self._job_timeout)
            except FutureTimeoutError as exc:
                self._dispatcher.reset()
                raise JobTimeoutError(
                    f"ESLint did not answer the {job.kind.value} job for {job.file_path} "
                    f"within {self._job_timeout} seconds"
                ) from exc
        if not isinstance(response, expected):
            raise EngineRuntimeError(f"Unexpected {response.kind} response to a {job.kind.value} job")
        return response

    def _set_state(self, document: Document, state: DocumentState) -> None:
        with self._states_lock:
            if state is DocumentState.IDLE:
                self._document_states.pop(id(document), None)
            else:
                self._document_states[id(document)] = state


__all__ = [
    "DEFAULT_JOB_TIMEOUT",
    "DocumentState",
    "SAVE_BEFORE_FIX",
    "SessionController",
]
