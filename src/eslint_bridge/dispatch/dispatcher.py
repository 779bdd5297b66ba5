# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Caller-side ownership of the worker and request/response correlation.

The worker answers on a single response event and handles one job at a
time, so the dispatcher keeps exactly one pending call slot. A listener
thread owns the read side of the channel and settles whichever future
occupies the slot when the worker answers.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from threading import Lock, Thread
from typing import Any

from pydantic import ValidationError

from ..core.errors import DispatcherBusyError, EngineRuntimeError, WorkerUnavailable
from ..core.models import Job, JobResponse
from ..worker.protocol import SHUTDOWN_MESSAGE, WorkerResponse
from .launcher import ProcessWorkerLauncher, WorkerHandle, WorkerLauncher

LOGGER = logging.getLogger(__name__)


class Dispatcher:
    """Send jobs to the background worker, one at a time."""

    def __init__(self, launcher: WorkerLauncher | None = None) -> None:
        self._launcher: WorkerLauncher = launcher or ProcessWorkerLauncher()
        self._lock = Lock()
        self._handle: WorkerHandle | None = None
        self._pending: Future[JobResponse] | None = None
        self._busy = False
        self._terminated = False

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._handle is not None and self._handle.is_alive()

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._busy

    def start(self) -> None:
        """Launch the worker unless it is already running.

        Raises:
            WorkerUnavailable: If the dispatcher was terminated.
        """

        with self._lock:
            if self._terminated:
                raise WorkerUnavailable("The ESLint worker has been shut down.")
            if self._handle is None or not self._handle.is_alive():
                self._launch_locked()

    def send(self, job: Job) -> Future[JobResponse]:
        """Transmit ``job`` and return a future settled by the worker's response.

        A worker that exited on its own is relaunched first; a worker that
        was terminated explicitly is never relaunched.

        Args:
            job: Job to transmit.

        Returns:
            Future[JobResponse]: Future resolved with the job's response, or
            failed with the error the worker reported.

        Raises:
            WorkerUnavailable: If the dispatcher was terminated.
            DispatcherBusyError: If another job is still outstanding.
        """

        with self._lock:
            if self._terminated:
                raise WorkerUnavailable("The ESLint worker has been shut down.")
            if self._busy:
                raise DispatcherBusyError("A job is already in flight; wait for its response before sending another.")
            if self._handle is None or not self._handle.is_alive():
                self._launch_locked()
            handle = self._handle
            future: Future[JobResponse] = Future()
            future.set_running_or_notify_cancel()
            self._pending = future
            self._busy = True

        LOGGER.debug("sending %s job for %s", job.kind.value, job.file_path)
        try:
            handle.connection.send(job.model_dump(mode="json"))
        except (OSError, ValueError) as exc:
            self._settle(handle, error=WorkerUnavailable(f"Unable to reach the ESLint worker: {exc}"))
        return future

    def terminate(self) -> None:
        """Tear the worker down; every later ``send`` fails immediately."""

        with self._lock:
            self._terminated = True
            handle, self._handle = self._handle, None
            pending, self._pending = self._pending, None
            self._busy = False
        if handle is not None:
            try:
                handle.connection.send(SHUTDOWN_MESSAGE)
            except (OSError, ValueError):
                LOGGER.debug("worker channel already closed")
            handle.terminate()
        if pending is not None and not pending.done():
            pending.set_exception(WorkerUnavailable("The ESLint worker was shut down before it answered."))

    def reset(self) -> None:
        """Discard the current worker and any job it still owes an answer for.

        Used when a job outlives its caller's timeout. The pending future
        fails with ``WorkerUnavailable`` and the next ``send`` launches a
        fresh worker.
        """

        with self._lock:
            handle, self._handle = self._handle, None
            pending, self._pending = self._pending, None
            self._busy = False
        if handle is not None:
            LOGGER.debug("discarding unresponsive worker")
            handle.terminate()
        if pending is not None and not pending.done():
            pending.set_exception(WorkerUnavailable("The ESLint worker was restarted before it answered."))

    def _launch_locked(self) -> None:
        handle = self._launcher.launch()
        self._handle = handle
        listener = Thread(target=self._listen, args=(handle,), name="eslint-bridge-listener", daemon=True)
        listener.start()

    def _listen(self, handle: WorkerHandle) -> None:
        while True:
            try:
                raw = handle.connection.recv()
            except (EOFError, OSError):
                self._forget(handle)
                return
            self._deliver(handle, raw)

    def _forget(self, handle: WorkerHandle) -> None:
        """Drop ``handle`` after its channel closed so the next send relaunches.

        The slot is released before the pending future fails, so a caller
        reacting to the failure can send again straight away.
        """

        with self._lock:
            if handle is not self._handle:
                return
            self._handle = None
            future, self._pending = self._pending, None
            self._busy = False
        LOGGER.debug("worker channel closed without teardown")
        handle.terminate()
        if future is not None and not future.done():
            future.set_exception(WorkerUnavailable("The ESLint worker exited unexpectedly."))

    def _deliver(self, handle: WorkerHandle, raw: Any) -> None:
        try:
            response = WorkerResponse.model_validate(raw)
        except ValidationError as exc:
            self._settle(handle, error=EngineRuntimeError(f"Malformed worker response: {exc}"))
            return
        if response.ok and response.payload is not None:
            self._settle(handle, result=response.payload)
        elif response.error is not None:
            self._settle(handle, error=response.error.to_exception())
        else:
            self._settle(handle, error=EngineRuntimeError("The ESLint worker sent an empty response."))

    def _settle(
        self,
        handle: WorkerHandle,
        *,
        result: JobResponse | None = None,
        error: BaseException | None = None,
    ) -> None:
        with self._lock:
            if handle is not self._handle:
                return
            future, self._pending = self._pending, None
            self._busy = False
        if future is None or future.done():
            if error is None:
                LOGGER.debug("dropping response with no pending job")
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)


__all__ = ["Dispatcher"]
