# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Long-lived worker loop that answers one job at a time."""

from __future__ import annotations

import logging
import multiprocessing
import signal
import sys
from pathlib import Path
from types import FrameType
from typing import Any, Final, Protocol

from pydantic import ValidationError

from ..core.errors import EngineRuntimeError
from ..core.models import Job
from ..resolution.config_path import resolve_config_path
from ..resolution.find_cache import clear_find_cache
from .executor import JobExecutor
from .protocol import SHUTDOWN_MESSAGE, WorkerResponse

LOGGER = logging.getLogger(__name__)

WORKER_PROCESS_NAME: Final[str] = "eslint-bridge worker"


class Connection(Protocol):
    """Duplex channel the worker reads jobs from and writes responses to."""

    def recv(self) -> Any: ...

    def send(self, obj: Any) -> None: ...

    def close(self) -> None: ...


def handle_job(raw_job: Any, executor: JobExecutor) -> WorkerResponse:
    """Resolve configuration for ``raw_job``, execute it and wrap the outcome.

    Every failure, including malformed jobs, becomes a rejected response so a
    single bad job never takes the worker down.

    Args:
        raw_job: Job mapping received from the dispatcher.
        executor: Executor running the job against ESLint.

    Returns:
        WorkerResponse: Exactly one response for the job.
    """

    try:
        job = Job.model_validate(raw_job)
    except ValidationError as exc:
        return WorkerResponse.failure(EngineRuntimeError(f"Malformed job: {exc}"))
    try:
        if job.config.disable_fs_cache:
            clear_find_cache()
        location = resolve_config_path(Path(job.file_path).parent)
        return WorkerResponse.success(executor.execute(job, location))
    except Exception as exc:  # noqa: BLE001
        LOGGER.debug("%s job for %s failed", job.kind.value, job.file_path, exc_info=True)
        return WorkerResponse.failure(exc)


def serve(connection: Connection, executor: JobExecutor | None = None) -> None:
    """Answer jobs from ``connection`` until it closes or a shutdown arrives.

    Args:
        connection: Channel shared with the dispatcher.
        executor: Executor used for every job; a default one is built when omitted.
    """

    active_executor = executor or JobExecutor()
    while True:
        try:
            raw_job = connection.recv()
        except (EOFError, OSError):
            LOGGER.debug("dispatcher channel closed, worker exiting")
            break
        if raw_job == SHUTDOWN_MESSAGE:
            break
        response = handle_job(raw_job, active_executor)
        try:
            connection.send(response.to_wire())
        except (BrokenPipeError, OSError):
            LOGGER.debug("dispatcher went away before the response was delivered")
            break


def _terminate(_signum: int, _frame: FrameType | None) -> None:
    sys.exit(0)


def run_worker(connection: Connection) -> None:
    """Process entry point used by the dispatcher's process launcher."""

    multiprocessing.current_process().name = WORKER_PROCESS_NAME
    signal.signal(signal.SIGTERM, _terminate)
    try:
        serve(connection)
    finally:
        connection.close()


__all__ = [
    "Connection",
    "WORKER_PROCESS_NAME",
    "handle_job",
    "run_worker",
    "serve",
]
