# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Start the background worker and expose a handle to it."""

from __future__ import annotations

import logging
import multiprocessing
from dataclasses import dataclass
from multiprocessing.connection import Connection
from multiprocessing.process import BaseProcess
from typing import Final, Protocol, runtime_checkable

from ..worker.process import WORKER_PROCESS_NAME, run_worker

LOGGER = logging.getLogger(__name__)

_JOIN_TIMEOUT: Final[float] = 2.0


@runtime_checkable
class WorkerHandle(Protocol):
    """Live worker: its channel plus lifecycle controls."""

    @property
    def connection(self) -> Connection: ...

    def is_alive(self) -> bool: ...

    def terminate(self) -> None: ...


class WorkerLauncher(Protocol):
    """Factory producing fresh worker handles."""

    def launch(self) -> WorkerHandle: ...


@dataclass(slots=True)
class ProcessWorkerHandle:
    """Worker running in a separate OS process."""

    process: BaseProcess
    channel: Connection

    @property
    def connection(self) -> Connection:
        return self.channel

    def is_alive(self) -> bool:
        return self.process.is_alive()

    def terminate(self) -> None:
        """Stop the worker process and release the channel."""

        if self.process.is_alive():
            self.process.terminate()
            self.process.join(_JOIN_TIMEOUT)
            if self.process.is_alive():
                self.process.kill()
                self.process.join(_JOIN_TIMEOUT)
        self.channel.close()


class ProcessWorkerLauncher:
    """Launch the worker with the ``spawn`` start method and a duplex pipe."""

    def __init__(self, *, start_method: str = "spawn") -> None:
        self._context = multiprocessing.get_context(start_method)

    def launch(self) -> ProcessWorkerHandle:
        parent_end, child_end = self._context.Pipe(duplex=True)
        process = self._context.Process(
            target=run_worker,
            args=(child_end,),
            name=WORKER_PROCESS_NAME,
            daemon=True,
        )
        process.start()
        # The child owns its end now; keeping ours open would hide EOF on exit.
        child_end.close()
        LOGGER.debug("started worker pid=%s", process.pid)
        return ProcessWorkerHandle(process=process, channel=parent_end)


__all__ = [
    "ProcessWorkerHandle",
    "ProcessWorkerLauncher",
    "WorkerHandle",
    "WorkerLauncher",
]
