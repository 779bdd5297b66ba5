# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Wire format exchanged between the dispatcher and the worker process.

The channel carries exactly two payload types: a :class:`~eslint_bridge.core.models.Job`
dumped to a plain mapping on the way in, and a :class:`WorkerResponse` on the way
out. Messages are plain dicts so the transport never pickles project classes.
"""

from __future__ import annotations

from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict

from ..core.errors import BridgeError, error_from_kind
from ..core.models import JobResponse

RESPONSE_EVENT: Final[str] = "eslint-bridge:response"
SHUTDOWN_MESSAGE: Final[str] = "eslint-bridge:shutdown"


class WorkerErrorPayload(BaseModel):
    """Failure reported by the worker for one job."""

    model_config = ConfigDict(frozen=True)

    kind: str
    message: str

    def to_exception(self) -> BridgeError:
        return error_from_kind(self.kind, self.message)


class WorkerResponse(BaseModel):
    """Envelope emitted once per job on the single response event."""

    model_config = ConfigDict(frozen=True)

    event: Literal["eslint-bridge:response"] = RESPONSE_EVENT
    ok: bool
    payload: JobResponse | None = None
    error: WorkerErrorPayload | None = None

    @classmethod
    def success(cls, payload: JobResponse) -> WorkerResponse:
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, exc: BaseException) -> WorkerResponse:
        """Build a rejected response describing ``exc``."""

        kind = exc.kind if isinstance(exc, BridgeError) else "EngineRuntimeError"
        message = str(exc) or type(exc).__name__
        return cls(ok=False, error=WorkerErrorPayload(kind=kind, message=message))

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


__all__ = [
    "RESPONSE_EVENT",
    "SHUTDOWN_MESSAGE",
    "WorkerErrorPayload",
    "WorkerResponse",
]
