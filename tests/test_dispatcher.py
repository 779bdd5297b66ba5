# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the caller-side dispatcher."""

from __future__ import annotations

import multiprocessing
from pathlib import Path
from threading import Event, Thread

import pytest

from eslint_bridge.core.errors import DispatcherBusyError, EngineInitError, WorkerUnavailable
from eslint_bridge.core.models import FixResponse, Job, JobKind, LintResponse
from eslint_bridge.dispatch.dispatcher import Dispatcher
from eslint_bridge.worker.executor import FIX_INCOMPLETE

from fakes import HangOnceLauncher, StubEngine, ThreadWorkerHandle, ThreadWorkerLauncher, executor_for, report_of

_TIMEOUT = 5.0


def _job(project: Path, kind: JobKind = JobKind.LINT) -> Job:
    file_path = project / "src" / "app.js"
    file_path.write_text("foo\n", encoding="utf-8")
    text = "foo\n" if kind is JobKind.LINT else None
    return Job(kind=kind, file_path=str(file_path), project_path=str(project), text=text)


def test_send_resolves_with_worker_response(project: Path) -> None:
    engine = StubEngine(report_of({"ruleId": "semi", "message": "Missing semicolon.", "line": 1, "column": 4}))
    dispatcher = Dispatcher(ThreadWorkerLauncher(executor_for(engine)))
    try:
        response = dispatcher.send(_job(project)).result(timeout=_TIMEOUT)
        fix = dispatcher.send(_job(project, JobKind.FIX)).result(timeout=_TIMEOUT)
    finally:
        dispatcher.terminate()

    assert isinstance(response, LintResponse)
    assert response.messages[0].rule_id == "semi"
    assert isinstance(fix, FixResponse)
    assert fix.status == FIX_INCOMPLETE


def test_worker_errors_are_reraised_as_matching_class(project: Path) -> None:
    def explode() -> None:
        raise EngineInitError("Failed to load plugin 'react'")

    dispatcher = Dispatcher(ThreadWorkerLauncher(executor_for(StubEngine(on_call=explode))))
    try:
        future = dispatcher.send(_job(project))
        with pytest.raises(EngineInitError, match="react"):
            future.result(timeout=_TIMEOUT)
        assert not dispatcher.busy
    finally:
        dispatcher.terminate()


def test_overlapping_send_is_rejected(project: Path) -> None:
    release = Event()
    engine = StubEngine(on_call=lambda: release.wait(_TIMEOUT))
    dispatcher = Dispatcher(ThreadWorkerLauncher(executor_for(engine)))
    try:
        first = dispatcher.send(_job(project))
        assert dispatcher.busy
        with pytest.raises(DispatcherBusyError):
            dispatcher.send(_job(project))
        release.set()
        assert isinstance(first.result(timeout=_TIMEOUT), LintResponse)
        assert not dispatcher.busy
    finally:
        release.set()
        dispatcher.terminate()


def test_reset_frees_slot_held_by_unresponsive_worker(project: Path) -> None:
    launcher = HangOnceLauncher(executor_for(StubEngine()))
    dispatcher = Dispatcher(launcher)
    try:
        stuck = dispatcher.send(_job(project))
        with pytest.raises(DispatcherBusyError):
            dispatcher.send(_job(project))

        dispatcher.reset()

        with pytest.raises(WorkerUnavailable):
            stuck.result(timeout=_TIMEOUT)
        assert not dispatcher.busy
        response = dispatcher.send(_job(project)).result(timeout=_TIMEOUT)
    finally:
        dispatcher.terminate()

    assert isinstance(response, LintResponse)
    assert launcher.launches == 2


def test_send_after_terminate_fails_without_transmitting(project: Path) -> None:
    launcher = ThreadWorkerLauncher(executor_for(StubEngine()))
    dispatcher = Dispatcher(launcher)
    dispatcher.start()
    dispatcher.terminate()

    with pytest.raises(WorkerUnavailable):
        dispatcher.send(_job(project))
    with pytest.raises(WorkerUnavailable):
        dispatcher.start()
    assert launcher.launches == 1
    assert not dispatcher.is_running


def test_terminate_fails_pending_job(project: Path) -> None:
    release = Event()
    engine = StubEngine(on_call=lambda: release.wait(_TIMEOUT))
    dispatcher = Dispatcher(ThreadWorkerLauncher(executor_for(engine)))
    future = dispatcher.send(_job(project))

    dispatcher.terminate()
    release.set()

    with pytest.raises(WorkerUnavailable):
        future.result(timeout=_TIMEOUT)


class _CrashOnceLauncher(ThreadWorkerLauncher):
    """First worker exits as soon as it receives a job; later ones behave."""

    def launch(self) -> ThreadWorkerHandle:
        if self.launches > 0:
            return super().launch()
        self.launches += 1
        parent_end, child_end = multiprocessing.Pipe(duplex=True)

        def _crash() -> None:
            child_end.recv()
            child_end.close()

        thread = Thread(target=_crash, daemon=True)
        thread.start()
        return ThreadWorkerHandle(channel=parent_end, thread=thread)


def test_dead_worker_fails_pending_job_and_is_relaunched(project: Path) -> None:
    launcher = _CrashOnceLauncher(executor_for(StubEngine()))
    dispatcher = Dispatcher(launcher)
    try:
        with pytest.raises(WorkerUnavailable):
            dispatcher.send(_job(project)).result(timeout=_TIMEOUT)
        response = dispatcher.send(_job(project)).result(timeout=_TIMEOUT)
    finally:
        dispatcher.terminate()

    assert isinstance(response, LintResponse)
    assert launcher.launches == 2
