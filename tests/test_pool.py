from __future__ import annotations

import asyncio
import contextlib
from types import SimpleNamespace

import pytest

from conftest import wait_until
from daemon.core import AdmissionController
from shared.protocol.errors import ConcurrencyError


class ScriptedSessions:
    """Hands out queued fake connections and holds each session open until released."""

    def __init__(self, count: int) -> None:
        self.pending: asyncio.Queue = asyncio.Queue()
        self.release = {}
        self.running = 0
        self.max_running = 0
        self.finished = 0
        for idx in range(count):
            self.pending.put_nowait(SimpleNamespace(peername=f"peer-{idx}"))
            self.release[f"peer-{idx}"] = asyncio.Event()

    async def accept(self):
        return await self.pending.get()

    async def handle(self, stream) -> None:
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            await self.release[stream.peername].wait()
        finally:
            self.running -= 1
            self.finished += 1


def test_capacity_is_never_exceeded_and_sixth_waits():
    async def scenario():
        sessions = ScriptedSessions(7)
        controller = AdmissionController(sessions.accept, sessions.handle, capacity=5)
        runner = asyncio.create_task(controller.run())
        try:
            await wait_until(lambda: controller.dispatched == 5)
            await asyncio.sleep(0.05)
            # the 6th and 7th connections are queued, not dropped
            assert controller.dispatched == 5
            assert controller.active_count == 5
            assert sessions.pending.qsize() == 2

            sessions.release["peer-0"].set()
            await wait_until(lambda: controller.dispatched == 6)
            assert controller.active_count <= 5

            for event in sessions.release.values():
                event.set()
            await wait_until(lambda: sessions.finished == 7)
            assert controller.dispatched == 7
            assert controller.peak <= 5
            assert sessions.max_running <= 5
        finally:
            runner.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await runner
            await controller.shutdown()

    asyncio.run(scenario())


def test_sweep_reaps_finished_sessions_without_blocking():
    async def scenario():
        sessions = ScriptedSessions(3)
        for event in sessions.release.values():
            event.set()
        controller = AdmissionController(sessions.accept, sessions.handle, capacity=5)

        await controller.step()
        await controller.step()
        await asyncio.sleep(0.01)
        await controller.step()
        # the first two sessions finished and were reaped by the sweep
        assert controller.dispatched == 3
        assert controller.active_count <= 1
        await controller.shutdown()

    asyncio.run(scenario())


def test_failed_session_is_reaped_and_logged(caplog):
    async def scenario():
        async def accept():
            return SimpleNamespace(peername="boom")

        async def handle(stream):
            raise RuntimeError("worker crashed")

        controller = AdmissionController(accept, handle, capacity=1)
        await controller.step()
        await controller.step()  # pool full: blocks until the crashed task is reaped
        assert controller.active_count == 0
        await controller.shutdown()

    asyncio.run(scenario())
    assert "worker crashed" in caplog.text


def test_task_creation_failure_is_fatal(monkeypatch):
    def refuse(*args, **kwargs):
        raise RuntimeError("cannot start new task")

    async def scenario():
        async def accept():
            return SimpleNamespace(peername="peer")

        async def handle(stream):
            return None

        controller = AdmissionController(accept, handle)
        monkeypatch.setattr("daemon.core.pool.asyncio.create_task", refuse)
        with pytest.raises(ConcurrencyError):
            await controller.step()

    asyncio.run(scenario())


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        AdmissionController(None, None, capacity=0)
