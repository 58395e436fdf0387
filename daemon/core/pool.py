from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Set

from shared.protocol import FrameStream
from shared.protocol.constants import DEFAULT_CAPACITY
from shared.protocol.errors import ConcurrencyError

logger = logging.getLogger(__name__)

Acceptor = Callable[[], Awaitable[FrameStream]]
SessionHandler = Callable[[FrameStream], Awaitable[Any]]


class AdmissionController:
    """Accept loop that keeps at most ``capacity`` session tasks alive.

    The controller is the only owner of the active set; it is touched from the
    event loop thread alone, so no lock is needed. Connections beyond capacity
    stay queued in the listen backlog until a slot is reaped.
    """

    def __init__(self, accept: Acceptor, handler: SessionHandler, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._accept = accept
        self._handler = handler
        self.capacity = capacity
        self._active: Set[asyncio.Task] = set()
        self.dispatched = 0
        self.peak = 0

    @property
    def active_count(self) -> int:
        return len(self._active)

    async def run(self) -> None:
        while True:
            await self.step()

    async def step(self) -> None:
        """One pass: admit a connection or wait for a slot, then sweep."""
        if self.active_count < self.capacity:
            stream = await self._accept()
            self._dispatch(stream)
        else:
            reaped = await self._block_reap()
            logger.debug("Pool full, reaped %s finished session(s)", reaped)
        self._sweep()

    def _dispatch(self, stream: FrameStream) -> None:
        coro = self._handler(stream)
        try:
            task = asyncio.create_task(coro, name=f"session-{self.dispatched}")
        except (RuntimeError, MemoryError) as exc:
            coro.close()
            raise ConcurrencyError(f"Could not start a session task: {exc}") from exc
        self._active.add(task)
        self.dispatched += 1
        self.peak = max(self.peak, self.active_count)
        logger.debug("Dispatched %s for %s (%s/%s active)", task.get_name(), stream.peername, self.active_count, self.capacity)

    async def _block_reap(self) -> int:
        done, _ = await asyncio.wait(self._active, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            self._reap(task)
        return len(done)

    def _sweep(self) -> int:
        finished = [task for task in self._active if task.done()]
        for task in finished:
            self._reap(task)
        return len(finished)

    def _reap(self, task: asyncio.Task) -> None:
        self._active.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Session task %s failed: %s", task.get_name(), exc, exc_info=exc)

    async def shutdown(self) -> None:
        for task in self._active:
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await asyncio.gather(*self._active, return_exceptions=True)
        self._active.clear()


__all__ = ["AdmissionController", "Acceptor", "SessionHandler"]
