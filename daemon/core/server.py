from __future__ import annotations

import asyncio
import logging
import socket
from typing import Optional

from shared.cipher import Mode
from shared.protocol import FrameStream
from shared.protocol.constants import DEFAULT_CAPACITY, DEFAULT_SESSION_TIMEOUT
from shared.protocol.errors import NetworkError

from .pool import AdmissionController
from .session import SessionWorker

logger = logging.getLogger(__name__)


class CipherDaemon:
    """Listening endpoint plus the admission loop that serves cipher sessions."""

    def __init__(
        self,
        host: str,
        port: int,
        mode: Mode = Mode.DECRYPT,
        capacity: int = DEFAULT_CAPACITY,
        session_timeout: float = DEFAULT_SESSION_TIMEOUT,
        backlog: int = 10,
        max_frame_size: int = 0,
    ) -> None:
        self.host = host
        self.port = port
        self.mode = Mode(mode)
        self.session_timeout = session_timeout
        self.backlog = backlog
        self.max_frame_size = max_frame_size
        self.controller = AdmissionController(self._accept, self._handle_session, capacity=capacity)
        self._sock: Optional[socket.socket] = None

    def start(self) -> None:
        try:
            self._sock = socket.create_server((self.host, self.port), backlog=self.backlog)
        except OSError as exc:
            raise NetworkError(f"Could not listen on {self.host}:{self.port}: {exc}") from exc
        self._sock.setblocking(False)
        self.port = self._sock.getsockname()[1]
        logger.info("Daemon (%s) listening on %s:%s", self.mode.value, self.host, self.port)

    async def serve_forever(self) -> None:
        if self._sock is None:
            self.start()
        try:
            await self.controller.run()
        finally:
            await self.stop()

    async def stop(self) -> None:
        await self.controller.shutdown()
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    async def _accept(self) -> FrameStream:
        assert self._sock is not None
        loop = asyncio.get_running_loop()
        try:
            conn, addr = await loop.sock_accept(self._sock)
            reader, writer = await asyncio.open_connection(sock=conn)
        except OSError as exc:
            raise NetworkError(f"Accept failed: {exc}") from exc
        logger.debug("Accepted connection from %s", addr)
        return FrameStream(reader, writer, timeout=self.session_timeout, max_frame_size=self.max_frame_size)

    async def _handle_session(self, stream: FrameStream) -> Optional[str]:
        return await SessionWorker(stream, self.mode).run()


__all__ = ["CipherDaemon"]
