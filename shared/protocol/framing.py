from __future__ import annotations

import asyncio
import logging
import socket
from typing import Awaitable, Optional, TypeVar

from .constants import BUFFER_MARGIN, ENCODING, INITIAL_BUFFER_SIZE, READ_CHUNK_LIMIT, SENTINEL
from .errors import NetworkError, ResourceError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def encode_frame(payload: bytes) -> bytes:
    """Append the sentinel to a payload, refusing payloads that contain it."""
    if SENTINEL in payload:
        raise TransportError(f"Payload contains the frame sentinel {SENTINEL!r}")
    return payload + SENTINEL


def decode_frame(data: bytes) -> bytes:
    """Strip the trailing sentinel from a single complete frame."""
    if not data.endswith(SENTINEL):
        raise TransportError("Frame is missing its sentinel")
    return data[: -len(SENTINEL)]


class FrameStream:
    """Sentinel-delimited frames over an asyncio stream pair.

    Bytes that arrive after a sentinel belong to the next frame and are kept
    in ``_pending`` until the next ``receive_frame`` call, so a peer may send
    several frames back to back.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        timeout: Optional[float] = None,
        max_frame_size: int = 0,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.timeout = timeout or None
        self.max_frame_size = max_frame_size
        # buffer capacity the last receive_frame grew to; diagnostic only
        self.capacity = INITIAL_BUFFER_SIZE
        self._pending = bytearray()

    @classmethod
    async def connect(
        cls,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        max_frame_size: int = 0,
    ) -> "FrameStream":
        try:
            reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout or None)
        except socket.gaierror as exc:
            raise NetworkError(f"Could not resolve host {host}: {exc}") from exc
        except (OSError, asyncio.TimeoutError) as exc:
            raise NetworkError(f"Could not connect to {host}:{port}: {exc}") from exc
        return cls(reader, writer, timeout=timeout, max_frame_size=max_frame_size)

    @property
    def peername(self) -> str:
        return str(self.writer.get_extra_info("peername"))

    async def _bounded(self, awaitable: Awaitable[T], action: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, self.timeout)
        except asyncio.TimeoutError as exc:
            raise TransportError(f"Timed out after {self.timeout}s while {action}") from exc

    async def send_frame(self, payload: bytes) -> None:
        data = encode_frame(payload)
        try:
            self.writer.write(data)
            await self._bounded(self.writer.drain(), "writing a frame")
        except (ConnectionError, OSError) as exc:
            raise TransportError(f"Send failed: {exc}") from exc
        logger.debug("Sent frame of %s bytes to %s", len(payload), self.peername)

    async def receive_frame(self) -> bytes:
        buffer = self._pending
        self._pending = bytearray()
        capacity = INITIAL_BUFFER_SIZE
        scan_from = 0

        while True:
            index = buffer.find(SENTINEL, scan_from)
            if index != -1:
                end = index + len(SENTINEL)
                self._pending = buffer[end:]
                self.capacity = capacity
                logger.debug("Received frame of %s bytes from %s (capacity %s)", index, self.peername, capacity)
                return decode_frame(bytes(buffer[:end]))

            # A sentinel may straddle two reads; rescan its possible prefix.
            scan_from = max(0, len(buffer) - (len(SENTINEL) - 1))
            while len(buffer) > capacity // 2:
                capacity *= 2
            if self.max_frame_size and len(buffer) > self.max_frame_size:
                raise ResourceError(f"Frame exceeds {self.max_frame_size} bytes without a sentinel")

            want = min(capacity - len(buffer) - BUFFER_MARGIN, READ_CHUNK_LIMIT)
            try:
                chunk = await self._bounded(self.reader.read(want), "reading a frame")
            except (ConnectionError, OSError) as exc:
                raise TransportError(f"Receive failed: {exc}") from exc
            if not chunk:
                raise TransportError(f"Peer closed after {len(buffer)} bytes without sending a sentinel")
            buffer.extend(chunk)

    async def send_text(self, text: str) -> None:
        await self.send_frame(text.encode(ENCODING))

    async def receive_text(self) -> str:
        return (await self.receive_frame()).decode(ENCODING, errors="replace")

    async def close(self) -> None:
        try:
            self.writer.close()
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as exc:
            logger.debug("Error during stream cleanup: %s", exc)


__all__ = ["FrameStream", "encode_frame", "decode_frame"]
