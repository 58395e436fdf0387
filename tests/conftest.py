from __future__ import annotations

import asyncio
import socket
from typing import Callable, List, Optional

import pytest

from shared.protocol import FrameStream


class ChunkedReader:
    """Stands in for StreamReader, returning scripted chunks one read at a time."""

    def __init__(self, chunks: List[bytes], stall: bool = False) -> None:
        self.chunks = list(chunks)
        self.stall = stall
        self.requested: List[int] = []

    async def read(self, n: int = -1) -> bytes:
        self.requested.append(n)
        if not self.chunks:
            if self.stall:
                await asyncio.Event().wait()
            return b""
        chunk = self.chunks.pop(0)
        if 0 <= n < len(chunk):
            self.chunks.insert(0, chunk[n:])
            chunk = chunk[:n]
        return chunk


class RecordingWriter:
    def __init__(self, fail: bool = False) -> None:
        self.data = bytearray()
        self.closed = False
        self.fail = fail

    def write(self, data: bytes) -> None:
        if self.fail:
            raise ConnectionResetError("peer went away")
        self.data.extend(data)

    async def drain(self) -> None:
        return None

    def get_extra_info(self, name: str, default=None):
        return ("127.0.0.1", 40000) if name == "peername" else default

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None


@pytest.fixture
def make_stream() -> Callable[..., FrameStream]:
    def _make(chunks: List[bytes], timeout: Optional[float] = None, max_frame_size: int = 0, **kwargs) -> FrameStream:
        return FrameStream(ChunkedReader(chunks, **kwargs), RecordingWriter(), timeout=timeout, max_frame_size=max_frame_size)

    return _make


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.01)


@pytest.fixture
def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
