from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from client.config import CLIENT_CONFIG
from shared.cipher import Mode
from shared.protocol import CipherRequest, FrameStream, HandshakeState, Role, announce
from shared.protocol.errors import ContentError, NetworkError
from shared.utils import read_symbols

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class CipherClient:
    """Loads text and key, talks to the daemon and returns its result."""

    def __init__(self, port: int, config: Optional[Dict[str, Any]] = None, mode: Optional[Mode] = None) -> None:
        self.config = config or CLIENT_CONFIG
        self.host: str = self.config["server_host"]
        self.port = int(port)
        self.mode = Mode(mode or self.config["mode"])
        self.timeout: float = float(self.config["request_timeout"])
        self.backoff: float = float(self.config["connect_backoff"])
        self.max_backoff: float = float(self.config["max_connect_backoff"])
        self.max_retries: int = int(self.config["max_connect_retries"])

    def load(self, text_path: PathLike, key_path: PathLike) -> CipherRequest:
        text, text_len = read_symbols(text_path)
        key, key_len = read_symbols(key_path)
        if key_len < text_len:
            raise ContentError(f"key '{key_path}' is too short")
        return CipherRequest.build(text, key)

    async def connect(self) -> FrameStream:
        retries = 0
        delay = self.backoff
        while True:
            try:
                stream = await FrameStream.connect(self.host, self.port, timeout=self.timeout)
                logger.info("Connected to %s:%s", self.host, self.port)
                return stream
            except NetworkError as exc:
                if retries >= self.max_retries:
                    raise
                retries += 1
                logger.warning("Connect attempt %s failed: %s", retries, exc)
                await asyncio.sleep(delay)
                delay = min(delay * 2, self.max_backoff)

    async def exchange(self, request: CipherRequest) -> str:
        stream = await self.connect()
        try:
            state = await announce(stream, Role.for_mode(self.mode))
            if state is HandshakeState.REJECTED:
                raise NetworkError(f"could not contact {self.mode.value} daemon on port {self.port}")
            await stream.send_text(request.text)
            await stream.send_text(request.key)
            return await stream.receive_text()
        finally:
            await stream.close()

    async def run(self, text_path: PathLike, key_path: PathLike) -> str:
        request = self.load(text_path, key_path)
        return await self.exchange(request)


__all__ = ["CipherClient"]
