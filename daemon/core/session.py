from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from shared.cipher import Mode
from shared.protocol import CipherRequest, FrameStream, HandshakeState, Role, accept_peer
from shared.protocol.errors import ContentError, ProtocolError, ResourceError

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    peername: str
    state: HandshakeState = HandshakeState.AWAITING_IDENTITY
    text: Optional[bytes] = None
    key: Optional[bytes] = None
    started: float = field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started


class SessionWorker:
    """Drives one accepted connection: handshake, text and key frames, result frame, close."""

    def __init__(self, stream: FrameStream, mode: Mode) -> None:
        self.stream = stream
        self.mode = Mode(mode)
        self.ctx = SessionContext(peername=stream.peername)

    async def run(self) -> Optional[str]:
        try:
            self.ctx.state = await accept_peer(self.stream, Role.for_mode(self.mode))
            if self.ctx.state is HandshakeState.REJECTED:
                return None

            self.ctx.text = await self.stream.receive_frame()
            self.ctx.key = await self.stream.receive_frame()
            request = CipherRequest.from_frames(self.ctx.text, self.ctx.key)
            result = request.apply(self.mode)
            await self.stream.send_text(result)
            logger.info(
                "Session %s: %s of %s symbols done in %.3fs",
                self.ctx.peername,
                self.mode.value,
                len(result),
                self.ctx.elapsed,
            )
            return result
        except (ProtocolError, ContentError, ResourceError) as exc:
            # ResourceError is fatal to this session only, not the daemon (DESIGN.md, ResourceError)
            logger.warning("Session %s aborted: %s", self.ctx.peername, exc)
            return None
        finally:
            await self.stream.close()
            self.ctx.text = self.ctx.key = None


__all__ = ["SessionContext", "SessionWorker"]
