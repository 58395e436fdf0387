from __future__ import annotations

import logging
from enum import Enum, StrEnum
from typing import Optional

from shared.cipher import Mode

from .constants import ENCODING, REPLY_BAD, REPLY_GOOD
from .framing import FrameStream

logger = logging.getLogger(__name__)


class Role(StrEnum):
    """Identity tags a client may announce."""

    OTP_DEC = "otp_dec"
    OTP_ENC = "otp_enc"

    @classmethod
    def for_mode(cls, mode: Mode) -> "Role":
        return cls.OTP_ENC if Mode(mode) is Mode.ENCRYPT else cls.OTP_DEC


class HandshakeState(Enum):
    AWAITING_IDENTITY = "awaiting_identity"
    VERIFIED = "verified"
    REJECTED = "rejected"


def identify(tag: bytes) -> Optional[Role]:
    """Map a received role tag to a known role, or ``None``."""
    try:
        return Role(tag.decode(ENCODING).strip())
    except (UnicodeDecodeError, ValueError):
        return None


async def accept_peer(stream: FrameStream, expected: Role) -> HandshakeState:
    """Daemon side: read the identity frame and answer GOOD or BAD."""
    role = identify(await stream.receive_frame())
    if role is expected:
        await stream.send_frame(REPLY_GOOD)
        return HandshakeState.VERIFIED
    logger.warning("Rejected peer %s announcing %s, expected %s", stream.peername, role, expected.value)
    await stream.send_frame(REPLY_BAD)
    return HandshakeState.REJECTED


async def announce(stream: FrameStream, role: Role) -> HandshakeState:
    """Client side: send our role tag. Anything but an explicit BAD lets us proceed."""
    await stream.send_frame(role.value.encode(ENCODING))
    reply = await stream.receive_frame()
    if reply == REPLY_BAD:
        return HandshakeState.REJECTED
    return HandshakeState.VERIFIED


__all__ = ["Role", "HandshakeState", "identify", "accept_peer", "announce"]
