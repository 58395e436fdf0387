"""
Shared protocol package that centralizes framing, the handshake, payload models,
constants and the error taxonomy for both client and daemon.
"""

from .constants import ENCODING, INITIAL_BUFFER_SIZE, REPLY_BAD, REPLY_GOOD, SENTINEL
from .errors import (
    ArgumentError,
    ConcurrencyError,
    ContentError,
    ExitCode,
    NetworkError,
    OtpError,
    ProtocolError,
    ResourceError,
    TransportError,
)
from .framing import FrameStream, decode_frame, encode_frame
from .handshake import HandshakeState, Role, accept_peer, announce, identify
from .messages import CipherRequest

__all__ = [
    "ENCODING",
    "INITIAL_BUFFER_SIZE",
    "REPLY_BAD",
    "REPLY_GOOD",
    "SENTINEL",
    "ArgumentError",
    "ConcurrencyError",
    "ContentError",
    "ExitCode",
    "NetworkError",
    "OtpError",
    "ProtocolError",
    "ResourceError",
    "TransportError",
    "FrameStream",
    "encode_frame",
    "decode_frame",
    "HandshakeState",
    "Role",
    "accept_peer",
    "announce",
    "identify",
    "CipherRequest",
]
