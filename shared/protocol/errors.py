from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes, one per error category."""

    SUCCESS = 0
    BAD_ARGUMENTS = 1
    BAD_CONTENT = 2
    CONNECTION_FAILED = 3
    PROTOCOL_VIOLATION = 4
    RESOURCE_EXHAUSTED = 5
    SPAWN_FAILED = 6


class OtpError(Exception):
    """Base error carrying the exit code of its category plus a message."""

    exit_code: ExitCode = ExitCode.BAD_ARGUMENTS

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.exit_code.name} ({int(self.exit_code)}): {self.message}"


class ArgumentError(OtpError):
    """Malformed command-line invocation or unreadable input path."""

    exit_code = ExitCode.BAD_ARGUMENTS


class ContentError(OtpError):
    """Invalid alphabet symbol, or key shorter than the text."""

    exit_code = ExitCode.BAD_CONTENT


class NetworkError(OtpError):
    """Host resolution, connect, bind, listen or accept failure."""

    exit_code = ExitCode.CONNECTION_FAILED


class ProtocolError(OtpError):
    """Handshake or framing violation on an established connection."""

    exit_code = ExitCode.PROTOCOL_VIOLATION


class TransportError(ProtocolError):
    """Frame could not be written, or the peer closed or stalled mid-frame."""


class ResourceError(OtpError):
    """Buffer growth beyond the configured limit or allocation failure."""

    exit_code = ExitCode.RESOURCE_EXHAUSTED


class ConcurrencyError(OtpError):
    """A new session task could not be created."""

    exit_code = ExitCode.SPAWN_FAILED


__all__ = [
    "ExitCode",
    "OtpError",
    "ArgumentError",
    "ContentError",
    "NetworkError",
    "ProtocolError",
    "TransportError",
    "ResourceError",
    "ConcurrencyError",
]
