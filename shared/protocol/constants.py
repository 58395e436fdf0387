"""Protocol-wide constants shared by client and daemon."""

ENCODING = "ascii"
SENTINEL = b"@@@"
INITIAL_BUFFER_SIZE = 1024  # bytes
BUFFER_MARGIN = len(SENTINEL) + 2
READ_CHUNK_LIMIT = 64 * 1024

REPLY_GOOD = b"GOOD"
REPLY_BAD = b"BAD"

DEFAULT_CAPACITY = 5
DEFAULT_SESSION_TIMEOUT = 30  # seconds

__all__ = [
    "ENCODING",
    "SENTINEL",
    "INITIAL_BUFFER_SIZE",
    "BUFFER_MARGIN",
    "READ_CHUNK_LIMIT",
    "REPLY_GOOD",
    "REPLY_BAD",
    "DEFAULT_CAPACITY",
    "DEFAULT_SESSION_TIMEOUT",
]
