from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

from shared.cipher import ALPHABET
from shared.protocol.constants import ENCODING
from shared.protocol.errors import ArgumentError, ContentError

logger = logging.getLogger(__name__)


def read_symbols(path: Union[str, Path]) -> Tuple[str, int]:
    """Load a text or key file: one trailing line terminator is dropped, every other byte must be in the alphabet."""
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as exc:
        raise ArgumentError(f"Cannot read {file_path}: {exc}") from exc

    if raw.endswith(b"\r\n"):
        raw = raw[:-2]
    elif raw.endswith(b"\n"):
        raw = raw[:-1]

    text = raw.decode(ENCODING, errors="replace")
    for offset, ch in enumerate(text):
        if ch not in ALPHABET:
            raise ContentError(f"{file_path} contains bad character {ch!r} at offset {offset}")
    logger.debug("Loaded %s symbols from %s", len(text), file_path)
    return text, len(text)


__all__ = ["read_symbols"]
