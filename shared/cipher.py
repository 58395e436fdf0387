"""
Modular shift cipher over the 27-symbol alphabet (A-Z plus space).

Each symbol maps to an integer: ``A..Z -> 0..25`` and space -> 26. Encryption
adds the key code modulo 27, decryption subtracts it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Dict

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ "
ALPHABET_SIZE = len(ALPHABET)

_CODES: Dict[str, int] = {sym: idx for idx, sym in enumerate(ALPHABET)}


class Mode(StrEnum):
    """Direction of the transform a daemon or client performs."""

    DECRYPT = "decrypt"
    ENCRYPT = "encrypt"


def code(symbol: str) -> int:
    """Integer code (0-26) of a single alphabet symbol."""
    try:
        return _CODES[symbol]
    except KeyError:
        raise ValueError(f"{symbol!r} is not an alphabet symbol") from None


def symbol(value: int) -> str:
    return ALPHABET[value % ALPHABET_SIZE]


def is_valid(text: str) -> bool:
    return all(ch in _CODES for ch in text)


def _check_lengths(text: str, key: str) -> None:
    if len(key) < len(text):
        raise ValueError(f"key length {len(key)} is shorter than text length {len(text)}")


def encrypt(plain: str, key: str) -> str:
    _check_lengths(plain, key)
    return "".join(symbol(code(p) + code(k)) for p, k in zip(plain, key))


def decrypt(cipher: str, key: str) -> str:
    # Python's % already yields a non-negative result for a positive modulus.
    _check_lengths(cipher, key)
    return "".join(symbol(code(c) - code(k)) for c, k in zip(cipher, key))


def transform(mode: Mode, text: str, key: str) -> str:
    """Apply the direction selected by ``mode``."""
    if Mode(mode) is Mode.ENCRYPT:
        return encrypt(text, key)
    return decrypt(text, key)


__all__ = [
    "ALPHABET",
    "ALPHABET_SIZE",
    "Mode",
    "code",
    "symbol",
    "is_valid",
    "encrypt",
    "decrypt",
    "transform",
]
