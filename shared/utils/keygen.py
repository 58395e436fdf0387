"""Random key material: ``otp-keygen <length>`` prints a key plus newline to stdout."""

from __future__ import annotations

import logging
import secrets
import sys

from shared.cipher import ALPHABET
from shared.protocol.errors import ArgumentError

from .cli import OtpArgumentParser

logger = logging.getLogger(__name__)


def generate_key(length: int) -> str:
    if length <= 0:
        raise ArgumentError(f"Key length must be positive, got {length}")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level="WARNING")
    parser = OtpArgumentParser(prog="otp-keygen", description="Generate random key material.")
    parser.add_argument("length", type=int, help="number of key symbols")
    try:
        args = parser.parse_args(argv)
        key = generate_key(args.length)
    except ArgumentError as exc:
        logger.error("%s", exc.message)
        return int(exc.exit_code)
    sys.stdout.write(key + "\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
