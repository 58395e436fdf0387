from __future__ import annotations

import argparse
from typing import NoReturn

from shared.protocol.errors import ArgumentError


class OtpArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ArgumentError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(f"{self.prog}: {message}")


def port_number(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port {value!r}") from None
    if not (1 <= port <= 65535):
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


__all__ = ["OtpArgumentParser", "port_number"]
