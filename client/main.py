from __future__ import annotations

import asyncio
import logging
import sys

from client.config import CLIENT_CONFIG, load_config
from client.core import CipherClient
from shared.cipher import Mode
from shared.protocol.errors import ExitCode, OtpError
from shared.settings import ConfigError, configure_logging
from shared.utils import OtpArgumentParser, port_number

logger = logging.getLogger(__name__)


def build_parser() -> OtpArgumentParser:
    parser = OtpArgumentParser(prog="otp-client", description="Send a text and key to the cipher daemon.")
    parser.add_argument("text_file")
    parser.add_argument("key_file")
    parser.add_argument("port", type=port_number)
    parser.add_argument("--host", default=None)
    parser.add_argument("--mode", choices=[m.value for m in Mode], default=None)
    return parser


async def run_client(text_file: str, key_file: str, port: int) -> str:
    client = CipherClient(port)
    return await client.run(text_file, key_file)


def main(argv: list[str] | None = None) -> int:
    try:
        load_config()
        args = build_parser().parse_args(argv)
    except (OtpError, ConfigError) as exc:
        configure_logging("ERROR")
        logger.error("%s", exc)
        return int(ExitCode.BAD_ARGUMENTS)

    if args.host:
        CLIENT_CONFIG["server_host"] = args.host
    if args.mode:
        CLIENT_CONFIG["mode"] = args.mode
    configure_logging(CLIENT_CONFIG["log_level"])

    try:
        result = asyncio.run(run_client(args.text_file, args.key_file, args.port))
    except OtpError as exc:
        logger.error("Error: %s", exc.message)
        return int(exc.exit_code)
    sys.stdout.write(result + "\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
