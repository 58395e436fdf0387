from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from daemon.config import DAEMON_CONFIG, load_daemon_config
from daemon.core import CipherDaemon
from shared.cipher import Mode
from shared.protocol.errors import ExitCode, NetworkError, OtpError
from shared.settings import ConfigError, configure_logging
from shared.utils import OtpArgumentParser, port_number

logger = logging.getLogger(__name__)


def build_parser() -> OtpArgumentParser:
    parser = OtpArgumentParser(prog="otp-daemon", description="Cipher daemon serving OTP clients.")
    parser.add_argument("port", type=port_number)
    parser.add_argument("--host", default=None)
    parser.add_argument("--mode", choices=[m.value for m in Mode], default=None)
    parser.add_argument("--capacity", type=int, default=None)
    return parser


def build_daemon(config: Dict[str, Any]) -> CipherDaemon:
    return CipherDaemon(
        config["host"],
        config["port"],
        mode=Mode(config["mode"]),
        capacity=config["max_sessions"],
        session_timeout=config["session_timeout"],
        backlog=config["backlog"],
        max_frame_size=config["max_frame_size"],
    )


def main(argv: list[str] | None = None) -> int:
    try:
        load_daemon_config()
        args = build_parser().parse_args(argv)
        if args.capacity is not None and args.capacity <= 0:
            raise ConfigError("--capacity must be positive")
    except (OtpError, ConfigError) as exc:
        configure_logging("ERROR")
        logger.error("%s", exc)
        return int(ExitCode.BAD_ARGUMENTS)

    DAEMON_CONFIG["port"] = args.port
    if args.host:
        DAEMON_CONFIG["host"] = args.host
    if args.mode:
        DAEMON_CONFIG["mode"] = args.mode
    if args.capacity is not None:
        DAEMON_CONFIG["max_sessions"] = args.capacity
    configure_logging(DAEMON_CONFIG["log_level"])

    daemon = build_daemon(DAEMON_CONFIG)
    try:
        daemon.start()
    except NetworkError as exc:
        logger.error("%s", exc)
        return int(ExitCode.BAD_ARGUMENTS)

    try:
        asyncio.run(daemon.serve_forever())
    except OtpError as exc:
        logger.error("Daemon stopped: %s", exc)
        return int(exc.exit_code)
    except KeyboardInterrupt:
        logger.info("Daemon interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
