from __future__ import annotations

from typing import Any, Dict

from shared.cipher import Mode
from shared.protocol.constants import DEFAULT_CAPACITY, DEFAULT_SESSION_TIMEOUT
from shared.settings import ConfigError, load_env_config

DEFAULT_DAEMON_CONFIG: Dict[str, Any] = {
    "host": "0.0.0.0",
    "port": 0,
    "mode": Mode.DECRYPT.value,
    "max_sessions": DEFAULT_CAPACITY,
    "session_timeout": DEFAULT_SESSION_TIMEOUT,
    "backlog": 10,
    "max_frame_size": 0,
    "log_level": "INFO",
}

DAEMON_CONFIG: Dict[str, Any] = DEFAULT_DAEMON_CONFIG.copy()


def load_daemon_config(env_path: str = ".env") -> Dict[str, Any]:
    load_env_config(DEFAULT_DAEMON_CONFIG, DAEMON_CONFIG, "OTP_DAEMON_", env_path)
    _validate_config(DAEMON_CONFIG)
    return DAEMON_CONFIG


def _validate_config(config: Dict[str, Any]) -> None:
    if not (0 <= int(config["port"]) <= 65535):
        raise ConfigError("port must be between 0 and 65535")
    if config["mode"] not in {m.value for m in Mode}:
        raise ConfigError(f"mode must be one of {[m.value for m in Mode]}")
    if config["max_sessions"] <= 0:
        raise ConfigError("max_sessions must be positive")
    if config["session_timeout"] < 0:
        raise ConfigError("session_timeout must not be negative")
    if config["max_frame_size"] < 0:
        raise ConfigError("max_frame_size must not be negative")


__all__ = ["DAEMON_CONFIG", "DEFAULT_DAEMON_CONFIG", "load_daemon_config"]
