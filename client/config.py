from __future__ import annotations

from typing import Any, Dict

from shared.cipher import Mode
from shared.protocol.constants import DEFAULT_SESSION_TIMEOUT
from shared.settings import ConfigError, load_env_config

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_host": "localhost",
    "mode": Mode.DECRYPT.value,
    "request_timeout": DEFAULT_SESSION_TIMEOUT,
    "max_connect_retries": 0,
    "connect_backoff": 1,
    "max_connect_backoff": 30,
    "log_level": "WARNING",
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    load_env_config(DEFAULT_CONFIG, CLIENT_CONFIG, "OTP_CLIENT_", env_path)
    _validate_config()
    return CLIENT_CONFIG


def _validate_config() -> None:
    if CLIENT_CONFIG["mode"] not in {m.value for m in Mode}:
        raise ConfigError(f"mode must be one of {[m.value for m in Mode]}")
    if CLIENT_CONFIG["request_timeout"] < 0:
        raise ConfigError("request_timeout must not be negative")
    if CLIENT_CONFIG["max_connect_retries"] < 0:
        raise ConfigError("max_connect_retries must not be negative")
    if CLIENT_CONFIG["connect_backoff"] < 0:
        raise ConfigError("connect_backoff must not be negative")
    if CLIENT_CONFIG["max_connect_backoff"] < 0:
        raise ConfigError("max_connect_backoff must not be negative")


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "load_config"]
