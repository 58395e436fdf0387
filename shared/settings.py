from __future__ import annotations

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_env_config(defaults: Dict[str, Any], target: Dict[str, Any], prefix: str, env_path: str = ".env") -> Dict[str, Any]:
    """Fill ``target`` from ``<PREFIX><KEY>`` environment variables (and an optional .env file)."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in defaults.items():
        env_key = f"{prefix}{key.upper()}"
        value = os.getenv(env_key, target.get(key, default_value))
        target[key] = _coerce_type(value, type(default_value))
    return target


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)


__all__ = ["ConfigError", "load_env_config", "configure_logging"]
