from __future__ import annotations

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

from pixelflut.protocol.constants import DEFAULT_PORT, DEFAULT_SEND_BUFFER_SIZE

SOURCES = ("gif", "screen", "camera")
CAPTURE_MODES = ("all", "diff")

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_host": "127.0.0.1",
    "server_port": DEFAULT_PORT,
    "connect_timeout": 0.0,  # 0 disables the timeout
    "send_buffer_size": DEFAULT_SEND_BUFFER_SIZE,
    "log_level": "INFO",
    "source": "gif",
    "gif_path": "images/animation.gif",
    "monitor": 1,
    "capture_mode": "diff",
    "camera_id": 0,
    "offset_x": 0,
    "offset_y": 0,
    "frame_limit": 0,  # 0 streams until the source is exhausted
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in DEFAULT_CONFIG.items():
        env_key = f"PIXELFLUT_{key.upper()}"
        value = os.getenv(env_key, default_value)
        CLIENT_CONFIG[key] = _coerce_type(value, type(default_value))

    _validate_config()
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def _validate_config() -> None:
    if not (1 <= int(CLIENT_CONFIG["server_port"]) <= 65535):
        raise ConfigError("server_port must be between 1 and 65535")
    if not isinstance(logging.getLevelName(CLIENT_CONFIG["log_level"]), int):
        raise ConfigError(f"Unknown log_level {CLIENT_CONFIG['log_level']}")
    if CLIENT_CONFIG["connect_timeout"] < 0:
        raise ConfigError("connect_timeout must not be negative")
    if CLIENT_CONFIG["send_buffer_size"] <= 0:
        raise ConfigError("send_buffer_size must be positive")
    if CLIENT_CONFIG["source"] not in SOURCES:
        raise ConfigError(f"source must be one of {', '.join(SOURCES)}")
    if CLIENT_CONFIG["capture_mode"] not in CAPTURE_MODES:
        raise ConfigError(f"capture_mode must be one of {', '.join(CAPTURE_MODES)}")
    for key in ("monitor", "camera_id", "offset_x", "offset_y", "frame_limit"):
        if CLIENT_CONFIG[key] < 0:
            raise ConfigError(f"{key} must not be negative")


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "SOURCES", "CAPTURE_MODES", "ConfigError", "load_config"]
