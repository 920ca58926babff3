"""Listening port resolution and runtime settings."""

import os
import re
from typing import Mapping, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .errors import PortParseError

PORT_ENV_VAR = "PORT"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ServerSettings(BaseSettings):
    """Runtime tuning for the HTTP listener. Never affects port selection."""

    model_config = {"env_prefix": "WEBAPI_UTIL_", "env_file": ".env", "case_sensitive": False}

    log_level: str = Field(default="INFO", description="Logging level")
    timeout_keep_alive: int = Field(default=5, description="Keep-alive timeout in seconds")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        """Upper-case the level and reject names the logging module does not know."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls) -> "ServerSettings":
        """Load WEBAPI_UTIL_* variables, falling back to a local .env file."""
        return cls()


def get_port(env: Optional[Mapping[str, str]] = None) -> str:
    """Return the ``PORT`` override, or an empty string when unset."""
    if env is None:
        env = os.environ
    return env.get(PORT_ENV_VAR, "")


def parse_int32(value: str) -> int:
    """Parse a signed 32-bit decimal integer.

    Raises:
        PortParseError: If ``value`` is not decimal digits with an optional
            sign, or falls outside the 32-bit range.
    """
    if not _DECIMAL_PATTERN.fullmatch(value):
        raise PortParseError(value, "invalid syntax")
    number = int(value)
    if not INT32_MIN <= number <= INT32_MAX:
        raise PortParseError(value, "value out of range")
    return number


def resolve_port(env: Optional[Mapping[str, str]], default: int) -> str:
    """Choose the listening port.

    A non-empty ``PORT`` in ``env`` wins over ``default``. The chosen string
    must parse as a signed 32-bit integer; the TCP range is left to the
    bind step.

    Args:
        env: Environment mapping; ``None`` means ``os.environ``.
        default: Port used when ``PORT`` is unset or empty.

    Returns:
        The port as a decimal string.
    """
    port = get_port(env)
    if not port:
        port = str(default)
    parse_int32(port)
    return port


def bind_address(port: str) -> str:
    """Address listening on all interfaces, e.g. ``":8080"``."""
    return f":{port}"


def parse_bind_address(address: str) -> Tuple[str, int]:
    """Split ``"host:port"`` into its parts; an empty host means all interfaces."""
    host, sep, port = address.rpartition(":")
    if not sep:
        raise PortParseError(address, "missing port in address")
    return host, parse_int32(port)
