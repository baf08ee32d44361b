"""
Runtime configuration for AirAlert.

Secrets and tunables are read once from the process environment (optionally
seeded from a local .env file) into an immutable Settings object, which is
then passed explicitly to the client, notifier and polling loop.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

AIR_KEY_VAR = "AIR_KEY"
BARK_KEY_VAR = "BARK_KEY"

DEFAULT_POLL_INTERVAL = 300         # seconds
DEFAULT_STATION = "@1451"
DEFAULT_WAQI_BASE_URL = "https://api.waqi.info/feed"
DEFAULT_BARK_BASE_URL = "https://api.day.app"
DEFAULT_REQUEST_TIMEOUT = 10.0      # seconds
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(ValueError):
    """Raised when a required setting is missing or a tunable is invalid."""


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide configuration."""
    air_key: str
    bark_key: str
    poll_interval: int = DEFAULT_POLL_INTERVAL
    station: str = DEFAULT_STATION
    waqi_base_url: str = DEFAULT_WAQI_BASE_URL
    bark_base_url: str = DEFAULT_BARK_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __repr__(self) -> str:
        return (
            f"Settings(station={self.station!r}, poll_interval={self.poll_interval}, "
            f"waqi_base_url={self.waqi_base_url!r}, bark_base_url={self.bark_base_url!r}, "
            f"request_timeout={self.request_timeout})"
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be greater than zero, got {value}")
    return value


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be greater than zero, got {value}")
    return value


def load_env() -> None:
    """Seed os.environ from a .env file in the working directory, if present."""
    load_dotenv(find_dotenv(usecwd=True))


def resolve_log_level(environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Return the numeric logging level named by LOG_LEVEL (default INFO).

    Raises:
        ConfigError: LOG_LEVEL is not a standard logging level name.
    """
    if environ is None:
        environ = os.environ
    raw = environ.get("LOG_LEVEL", "").strip()
    level = logging.getLevelName(raw.upper() or DEFAULT_LOG_LEVEL)
    if not isinstance(level, int):
        raise ConfigError(f"LOG_LEVEL must be a logging level name such as INFO or DEBUG, got {raw!r}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading
                 any .env file in the working directory.

    Returns:
        Settings instance.

    Raises:
        ConfigError: AIR_KEY or BARK_KEY is empty, or a tunable is invalid.
    """
    if environ is None:
        load_env()
        environ = os.environ

    air_key = environ.get(AIR_KEY_VAR, "").strip()
    if not air_key:
        raise ConfigError(f"{AIR_KEY_VAR} is not set: configure the WAQI API token")

    bark_key = environ.get(BARK_KEY_VAR, "").strip()
    if not bark_key:
        raise ConfigError(f"{BARK_KEY_VAR} is not set: configure the Bark device key")

    settings = Settings(
        air_key=air_key,
        bark_key=bark_key,
        poll_interval=_positive_int(environ, "POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL),
        station=environ.get("WAQI_STATION", "").strip() or DEFAULT_STATION,
        waqi_base_url=(environ.get("WAQI_BASE_URL", "").strip() or DEFAULT_WAQI_BASE_URL).rstrip("/"),
        bark_base_url=(environ.get("BARK_BASE_URL", "").strip() or DEFAULT_BARK_BASE_URL).rstrip("/"),
        request_timeout=_positive_float(environ, "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT),
    )
    logger.debug("Loaded %r", settings)
    return settings
