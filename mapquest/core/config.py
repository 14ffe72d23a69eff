"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://open.mapquestapi.com"


class ConfigError(RuntimeError):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    user_agent: Optional[str] = None
    default_limit: int = 10


def _get_number_env(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    api_key = os.getenv("MAPQUEST_API_KEY", "").strip()
    base_url = os.getenv("MAPQUEST_BASE_URL", "").strip() or DEFAULT_BASE_URL
    timeout = _get_number_env("MAPQUEST_TIMEOUT", "10", float)
    user_agent = os.getenv("MAPQUEST_USER_AGENT") or None
    default_limit = _get_number_env("MAPQUEST_DEFAULT_LIMIT", "10", int)

    if not api_key:
        logger.warning("MAPQUEST_API_KEY is not configured; requests will be sent without a key.")

    return Settings(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        user_agent=user_agent,
        default_limit=default_limit,
    )
