"""Configuration utilities.

Settings come from environment variables; a `.env` file in the working
directory is loaded first when present.

Example .env:
    DIETLOG_API_BASE_URL=https://meals.example.com
    DIETLOG_TIMEZONE=Europe/Rome
"""

import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://pz6u22o701.execute-api.us-east-2.amazonaws.com"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the meal log client."""

    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: int = 10
    max_retries: int = 3
    timezone_name: str = "UTC"
    recent_limit: int = 5
    log_level: str = "INFO"

    @property
    def timezone(self) -> tzinfo:
        """Display timezone defining calendar days and absolute dates."""
        return ZoneInfo(self.timezone_name)


def _get_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def get_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        env_file: Optional .env path; defaults to `.env` lookup by python-dotenv

    Returns:
        Settings instance

    Raises:
        ValueError: If a variable holds an invalid value
    """
    load_dotenv(env_file)

    timezone_name = os.getenv("DIETLOG_TIMEZONE", "UTC").strip() or "UTC"
    try:
        ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"DIETLOG_TIMEZONE is not a known timezone: {timezone_name!r}") from e

    return Settings(
        api_base_url=os.getenv("DIETLOG_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        timeout_seconds=_get_int("DIETLOG_TIMEOUT_SECONDS", 10, minimum=1),
        max_retries=_get_int("DIETLOG_MAX_RETRIES", 3, minimum=1),
        timezone_name=timezone_name,
        recent_limit=_get_int("DIETLOG_RECENT_LIMIT", 5, minimum=1),
        log_level=os.getenv("DIETLOG_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
