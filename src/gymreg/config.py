"""Environment-driven settings for gymreg."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass


class ConfigError(Exception):
    """Raised when configuration is invalid."""


DEFAULT_DB_PATH = "gymreg.db"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_QUEUE_NAME = "default"
DEFAULT_PAGE_SIZE = 10
DEFAULT_PAST_DATE_TOLERANCE_HOURS = 3
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _int_setting(env: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass
class Settings:
    """Runtime settings.

    Attributes:
        db_path: SQLite database file. ":memory:" for an in-memory store.
        redis_url: Redis connection URL for the notification queue.
        queue_name: rq queue the notification jobs are pushed to.
        page_size: Registrations per page on the listing operation.
        past_date_tolerance_hours: How far in the past a new start date may lie.
        host: Bind address for the HTTP server.
        port: Bind port for the HTTP server.
    """

    db_path: str = DEFAULT_DB_PATH
    redis_url: str = DEFAULT_REDIS_URL
    queue_name: str = DEFAULT_QUEUE_NAME
    page_size: int = DEFAULT_PAGE_SIZE
    past_date_tolerance_hours: int = DEFAULT_PAST_DATE_TOLERANCE_HOURS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from GYMREG_* environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a numeric variable is not a valid integer.
        """
        if env is None:
            env = os.environ
        return cls(
            db_path=env.get("GYMREG_DB_PATH", DEFAULT_DB_PATH),
            redis_url=env.get("GYMREG_REDIS_URL", DEFAULT_REDIS_URL),
            queue_name=env.get("GYMREG_QUEUE_NAME", DEFAULT_QUEUE_NAME),
            page_size=_int_setting(env, "GYMREG_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
            past_date_tolerance_hours=_int_setting(
                env, "GYMREG_PAST_DATE_TOLERANCE_HOURS", DEFAULT_PAST_DATE_TOLERANCE_HOURS
            ),
            host=env.get("GYMREG_HOST", DEFAULT_HOST),
            port=_int_setting(env, "GYMREG_PORT", DEFAULT_PORT, minimum=1),
        )
