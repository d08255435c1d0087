"""
Process configuration.

Settings are resolved once from the environment and then passed around as an
immutable value; request handlers receive them through dependency injection.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the supplied configuration."""


@dataclass(frozen=True)
class Settings:
    tmdb_api_key: str
    tmdb_base_url: str = TMDB_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks.
        return (
            f"Settings(tmdb_api_key='***', tmdb_base_url={self.tmdb_base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, host={self.host!r}, port={self.port!r})"
        )


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"TMDB_TIMEOUT_SECONDS must be a number, got {raw!r}.") from exc
    if value <= 0:
        raise ConfigurationError(f"TMDB_TIMEOUT_SECONDS must be positive, got {raw!r}.")
    return value


def parse_port(raw: str | int | None) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return DEFAULT_PORT
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Port must be an integer, got {raw!r}.") from exc
    if not 0 < value < 65536:
        raise ConfigurationError(f"Port must be between 1 and 65535, got {value}.")
    return value


def settings_from_env(environ: Mapping[str, str]) -> Settings:
    """
    Build `Settings` from an environment mapping.

    Raises:
        ConfigurationError: when `TMDB_API_KEY` is missing or a value is invalid.
    """

    api_key = (environ.get("TMDB_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("API key not set in TMDB_API_KEY environment variable")

    base_url = (environ.get("TMDB_API_BASE_URL") or "").strip().rstrip("/") or TMDB_API_BASE_URL
    return Settings(
        tmdb_api_key=api_key,
        tmdb_base_url=base_url,
        timeout_seconds=_parse_timeout(environ.get("TMDB_TIMEOUT_SECONDS")),
        host=(environ.get("MOVIE_FINDER_HOST") or "").strip() or DEFAULT_HOST,
        port=parse_port(environ.get("MOVIE_FINDER_PORT")),
    )


@lru_cache
def load_settings() -> Settings:
    """Resolve settings from `os.environ` once per process."""
    return settings_from_env(os.environ)
