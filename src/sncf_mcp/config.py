from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from sncf_mcp.application.departure_service import (
    DEFAULT_LIMIT,
    DEFAULT_STATION_ID,
    LOOKBACK_MINUTES,
)
from sncf_mcp.domain.exceptions import ConfigurationError
from sncf_mcp.infrastructure.sncf_client import DEFAULT_TIMEOUT

# Name written by the frontend's key-provisioning script; still honoured.
LEGACY_API_KEY_VAR = "VITE_SNCF_API_KEY"


@dataclass(frozen=True)
class Settings:
    """Server settings, read from the environment and .env by load_settings."""

    api_key: str
    station_id: str = DEFAULT_STATION_ID
    departure_limit: int = DEFAULT_LIMIT
    lookback_minutes: int = LOOKBACK_MINUTES
    http_timeout: float = DEFAULT_TIMEOUT
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _float_env(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def load_settings(dotenv_path: str | None = None) -> Settings:
    """Load settings from .env (if present) and the process environment.

    Variables already set in the environment take precedence over .env.
    A missing API key is not an error here; see require_api_key.
    """
    load_dotenv(dotenv_path, override=False)
    api_key = os.environ.get("SNCF_API_KEY") or os.environ.get(LEGACY_API_KEY_VAR, "")
    return Settings(
        api_key=api_key.strip(),
        station_id=os.environ.get("SNCF_STATION_ID") or DEFAULT_STATION_ID,
        departure_limit=_int_env("SNCF_DEPARTURE_LIMIT", DEFAULT_LIMIT),
        lookback_minutes=_int_env("SNCF_LOOKBACK_MINUTES", LOOKBACK_MINUTES),
        http_timeout=_float_env("SNCF_HTTP_TIMEOUT", DEFAULT_TIMEOUT),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_int_env("PORT", 3001),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )


def require_api_key(settings: Settings) -> str:
    if not settings.api_key:
        raise ConfigurationError(
            f"SNCF API key missing: set SNCF_API_KEY (or {LEGACY_API_KEY_VAR}) "
            "in the environment or in .env"
        )
    return settings.api_key
