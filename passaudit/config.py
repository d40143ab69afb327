"""Settings for passaudit, read once from ``PASSAUDIT_*`` environment variables.

Unset variables fall back to the defaults below.  Malformed values raise
:class:`ConfigError` rather than being silently replaced.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

from passaudit.client import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT
from passaudit.requirements import DEFAULT_MAX_LENGTH, DEFAULT_MIN_LENGTH

ENV_PREFIX = "PASSAUDIT_"

DEFAULT_CACHE_MINUTES = 60
DEFAULT_WORKERS = 4
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised for invalid configuration values."""


@dataclass(frozen=True)
class BreachConfig:
    enabled: bool = True
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    cache_duration: float = DEFAULT_CACHE_MINUTES * 60.0

    def __post_init__(self):
        if not self.endpoint.startswith(("http://", "https://")):
            raise ConfigError(f"invalid breach endpoint: {self.endpoint!r}")
        if self.timeout <= 0:
            raise ConfigError(f"invalid breach timeout: {self.timeout}")
        if self.cache_duration <= 0:
            raise ConfigError(f"invalid cache duration: {self.cache_duration}")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH
    workers: int = DEFAULT_WORKERS
    breach: BreachConfig = field(default_factory=BreachConfig)

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"invalid log level: {self.log_level!r}")
        if self.min_length < 0:
            raise ConfigError(f"invalid min password length: {self.min_length}")
        if self.max_length <= 0:
            raise ConfigError(f"invalid max password length: {self.max_length}")
        if self.workers <= 0:
            raise ConfigError(f"invalid worker count: {self.workers}")


# ── Environment parsing ────────────────────────────────────────────────────


def _get(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _bool(environ, name: str, default: bool) -> bool:
    raw = _get(environ, name)
    if raw is None:
        return default
    if raw.lower() in _TRUE:
        return True
    if raw.lower() in _FALSE:
        return False
    raise ConfigError(f"{ENV_PREFIX}{name}: expected a boolean, got {raw!r}")


def _number(environ, name: str, default, kind=int):
    raw = _get(environ, name)
    if raw is None:
        return default
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(
            f"{ENV_PREFIX}{name}: expected {kind.__name__}, got {raw!r}"
        ) from exc


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (default: ``os.environ``)."""
    if environ is None:
        environ = os.environ

    cache_minutes = _number(
        environ, "BREACH_CACHE_MINUTES", DEFAULT_CACHE_MINUTES, float,
    )
    breach = BreachConfig(
        enabled=_bool(environ, "BREACH_ENABLED", True),
        endpoint=_get(environ, "BREACH_ENDPOINT") or DEFAULT_ENDPOINT,
        timeout=_number(environ, "BREACH_TIMEOUT", DEFAULT_TIMEOUT, float),
        cache_duration=cache_minutes * 60.0,
    )
    return Settings(
        log_level=(_get(environ, "LOG_LEVEL") or "INFO").upper(),
        min_length=_number(environ, "MIN_LENGTH", DEFAULT_MIN_LENGTH),
        max_length=_number(environ, "MAX_LENGTH", DEFAULT_MAX_LENGTH),
        workers=_number(environ, "WORKERS", DEFAULT_WORKERS),
        breach=breach,
    )
