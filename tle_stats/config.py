"""Environment-driven configuration for tle-stats."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

__all__ = [
    "AppConfig",
    "HttpSettings",
    "load_config",
]

DEFAULT_USER_AGENT = "tle-stats/1.0 Python-urllib"


@dataclass(frozen=True)
class HttpSettings:
    """Options for fetching TLE text over HTTP."""

    timeout: float = 10.0
    retries: int = 3
    backoff: float = 0.8
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class AppConfig:
    """Container for derived application configuration."""

    log_level: str = "INFO"
    log_json: bool = False
    http: HttpSettings = field(default_factory=HttpSettings)


_TRUE_SET = {"1", "true", "yes", "on"}
_FALSE_SET = {"0", "false", "no", "off"}


def _to_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_SET:
        return True
    if lowered in _FALSE_SET:
        return False
    return default


def _to_number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load configuration from environment variables."""

    env_map: Mapping[str, str] = os.environ if env is None else env

    http = HttpSettings(
        timeout=_to_number(env_map, "TLE_STATS_HTTP_TIMEOUT", 10.0, float),
        retries=max(0, _to_number(env_map, "TLE_STATS_HTTP_RETRIES", 3, int)),
        backoff=_to_number(env_map, "TLE_STATS_HTTP_BACKOFF", 0.8, float),
        user_agent=env_map.get("TLE_STATS_USER_AGENT") or DEFAULT_USER_AGENT,
    )
    return AppConfig(
        log_level=(env_map.get("TLE_STATS_LOG_LEVEL") or "INFO").upper(),
        log_json=_to_bool(env_map.get("TLE_STATS_LOG_JSON"), default=False),
        http=http,
    )
