from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    admin_token: str | None
    log_level: str
    sentry_dsn: str | None
    rate_limit_enabled: bool
    ai_test_rate_limit: str
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    config_db_path: str
    config_cache_ttl_s: int
    ai_timeout_s: float
    cf_account_id: str | None
    cf_api_token: str | None
    cf_api_base_url: str


settings = Settings(
    admin_token=_get_env("ADMIN_TOKEN"),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    ai_test_rate_limit=_get_env("AI_TEST_RATE_LIMIT", "10/minute") or "10/minute",
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    config_db_path=_get_env("CONFIG_DB_PATH", "data/config.db") or "data/config.db",
    config_cache_ttl_s=_get_env_int("CONFIG_CACHE_TTL_S", 60),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
    cf_account_id=_get_env("CF_ACCOUNT_ID"),
    cf_api_token=_get_env("CF_API_TOKEN"),
    cf_api_base_url=_get_env("CF_API_BASE_URL", "https://api.cloudflare.com/client/v4")
    or "https://api.cloudflare.com/client/v4",
)
