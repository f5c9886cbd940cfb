from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

SUPPORTED_CONFIG_BACKENDS = {"http", "static"}
SUPPORTED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _split_csv(value: str | None) -> tuple[str, ...]:
    if not value:
        return tuple()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _env(name: str) -> str | None:
    raw_value = os.getenv(name)
    if raw_value is None:
        return None
    normalized = raw_value.strip()
    return normalized or None


def _flag(name: str, default: str = "false") -> bool:
    return (_env(name) or default).lower() in {"1", "true", "yes"}


def collect_missing_required_env_vars() -> list[str]:
    missing: list[str] = []

    config_backend = (_env("PRICING_CONFIG_BACKEND") or "static").lower()
    if config_backend == "http" and _env("PRICING_CONFIG_BASE_URL") is None:
        missing.append("PRICING_CONFIG_BASE_URL")

    return sorted(set(missing))


def collect_invalid_env_values() -> list[str]:
    invalid_values: list[str] = []

    config_backend = (_env("PRICING_CONFIG_BACKEND") or "static").lower()
    if config_backend not in SUPPORTED_CONFIG_BACKENDS:
        invalid_values.append("PRICING_CONFIG_BACKEND must be one of: http, static")

    base_url = _env("PRICING_CONFIG_BASE_URL")
    if base_url is not None and not base_url.startswith(("http://", "https://")):
        invalid_values.append("PRICING_CONFIG_BASE_URL must start with http:// or https://")

    timeout = _env("PRICING_CONFIG_TIMEOUT_SECONDS")
    if timeout is not None:
        try:
            parsed_timeout = float(timeout)
            if parsed_timeout <= 0:
                raise ValueError("must be positive")
        except ValueError:
            invalid_values.append("PRICING_CONFIG_TIMEOUT_SECONDS must be a positive number")

    log_level = _env("LOG_LEVEL")
    if log_level is not None and log_level.upper() not in SUPPORTED_LOG_LEVELS:
        invalid_values.append("LOG_LEVEL must be one of: CRITICAL, ERROR, WARNING, INFO, DEBUG")

    return invalid_values


def validate_required_environment() -> None:
    missing_vars = collect_missing_required_env_vars()
    invalid_values = collect_invalid_env_values()
    if not missing_vars and not invalid_values:
        return

    message_lines = ["Application startup blocked by invalid environment configuration."]
    if missing_vars:
        message_lines.append("")
        message_lines.append("Missing required environment variables:")
        message_lines.extend(f"- {name}" for name in missing_vars)
    if invalid_values:
        message_lines.append("")
        message_lines.append("Invalid environment values:")
        message_lines.extend(f"- {message}" for message in invalid_values)
    raise RuntimeError("\n".join(message_lines))


@dataclass(frozen=True)
class Settings:
    env: str
    cors_origins: tuple[str, ...]
    debug_include_error_details: bool
    log_level: str
    pricing_config_backend: str
    pricing_config_base_url: str | None
    pricing_config_timeout_seconds: float

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    validate_required_environment()

    settings = Settings(
        env=os.getenv("ENV", "development"),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS")),
        debug_include_error_details=_flag("DEBUG_INCLUDE_ERROR_DETAILS"),
        log_level=(_env("LOG_LEVEL") or "INFO").upper(),
        pricing_config_backend=(_env("PRICING_CONFIG_BACKEND") or "static").lower(),
        pricing_config_base_url=_env("PRICING_CONFIG_BASE_URL"),
        pricing_config_timeout_seconds=float(_env("PRICING_CONFIG_TIMEOUT_SECONDS") or 10.0),
    )

    if settings.is_production and settings.pricing_config_backend != "http":
        raise RuntimeError("PRICING_CONFIG_BACKEND=http is required when ENV=production")

    return settings
