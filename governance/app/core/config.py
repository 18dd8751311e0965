import json
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_rate_limit_overrides(raw: Any) -> dict[str, dict[str, int | None]]:
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw

    raw = str(raw).strip()
    if not raw or raw == "{}":
        return {}

    # Tolerate malformed values rather than crashing the host application at
    # import time; the registered defaults stay in effect.
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if not isinstance(parsed, dict):
        return {}
    return parsed


class Settings(BaseSettings):
    """Governance settings loaded from environment variables.

    All settings can be configured via environment variables or .env file.
    """

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "text"  # text | structured | json

    # Rate limiting settings
    rate_limit_enabled: bool = True  # Kill switch: False allows every request

    # Per-operation overrides merged over the registered RATE_LIMITS table, e.g.
    # RATE_LIMIT_OVERRIDES='{"auth:signIn": {"max_requests": 10, "window_ms": 60000}}'
    rate_limit_overrides: Annotated[dict[str, dict[str, int | None]], NoDecode] = {}

    @field_validator("rate_limit_overrides", mode="before")
    @classmethod
    def decode_rate_limit_overrides(cls, v: Any) -> dict[str, dict[str, int | None]]:
        return _parse_rate_limit_overrides(v)

    @field_validator("rate_limit_overrides")
    @classmethod
    def validate_rate_limit_overrides(
        cls, v: dict[str, dict[str, int | None]]
    ) -> dict[str, dict[str, int | None]]:
        """Validate override values are usable rate limit configs."""
        for name, override in v.items():
            for key in ("max_requests", "window_ms"):
                value = override.get(key)
                if value is not None and value < 1:
                    raise ValueError(f"{name}: {key} must be at least 1")
            min_interval = override.get("min_interval_ms")
            if min_interval is not None and min_interval < 0:
                raise ValueError(f"{name}: min_interval_ms must not be negative")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is one of the supported formatters."""
        v = v.strip().lower()
        if v not in ("text", "structured", "json"):
            raise ValueError("log_format must be one of: text, structured, json")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance
settings = Settings()
