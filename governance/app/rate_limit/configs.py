"""Registered rate limit policies and key helpers."""

from typing import Dict, Mapping, Optional

from governance.app.rate_limit.models import RateLimitConfig

DEFAULT_CONFIG_NAME = "default"

RATE_LIMITS: Dict[str, RateLimitConfig] = {
    # Authentication - strict limits against brute force
    "auth:signIn": RateLimitConfig(max_requests=5, window_ms=60_000, min_interval_ms=1_000),
    "auth:signUp": RateLimitConfig(max_requests=3, window_ms=60_000, min_interval_ms=2_000),
    "auth:passwordReset": RateLimitConfig(max_requests=3, window_ms=5 * 60_000, min_interval_ms=5_000),

    # Data mutations
    "data:create": RateLimitConfig(max_requests=30, window_ms=60_000, min_interval_ms=500),
    "data:update": RateLimitConfig(max_requests=60, window_ms=60_000, min_interval_ms=200),
    "data:delete": RateLimitConfig(max_requests=20, window_ms=60_000, min_interval_ms=500),

    # File uploads
    "storage:upload": RateLimitConfig(max_requests=10, window_ms=60_000, min_interval_ms=1_000),

    # Reads and searches
    "data:read": RateLimitConfig(max_requests=100, window_ms=60_000, min_interval_ms=100),
    "data:search": RateLimitConfig(max_requests=30, window_ms=60_000, min_interval_ms=300),

    DEFAULT_CONFIG_NAME: RateLimitConfig(max_requests=60, window_ms=60_000, min_interval_ms=200),
}


def merge_overrides(
    base: Mapping[str, RateLimitConfig],
    overrides: Mapping[str, Mapping[str, Optional[int]]],
) -> Dict[str, RateLimitConfig]:
    """Build a config table with overrides applied on top of ``base``.

    An override may name a new operation, in which case unspecified fields are
    taken from the default policy.

    Args:
        base: Registered configs
        overrides: Config name -> partial field mapping

    Returns:
        New config table; ``base`` is left untouched
    """
    merged = dict(base)
    fallback = base.get(DEFAULT_CONFIG_NAME) or RATE_LIMITS[DEFAULT_CONFIG_NAME]
    for name, override in overrides.items():
        current = merged.get(name, fallback)
        merged[name] = RateLimitConfig(
            max_requests=override.get("max_requests") or current.max_requests,
            window_ms=override.get("window_ms") or current.window_ms,
            min_interval_ms=(
                override["min_interval_ms"]
                if "min_interval_ms" in override
                else current.min_interval_ms
            ),
        )
    return merged


def get_rate_limit_key(operation: str, identifier: Optional[str] = None) -> str:
    """Build a bucket key from an operation name and caller identifier.

    >>> get_rate_limit_key("auth:signIn", "user@example.com")
    'auth:signIn:user@example.com'
    >>> get_rate_limit_key("data:search")
    'data:search'
    """
    if identifier:
        return f"{operation}:{identifier}"
    return operation
