"""Keyed fixed-window rate limiter with a minimum-interval throttle.

Each bucket key gets a counter that resets wholesale once its window has
elapsed. On top of the quota, a config may require a minimum spacing
between accepted requests; a request that arrives too soon is denied
without consuming quota.
"""

import functools
import math
import time
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar

from governance.app.core.config import settings
from governance.app.core.logging import get_log_context, get_logger
from governance.app.exceptions import RateLimitError
from governance.app.rate_limit.configs import (
    DEFAULT_CONFIG_NAME,
    RATE_LIMITS,
    merge_overrides,
)
from governance.app.rate_limit.models import (
    ExecuteResult,
    RateLimitConfig,
    RateLimitEntry,
    RateLimitResult,
)

logger = get_logger(__name__)

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class RateGovernor:
    """In-memory rate limiter keyed by operation and caller identity.

    One instance is meant to be owned by whatever component performs the
    guarded calls (typically one per process or session). State is never
    persisted; ``clear_all`` is the supported manual reset.

    Usage:
        governor = RateGovernor()

        key = get_rate_limit_key("auth:signIn", email)
        result = governor.check(key, "auth:signIn")
        if not result.allowed:
            return result.error

        ...  # perform the sign in
        governor.clear(key)  # successful login restores the full quota
    """

    def __init__(
        self,
        configs: Optional[Mapping[str, RateLimitConfig]] = None,
        clock: Optional[Callable[[], int]] = None,
        enabled: bool = True,
    ):
        """Initialize the governor.

        Args:
            configs: Config name -> policy table (defaults to RATE_LIMITS)
            clock: Zero-argument callable returning the current time in ms
            enabled: When False every check is allowed with full quota
        """
        self._configs: Dict[str, RateLimitConfig] = dict(configs or RATE_LIMITS)
        if DEFAULT_CONFIG_NAME not in self._configs:
            self._configs[DEFAULT_CONFIG_NAME] = RATE_LIMITS[DEFAULT_CONFIG_NAME]
        self._clock = clock or _wall_clock_ms
        self.enabled = enabled
        self._limits: Dict[str, RateLimitEntry] = {}

    @classmethod
    def from_settings(cls, clock: Optional[Callable[[], int]] = None) -> "RateGovernor":
        """Build a governor from the registered configs and environment settings."""
        configs = merge_overrides(RATE_LIMITS, settings.rate_limit_overrides)
        return cls(configs=configs, clock=clock, enabled=settings.rate_limit_enabled)

    def get_config(self, config_name: str = DEFAULT_CONFIG_NAME) -> RateLimitConfig:
        """Resolve a config name, falling back to the default policy."""
        config = self._configs.get(config_name)
        if config is None:
            logger.debug(
                f"Unknown rate limit config '{config_name}', using default",
                extra=get_log_context(config_name=config_name),
            )
            config = self._configs[DEFAULT_CONFIG_NAME]
        return config

    def check(self, key: str, config_name: str = DEFAULT_CONFIG_NAME) -> RateLimitResult:
        """Decide whether a new request for ``key`` may proceed.

        Args:
            key: Bucket key, e.g. 'auth:signIn:user@example.com'
            config_name: Name of the registered config to apply

        Returns:
            RateLimitResult; an accepted request has already been counted
        """
        config = self.get_config(config_name)
        now = self._clock()

        if not self.enabled:
            return RateLimitResult(
                allowed=True,
                remaining=config.max_requests,
                reset_time=now + config.window_ms,
            )

        entry = self._limits.get(key)
        if entry is None or now - entry.first_request >= config.window_ms:
            entry = RateLimitEntry(count=0, first_request=now)
            self._limits[key] = entry

        reset_time = entry.first_request + config.window_ms

        if config.min_interval_ms and entry.last_request is not None:
            elapsed = now - entry.last_request
            if elapsed < config.min_interval_ms:
                retry_after_ms = config.min_interval_ms - elapsed
                return self._deny(
                    config_name,
                    remaining=config.max_requests - entry.count,
                    reset_time=reset_time,
                    retry_after_ms=retry_after_ms,
                    error=(
                        f"Please wait {math.ceil(retry_after_ms / 1000)} seconds "
                        f"before trying again"
                    ),
                )

        if entry.count >= config.max_requests:
            retry_after_ms = reset_time - now
            return self._deny(
                config_name,
                remaining=0,
                reset_time=reset_time,
                retry_after_ms=retry_after_ms,
                error=(
                    f"Too many requests. Please try again in "
                    f"{math.ceil(retry_after_ms / 1000)} seconds"
                ),
            )

        entry.count += 1
        entry.last_request = now

        return RateLimitResult(
            allowed=True,
            remaining=config.max_requests - entry.count,
            reset_time=reset_time,
        )

    def _deny(
        self,
        config_name: str,
        remaining: int,
        reset_time: int,
        retry_after_ms: int,
        error: str,
    ) -> RateLimitResult:
        logger.info(
            "Rate limit denied",
            extra=get_log_context(config_name=config_name, retry_after_ms=retry_after_ms),
        )
        return RateLimitResult(
            allowed=False,
            remaining=remaining,
            reset_time=reset_time,
            retry_after_ms=retry_after_ms,
            error=error,
        )

    async def execute(
        self,
        key: str,
        config_name: str,
        fn: Callable[[], Awaitable[T]],
    ) -> ExecuteResult:
        """Run ``fn`` if the rate limit allows it.

        Never raises for a failed action: exceptions from ``fn`` come back in
        the error channel with ``rate_limited=False``.

        Args:
            key: Bucket key
            config_name: Name of the registered config to apply
            fn: Zero-argument coroutine function performing the action

        Returns:
            ExecuteResult with data, error and rate_limited flag
        """
        result = self.check(key, config_name)

        if not result.allowed:
            return ExecuteResult(
                data=None,
                error=RateLimitError(
                    result.error or "Rate limit exceeded", result.retry_after_ms
                ),
                rate_limited=True,
            )

        try:
            data = await fn()
        except Exception as e:
            logger.warning(
                f"Rate limited action failed: {type(e).__name__}: {e}",
                extra=get_log_context(config_name=config_name),
            )
            return ExecuteResult(data=None, error=e, rate_limited=False)

        return ExecuteResult(data=data, error=None, rate_limited=False)

    def clear(self, key: str) -> None:
        """Forget the state for one key, restoring its full quota."""
        self._limits.pop(key, None)

    def clear_all(self) -> None:
        """Forget the state for every key (e.g. on logout)."""
        self._limits.clear()

    def get_remaining(self, key: str, config_name: str = DEFAULT_CONFIG_NAME) -> int:
        """Requests left in the current window for ``key``.

        Read-only: an expired window reports the full quota but is not reset.
        """
        config = self.get_config(config_name)
        entry = self._limits.get(key)

        if entry is None or self._clock() - entry.first_request >= config.window_ms:
            return config.max_requests

        return max(0, config.max_requests - entry.count)

    def __len__(self) -> int:
        return len(self._limits)

    def __contains__(self, key: object) -> bool:
        return key in self._limits


def with_rate_limit(
    governor: RateGovernor,
    key_func: Callable[..., str],
    config_name: str,
) -> Callable[[F], F]:
    """Decorator that guards an async function with a rate limit check.

    The key is built from the call arguments. A denial raises RateLimitError
    before the function runs; exceptions from the function propagate.

    Args:
        governor: Governor holding the rate limit state
        key_func: Builds the bucket key from the wrapped function's arguments
        config_name: Name of the registered config to apply

    Example:
        >>> @with_rate_limit(governor, lambda query: "data:search", "data:search")
        ... async def search(query):
        ...     return await client.search(query)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = governor.check(key_func(*args, **kwargs), config_name)
            if not result.allowed:
                raise RateLimitError(
                    result.error or "Rate limit exceeded", result.retry_after_ms
                )
            return await func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
