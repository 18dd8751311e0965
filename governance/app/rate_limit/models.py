"""Rate limiting data models.

This module contains dataclasses for rate limit policy, state and results.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class RateLimitConfig:
    """Policy for one operation class.

    Attributes:
        max_requests: Requests accepted per window
        window_ms: Fixed window length in milliseconds
        min_interval_ms: Minimum spacing between accepted requests (throttle)
    """
    max_requests: int
    window_ms: int
    min_interval_ms: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if self.window_ms < 1:
            raise ValueError("window_ms must be at least 1")
        if self.min_interval_ms is not None and self.min_interval_ms < 0:
            raise ValueError("min_interval_ms must not be negative")


@dataclass
class RateLimitEntry:
    """Entry for tracking rate limit state (fixed window).

    ``last_request`` is None until the first accepted request of the window.
    """
    count: int = 0
    first_request: int = 0
    last_request: Optional[int] = None


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check."""
    allowed: bool
    remaining: int
    reset_time: int
    retry_after_ms: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of ``RateGovernor.execute``.

    Exactly one of ``data`` / ``error`` is meaningful; ``rate_limited`` tells a
    policy denial apart from a failure of the guarded action itself.
    """
    data: Any = None
    error: Optional[Exception] = None
    rate_limited: bool = False
