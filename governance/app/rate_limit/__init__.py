"""Rate governor for mutating and authentication operations.

Package layout:
- models.py: Data models (config, entry, results)
- configs.py: Registered policies and key helpers
- governor.py: RateGovernor and the with_rate_limit decorator
- timing.py: Debouncer / Throttler
"""

from governance.app.exceptions import RateLimitError, is_rate_limit_error
from governance.app.rate_limit.configs import (
    DEFAULT_CONFIG_NAME,
    RATE_LIMITS,
    get_rate_limit_key,
    merge_overrides,
)
from governance.app.rate_limit.governor import RateGovernor, with_rate_limit
from governance.app.rate_limit.models import (
    ExecuteResult,
    RateLimitConfig,
    RateLimitEntry,
    RateLimitResult,
)
from governance.app.rate_limit.timing import Debouncer, Throttler, debounce, throttle

__all__ = [
    # Models
    "RateLimitConfig",
    "RateLimitEntry",
    "RateLimitResult",
    "ExecuteResult",
    # Configs
    "RATE_LIMITS",
    "DEFAULT_CONFIG_NAME",
    "get_rate_limit_key",
    "merge_overrides",
    # Governor
    "RateGovernor",
    "with_rate_limit",
    "RateLimitError",
    "is_rate_limit_error",
    # Timing
    "Debouncer",
    "Throttler",
    "debounce",
    "throttle",
]
