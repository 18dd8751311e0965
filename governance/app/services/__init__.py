"""Guarded call-site services.

Each service validates input, builds the rate limit key from sanitized
values, asks the governor, and only then dispatches to an injected client.
"""

from governance.app.services.auth_guard import AuthGuard
from governance.app.services.base import AuthClient, RecordClient
from governance.app.services.record_guard import RecordGuard

__all__ = [
    "AuthClient",
    "RecordClient",
    "AuthGuard",
    "RecordGuard",
]
