"""Custom exceptions for the governance core."""

from typing import Mapping, Optional, Sequence


class GovernanceException(Exception):
    """Base class for governance exceptions.

    Expected conditions (denials, invalid input) are reported through return
    values; these exceptions exist for the wrappers that turn a decision into
    a typed, catchable signal.
    """

    def __init__(self, message: str = "Governance error"):
        self.message = message
        super().__init__(message)


class RateLimitError(GovernanceException):
    """Raised (or returned by ``RateGovernor.execute``) when a request is denied.

    Carries the retry hint of the denial so callers can wait before retrying.
    """

    is_rate_limit_error = True

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after_ms: Optional[int] = None,
    ):
        self.retry_after_ms = retry_after_ms
        super().__init__(message)


class ValidationError(GovernanceException):
    """Raised when input fails validation.

    ``errors`` maps a field name to its messages; the exception message is the
    first of them, which is what a form shows the user.
    """

    def __init__(
        self,
        errors: Mapping[str, Sequence[str]],
        message: Optional[str] = None,
    ):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        if message is None:
            message = next(
                (messages[0] for messages in self.errors.values() if messages),
                "Invalid input",
            )
        super().__init__(message)


def is_rate_limit_error(error: object) -> bool:
    """Check whether an error is a rate limit denial.

    Accepts RateLimitError instances as well as any exception that marks
    itself with ``is_rate_limit_error = True``.
    """
    if isinstance(error, RateLimitError):
        return True
    return isinstance(error, Exception) and getattr(error, "is_rate_limit_error", False) is True
