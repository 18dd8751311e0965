"""Validated, rate limited authentication flows."""

from governance.app.core.logging import get_log_context, get_logger
from governance.app.exceptions import ValidationError
from governance.app.rate_limit import ExecuteResult, RateGovernor, get_rate_limit_key
from governance.app.services.base import AuthClient
from governance.app.validation import SCHEMAS, validate_schema

logger = get_logger(__name__)

SIGN_IN = "auth:signIn"
SIGN_UP = "auth:signUp"


class AuthGuard:
    """Wraps an AuthClient with input validation and brute-force limits.

    Buckets are keyed by the sanitized email. A successful sign in or sign up
    clears its bucket, so a correct login after failed attempts restores the
    full quota at once; signing out clears every bucket.
    """

    def __init__(self, client: AuthClient, governor: RateGovernor):
        self.client = client
        self.governor = governor

    async def sign_up(self, email: str, password: str, username: str) -> ExecuteResult:
        validation = validate_schema(
            {"email": email, "password": password, "username": username},
            SCHEMAS["sign_up"],
        )
        if not validation.is_valid:
            return ExecuteResult(error=ValidationError(validation.errors))

        data = validation.sanitized_data
        key = get_rate_limit_key(SIGN_UP, data["email"])
        result = await self.governor.execute(
            key,
            SIGN_UP,
            lambda: self.client.sign_up(data["email"], data["password"], data["username"]),
        )
        if result.error is None:
            self.governor.clear(key)
        return result

    async def sign_in(self, email: str, password: str) -> ExecuteResult:
        validation = validate_schema(
            {"email": email, "password": password},
            SCHEMAS["sign_in"],
        )
        if not validation.is_valid:
            return ExecuteResult(error=ValidationError(validation.errors))

        data = validation.sanitized_data
        key = get_rate_limit_key(SIGN_IN, data["email"])
        result = await self.governor.execute(
            key,
            SIGN_IN,
            lambda: self.client.sign_in(data["email"], data["password"]),
        )
        if result.error is None:
            self.governor.clear(key)
        elif not result.rate_limited:
            logger.info(
                "Sign in failed",
                extra=get_log_context(
                    operation=SIGN_IN,
                    remaining=self.governor.get_remaining(key, SIGN_IN),
                ),
            )
        return result

    async def sign_out(self) -> ExecuteResult:
        self.governor.clear_all()
        try:
            await self.client.sign_out()
        except Exception as e:
            logger.warning(f"Sign out failed: {type(e).__name__}: {e}")
            return ExecuteResult(error=e)
        return ExecuteResult()
