"""Authentication domain errors.

Closed taxonomy of expected authentication failures. Every failure is
returned as ``Failure(error=AuthError(...))`` and callers dispatch with
``match`` on ``error.code``. Exceptions are reserved for faults the
authentication core cannot handle (store unavailable, hashing backend
broken), which propagate unchanged.

Error Kinds:
    - INVALID_CREDENTIALS: unknown email OR wrong password (deliberately
      indistinguishable)
    - ACCOUNT_LOCKED: lockout window active, password not checked
    - ACCOUNT_INACTIVE: credentials valid but status is not ACTIVE
    - INVALID_OR_EXPIRED_TOKEN: bad signature, expired, malformed, or
      wrong purpose
    - ACCOUNT_NOT_FOUND: token valid but the account no longer exists
    - EMAIL_ALREADY_EXISTS: registration with a taken email

Usage:
    from src.domain.errors import AuthError

    match result:
        case Failure(error=AuthError(code=ErrorCode.ACCOUNT_LOCKED) as error):
            retry_at = error.locked_until
"""

from dataclasses import dataclass
from datetime import datetime

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.domain.enums import TokenFailureReason


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthError(DomainError):
    """Authentication failure returned by value.

    Attributes:
        code: One of the authentication error codes.
        message: Client-safe message.
        details: Optional debugging context.
        reason: Why a token was rejected (token errors only).
        locked_until: End of the lock window (ACCOUNT_LOCKED only).
    """

    reason: TokenFailureReason | None = None
    locked_until: datetime | None = None

    @classmethod
    def invalid_credentials(cls) -> "AuthError":
        """Unknown email or wrong password."""
        return cls(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid email or password",
        )

    @classmethod
    def account_locked(cls, locked_until: datetime) -> "AuthError":
        """Account is inside its lockout window."""
        return cls(
            code=ErrorCode.ACCOUNT_LOCKED,
            message="Account is temporarily locked",
            locked_until=locked_until,
        )

    @classmethod
    def account_inactive(cls) -> "AuthError":
        """Account exists but is not ACTIVE."""
        return cls(
            code=ErrorCode.ACCOUNT_INACTIVE,
            message="Account is not active",
        )

    @classmethod
    def invalid_token(cls, reason: TokenFailureReason) -> "AuthError":
        """Token rejected by the verifier."""
        return cls(
            code=ErrorCode.INVALID_OR_EXPIRED_TOKEN,
            message="Token is invalid or expired",
            reason=reason,
        )

    @classmethod
    def account_not_found(cls) -> "AuthError":
        """Referenced account no longer exists."""
        return cls(
            code=ErrorCode.ACCOUNT_NOT_FOUND,
            message="Account not found",
        )

    @classmethod
    def email_already_exists(cls) -> "AuthError":
        """Registration with an email that is already taken."""
        return cls(
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            message="Email is already registered",
        )
