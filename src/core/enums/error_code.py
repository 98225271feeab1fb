"""Machine-readable error codes.

Error codes follow ENTITY_ACTION_REASON naming where it reads naturally.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Authentication errors (INVALID_CREDENTIALS, INVALID_OR_EXPIRED_TOKEN)
- Account state errors (ACCOUNT_LOCKED, ACCOUNT_INACTIVE)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    INVALID_PASSWORD = "invalid_password"
    VALIDATION_FAILED = "validation_failed"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"

    # Account state errors
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_INACTIVE = "account_inactive"

    # Resource errors
    ACCOUNT_NOT_FOUND = "account_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
