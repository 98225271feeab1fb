"""Reasons a token failed verification.

All reasons surface to callers as ``ErrorCode.INVALID_OR_EXPIRED_TOKEN``.
The reason is kept on the error for logging and tests; the HTTP layer does
not expose it.
"""

from enum import Enum


class TokenFailureReason(str, Enum):
    """Why a presented token was rejected."""

    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    MALFORMED = "malformed"
    WRONG_PURPOSE = "wrong_purpose"
