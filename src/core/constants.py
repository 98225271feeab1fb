"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `src/core/config.py` instead.

Example:
    >>> from src.core.constants import TOKEN_LOG_PREFIX_LENGTH
    >>> visible = token[:TOKEN_LOG_PREFIX_LENGTH]
"""

# =============================================================================
# Password Hashing
# =============================================================================

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""

BCRYPT_ROUNDS_MIN: int = 10
"""Lowest accepted bcrypt work factor."""

BCRYPT_ROUNDS_MAX: int = 20
"""Highest accepted bcrypt work factor (above this hashing is impractically slow)."""

BCRYPT_MAX_PASSWORD_BYTES: int = 72
"""bcrypt ignores input beyond this many bytes."""


# =============================================================================
# Token Signing
# =============================================================================

JWT_SECRET_MIN_LENGTH: int = 32
"""Minimum HMAC secret length in characters (256 bits)."""


# =============================================================================
# Logging Limits
# =============================================================================

TOKEN_LOG_PREFIX_LENGTH: int = 8
"""Characters of a token that may appear in logs (the rest is elided)."""
