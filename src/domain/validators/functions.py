"""Centralized validation functions (DRY principle).

All validation logic defined once, reused everywhere via Annotated types.
Validators are pure functions that raise ValueError on validation failure.
"""

import re

from src.domain.value_objects.email import Email

_JWT_PATTERN = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*$")


def validate_email(v: str) -> str:
    """Validate email format with email-validator (no DNS lookup).

    Args:
        v: Email address to validate.

    Returns:
        Normalized email (trimmed, lowercase).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("  Alice@Example.COM ")
        'alice@example.com'
    """
    try:
        return str(Email(v))
    except ValueError as e:
        raise ValueError("Invalid email format") from e


def validate_strong_password(v: str) -> str:
    """Validate password strength.

    Args:
        v: Password to validate.

    Returns:
        Password unchanged (validation only).

    Raises:
        ValueError: If password doesn't meet requirements.

    Example:
        >>> validate_strong_password("NewPass123")
        'NewPass123'
        >>> validate_strong_password("weak")
        ValueError: Password must be at least 8 characters
    """
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain digit")
    return v


def validate_account_name(v: str) -> str:
    """Validate and trim a display name.

    Raises:
        ValueError: If the trimmed name is outside 2-100 characters.
    """
    name = v.strip()
    if not 2 <= len(name) <= 100:
        raise ValueError("Name must be between 2 and 100 characters")
    return name


def validate_jwt_format(v: str) -> str:
    """Validate compact JWT shape (three base64url segments).

    Signature and claims are checked by the token service, not here.

    Raises:
        ValueError: If the token is empty or not dot-separated base64url.
    """
    if not v:
        raise ValueError("Token cannot be empty")
    if not _JWT_PATTERN.match(v):
        raise ValueError("Invalid token format")
    return v
