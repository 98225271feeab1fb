"""Annotated types with centralized validation (DRY principle).

Define validation once, use everywhere.
All custom types use Pydantic's Annotated with Field constraints and AfterValidator.

Usage:
    from src.domain.types import Email, Password, SessionToken

    class RegisterRequest(BaseModel):
        email: Email  # Validation included!
        password: Password  # Validation included!
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from src.domain.validators import (
    validate_account_name,
    validate_email,
    validate_jwt_format,
    validate_strong_password,
)

# ============================================================================
# Authentication Types
# ============================================================================

Email = Annotated[
    str,
    Field(
        min_length=5,
        max_length=255,
        description="Email address",
        examples=["alice@example.com"],
    ),
    AfterValidator(validate_email),
]
"""Email address with validation and normalization.

Validation:
- Format: standard email pattern (user@domain.tld)
- Normalized to lowercase, surrounding whitespace removed

Examples:
    >>> class RegisterRequest(BaseModel):
    ...     email: Email
    >>> RegisterRequest(email=" Alice@Example.COM").email
    'alice@example.com'
"""

Password = Annotated[
    str,
    Field(
        min_length=8,
        max_length=128,
        description="Password with strength requirements",
        examples=["NewPass123"],
    ),
    AfterValidator(validate_strong_password),
]
"""Password with strength validation.

Requirements:
- At least 8 characters
- At least one uppercase letter
- At least one lowercase letter
- At least one digit

Only used where a password is SET (register, reset, change). Login accepts
any non-empty string so that a wrong password counts as a failed attempt.
"""

AccountName = Annotated[
    str,
    Field(
        min_length=2,
        max_length=100,
        description="Display name",
        examples=["Alice Martin"],
    ),
    AfterValidator(validate_account_name),
]

SessionToken = Annotated[
    str,
    Field(
        min_length=16,
        max_length=4096,
        description="Signed session token (JWT compact form)",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJzdWIiOiIxIn0.c2ln"],
    ),
    AfterValidator(validate_jwt_format),
]
"""Refresh or password reset token as received from the client."""
