"""Validators package exports."""

from src.domain.validators.functions import (
    validate_account_name,
    validate_email,
    validate_jwt_format,
    validate_strong_password,
)

__all__ = [
    "validate_account_name",
    "validate_email",
    "validate_jwt_format",
    "validate_strong_password",
]
