"""RFC 7807 Problem Details for HTTP APIs.

This module implements RFC 7807 (Problem Details for HTTP APIs) using Pydantic
models for structured error responses.

RFC 7807: https://tools.ietf.org/html/rfc7807

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 7807 compliant error response schema
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error (validation failures).

    Examples:
        >>> ErrorDetail(
        ...     field="password",
        ...     code="value_error",
        ...     message="Password must contain digit",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        code: Machine-readable error code (authentication errors)
        reason: Why a token was rejected (token errors only)
        locked_until: End of the lock window (locked accounts only)
        errors: Optional list of field-specific errors (for validation failures)

    Examples:
        >>> ProblemDetails(
        ...     type="http://testserver/errors/account-locked",
        ...     title="Account Locked",
        ...     status=423,
        ...     detail="Account is temporarily locked",
        ...     instance="/api/v1/auth/login",
        ...     code="account_locked",
        ...     locked_until=datetime(2026, 1, 1, 12, 30, tzinfo=UTC),
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/invalid-credentials"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Invalid Credentials"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[401],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Invalid email or password"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/auth/login"],
    )
    code: str | None = Field(
        None,
        description="Machine-readable error code",
        examples=["invalid_credentials"],
    )
    reason: str | None = Field(
        None,
        description="Token rejection reason",
        examples=["wrong_purpose"],
    )
    locked_until: datetime | None = Field(
        None,
        description="Lock expiry for locked accounts",
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
