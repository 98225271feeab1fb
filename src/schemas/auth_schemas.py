"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints:
    POST /api/v1/auth/register                  - Register account
    POST /api/v1/auth/login                     - Login (access + refresh tokens)
    POST /api/v1/auth/refresh-token             - New access token
    POST /api/v1/auth/logout                    - Record logout
    POST /api/v1/auth/forgot-password           - Request reset link
    POST /api/v1/auth/reset-password            - Reset with token
    POST /api/v1/auth/change-password           - Change password (authenticated)
    GET  /api/v1/auth/profile                   - Current account
    POST /api/v1/auth/verify-email/{account_id} - Verify email (admin)
    POST /api/v1/auth/unlock/{account_id}       - Clear lockout (admin)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos import AccountView
from src.domain.enums import AccountRole, AccountStatus
from src.domain.types import AccountName, Email, Password, SessionToken


# =============================================================================
# Accounts
# =============================================================================


class AccountResponse(BaseModel):
    """Public account representation. Never includes the password hash."""

    id: UUID = Field(..., description="Account ID")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")
    role: AccountRole = Field(..., description="Account role")
    status: AccountStatus = Field(..., description="Account status")
    email_verified_at: datetime | None = Field(None, description="Verification time")
    last_login_at: datetime | None = Field(None, description="Last successful login")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_view(cls, view: AccountView) -> "AccountResponse":
        return cls(
            id=view.id,
            email=view.email,
            name=view.name,
            role=view.role,
            status=view.status,
            email_verified_at=view.email_verified_at,
            last_login_at=view.last_login_at,
            created_at=view.created_at,
        )


class RegisterRequest(BaseModel):
    """Request schema for registration.

    POST /api/v1/auth/register
    Returns: 201 Created
    """

    email: Email
    password: Password
    name: AccountName

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "NewPass123",
                "name": "Alice Martin",
            }
        }
    )


# =============================================================================
# Sessions (login / refresh / logout)
# =============================================================================


class LoginRequest(BaseModel):
    """Request schema for login.

    The password is not strength-checked: a wrong password must reach the
    service so it counts towards lockout.
    """

    email: Email
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "alice@example.com", "password": "NewPass123"}
        }
    )


class LoginResponse(BaseModel):
    """Response schema for login (200 OK)."""

    account: AccountResponse
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class RefreshTokenRequest(BaseModel):
    """Request schema for refresh."""

    refresh_token: SessionToken


class RefreshTokenResponse(BaseModel):
    """Response schema for refresh. The refresh token is not rotated."""

    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


# =============================================================================
# Passwords
# =============================================================================


class ForgotPasswordRequest(BaseModel):
    """Request schema for a password reset link."""

    email: Email


class ResetPasswordRequest(BaseModel):
    """Request schema for resetting a password with a reset token."""

    token: SessionToken
    new_password: Password


class ChangePasswordRequest(BaseModel):
    """Request schema for changing the password of the current account."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: Password


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str = Field(..., description="Human-readable outcome")
