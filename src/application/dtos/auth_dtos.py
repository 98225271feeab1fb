"""Authentication DTOs (Data Transfer Objects).

Result dataclasses returned by AuthenticationService. These carry data
from the application layer back to the presentation layer.

DTOs:
    - AccountView: Public account view (never carries the password hash)
    - LoginResult: Result from login
    - RefreshResult: Result from refresh
    - ForgotPasswordResult: Result from forgot_password (always identical)
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.entities.account import Account
from src.domain.enums import AccountRole, AccountStatus

FORGOT_PASSWORD_MESSAGE = (
    "If an account exists for that email, a password reset link has been sent."
)


@dataclass(frozen=True, kw_only=True)
class AccountView:
    """Public account view.

    Built by explicit field selection, so fields added to Account later are
    not exposed by accident.
    """

    id: UUID
    email: str
    name: str
    role: AccountRole
    status: AccountStatus
    email_verified_at: datetime | None
    last_login_at: datetime | None
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        return cls(
            id=account.id,
            email=account.email,
            name=account.name,
            role=account.role,
            status=account.status,
            email_verified_at=account.email_verified_at,
            last_login_at=account.last_login_at,
            created_at=account.created_at,
        )


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Response from successful login.

    Attributes:
        account: Public account view.
        access_token: JWT access token.
        refresh_token: JWT refresh token.
        token_type: Token type (always "bearer").
        expires_in: Access token lifetime in seconds.
    """

    account: AccountView
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = 3600


@dataclass(frozen=True, kw_only=True)
class RefreshResult:
    """Response from refresh. The refresh token itself is not rotated."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = 3600


@dataclass(frozen=True, kw_only=True)
class ForgotPasswordResult:
    """Generic response; identical whether or not the email exists."""

    message: str = FORGOT_PASSWORD_MESSAGE
