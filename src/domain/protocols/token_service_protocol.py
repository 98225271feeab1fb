"""Token service protocol for domain layer.

This protocol defines the interface for issuing and verifying the three
session token kinds. Infrastructure layer provides the JWT implementation.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (JWTService)
    - No framework dependencies in domain

Token Strategy:
    - Access tokens: short-lived, authorize API calls
    - Refresh tokens: long-lived, only mint new access tokens (not rotated)
    - Password reset tokens: short-lived, no email/role claims
    - Stateless validation, nothing is persisted, no revocation before expiry
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.entities.account import Account
from src.domain.enums import AccountRole, TokenPurpose
from src.domain.errors import AuthError


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenClaims:
    """Verified token claims.

    Attributes:
        account_id: Subject of the token (``sub``).
        purpose: Operation the token was issued for.
        issued_at: ``iat`` claim.
        expires_at: ``exp`` claim.
        token_id: Unique token identifier (``jti``).
        email: Account email (access/refresh only).
        role: Account role (access/refresh only).
    """

    account_id: UUID
    purpose: TokenPurpose
    issued_at: datetime
    expires_at: datetime
    token_id: str
    email: str | None = None
    role: AccountRole | None = None


class TokenServiceProtocol(Protocol):
    """Session token issuance and verification interface.

    Usage:
        token = token_service.issue_access_token(account)

        match token_service.verify(token, TokenPurpose.ACCESS):
            case Success(value=claims):
                account_id = claims.account_id
            case Failure(error=error):
                # error.code == ErrorCode.INVALID_OR_EXPIRED_TOKEN
                reason = error.reason
    """

    @property
    def access_token_ttl_seconds(self) -> int:
        """Access token lifetime in seconds (``expires_in``)."""
        ...

    def issue_access_token(self, account: Account) -> str:
        """Issue an access token for the account."""
        ...

    def issue_refresh_token(self, account: Account) -> str:
        """Issue a refresh token for the account."""
        ...

    def issue_password_reset_token(self, account_id: UUID) -> str:
        """Issue a password reset token carrying only the account id."""
        ...

    def verify(
        self, token: str, expected_purpose: TokenPurpose
    ) -> Result[TokenClaims, AuthError]:
        """Verify signature, expiry, claim shape and purpose.

        Args:
            token: Encoded token.
            expected_purpose: Purpose the caller requires.

        Returns:
            Success(TokenClaims) if valid.
            Failure(AuthError) with INVALID_OR_EXPIRED_TOKEN otherwise; a
            token of another purpose is rejected with reason WRONG_PURPOSE.
        """
        ...
