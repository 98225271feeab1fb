"""JWT token service (adapter).

This service implements the TokenServiceProtocol using PyJWT with HMAC-SHA256.

Architecture:
    - Implements TokenServiceProtocol (no inheritance required)
    - Structural typing via Protocol
    - Secrets and lifetimes come from AuthConfig, injected via container

Security:
    - One signing secret per purpose (access, refresh, password reset),
      each at least 256 bits
    - Purpose also embedded as a claim and checked on every verify, so
      tokens stay non-interchangeable even if secrets are configured equal
    - Unique JWT ID (jti) per token
    - Nothing is persisted: tokens cannot be revoked before ``exp``

Claims:
    - access/refresh: sub, email, role, purpose, iat, exp, jti
    - password_reset: sub, purpose, iat, exp, jti (no email/role)
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from src.core.config import AuthConfig
from src.core.constants import JWT_SECRET_MIN_LENGTH
from src.core.result import Failure, Result, Success
from src.domain.entities.account import Account
from src.domain.enums import AccountRole, TokenFailureReason, TokenPurpose
from src.domain.errors import AuthError
from src.domain.protocols.token_service_protocol import TokenClaims

_REQUIRED_CLAIMS = ["sub", "purpose", "iat", "exp", "jti"]


class JWTService:
    """JWT session token issuance and verification.

    Usage:
        from src.core.container import get_token_service

        token_service = get_token_service()
        token = token_service.issue_access_token(account)

        match token_service.verify(token, TokenPurpose.ACCESS):
            case Success(value=claims):
                account_id = claims.account_id
            case Failure(error=error):
                reason = error.reason
    """

    def __init__(self, config: AuthConfig) -> None:
        """Initialize JWT service.

        Args:
            config: Authentication configuration (secrets, algorithm, TTLs).

        Raises:
            ValueError: If any signing secret is shorter than 32 characters.
        """
        self._secrets: dict[TokenPurpose, str] = {
            TokenPurpose.ACCESS: config.access_token_secret,
            TokenPurpose.REFRESH: config.refresh_token_secret,
            TokenPurpose.PASSWORD_RESET: config.password_reset_token_secret,
        }
        for purpose, secret in self._secrets.items():
            if len(secret) < JWT_SECRET_MIN_LENGTH:
                msg = (
                    f"{purpose.value} token secret must be at least "
                    f"{JWT_SECRET_MIN_LENGTH} bytes (256 bits)"
                )
                raise ValueError(msg)

        self._ttls: dict[TokenPurpose, timedelta] = {
            TokenPurpose.ACCESS: config.access_token_ttl,
            TokenPurpose.REFRESH: config.refresh_token_ttl,
            TokenPurpose.PASSWORD_RESET: config.password_reset_token_ttl,
        }
        self._algorithm = config.jwt_algorithm

    @property
    def access_token_ttl_seconds(self) -> int:
        return int(self._ttls[TokenPurpose.ACCESS].total_seconds())

    def issue_access_token(self, account: Account) -> str:
        """Issue an access token.

        Example:
            >>> token = service.issue_access_token(account)
            >>> len(token.split("."))
            3
        """
        return self._issue(
            TokenPurpose.ACCESS,
            account.id,
            email=account.email,
            role=account.role.value,
        )

    def issue_refresh_token(self, account: Account) -> str:
        """Issue a refresh token (same claim shape as access)."""
        return self._issue(
            TokenPurpose.REFRESH,
            account.id,
            email=account.email,
            role=account.role.value,
        )

    def issue_password_reset_token(self, account_id: UUID) -> str:
        """Issue a password reset token with minimal claims."""
        return self._issue(TokenPurpose.PASSWORD_RESET, account_id)

    def verify(
        self, token: str, expected_purpose: TokenPurpose
    ) -> Result[TokenClaims, AuthError]:
        """Verify a token for the expected purpose.

        Args:
            token: Encoded JWT.
            expected_purpose: Purpose the caller requires.

        Returns:
            Success(TokenClaims) if signature, expiry, claim shape and
            purpose all check out.
            Failure(AuthError) with INVALID_OR_EXPIRED_TOKEN otherwise. The
            ``reason`` is EXPIRED, INVALID_SIGNATURE, MALFORMED or
            WRONG_PURPOSE.

        Note:
            A token signed for another purpose fails the signature check
            under this purpose's secret. Its unverified purpose claim is
            then read only to report WRONG_PURPOSE; it is never trusted.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secrets[expected_purpose],
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except ExpiredSignatureError:
            return self._reject(TokenFailureReason.EXPIRED)
        except InvalidSignatureError:
            return self._reject(self._classify_bad_signature(token, expected_purpose))
        except InvalidTokenError:
            return self._reject(TokenFailureReason.MALFORMED)

        if payload.get("purpose") != expected_purpose.value:
            return self._reject(TokenFailureReason.WRONG_PURPOSE)

        try:
            claims = self._to_claims(payload, expected_purpose)
        except (KeyError, TypeError, ValueError):
            return self._reject(TokenFailureReason.MALFORMED)

        return Success(value=claims)

    def _issue(self, purpose: TokenPurpose, subject: UUID, **extra: str) -> str:
        now = datetime.now(UTC)
        expires_at = now + self._ttls[purpose]

        payload: dict[str, Any] = {
            "sub": str(subject),
            **extra,
            "purpose": purpose.value,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(
            payload, self._secrets[purpose], algorithm=self._algorithm
        )
        return token

    def _classify_bad_signature(
        self, token: str, expected_purpose: TokenPurpose
    ) -> TokenFailureReason:
        try:
            unverified = jwt.decode(token, options={"verify_signature": False})
        except InvalidTokenError:
            return TokenFailureReason.INVALID_SIGNATURE

        claimed = unverified.get("purpose")
        if claimed in {p.value for p in TokenPurpose} and claimed != expected_purpose.value:
            return TokenFailureReason.WRONG_PURPOSE
        return TokenFailureReason.INVALID_SIGNATURE

    @staticmethod
    def _to_claims(payload: dict[str, Any], purpose: TokenPurpose) -> TokenClaims:
        email: str | None = None
        role: AccountRole | None = None
        if purpose is not TokenPurpose.PASSWORD_RESET:
            email = payload["email"]
            role = AccountRole(payload["role"])
            if not isinstance(email, str):
                raise TypeError("email claim must be a string")

        return TokenClaims(
            account_id=UUID(payload["sub"]),
            purpose=purpose,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
            token_id=str(payload["jti"]),
            email=email,
            role=role,
        )

    @staticmethod
    def _reject(reason: TokenFailureReason) -> Failure[AuthError]:
        return Failure(error=AuthError.invalid_token(reason))
