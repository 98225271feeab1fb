"""Unit tests for the bearer authentication dependencies.

Tests cover:
- Service Result to CurrentAccount or HTTPException mapping
- 401 for token failures and missing accounts, 403 for inactive accounts
- Admin guard

Architecture:
- Unit tests calling the dependency functions directly
- AuthenticationService mocked with AsyncMock
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from uuid_extensions import uuid7

from src.core.result import Failure, Success
from src.domain.enums import AccountRole, TokenFailureReason, TokenPurpose
from src.domain.errors import AuthError
from src.domain.protocols import TokenClaims
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentAccount,
    get_current_account,
    require_admin,
)

ISSUED_AT = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def credentials():
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials="a.b.c")


def _service_returning(result):
    service = AsyncMock()
    service.authenticate_access_token.return_value = result
    return service


def _claims(**overrides) -> TokenClaims:
    fields = {
        "account_id": uuid7(),
        "purpose": TokenPurpose.ACCESS,
        "issued_at": ISSUED_AT,
        "expires_at": ISSUED_AT + timedelta(hours=1),
        "token_id": "jti-1",
        "email": "alice@example.com",
        "role": AccountRole.USER,
    } | overrides
    return TokenClaims(**fields)


@pytest.mark.unit
class TestGetCurrentAccount:
    async def test_success_builds_current_account(self, credentials):
        claims = _claims(role=AccountRole.ADMIN)

        current = await get_current_account(
            credentials, _service_returning(Success(value=claims))
        )

        assert current == CurrentAccount(
            account_id=claims.account_id,
            email="alice@example.com",
            role=AccountRole.ADMIN,
            token_id="jti-1",
        )

    async def test_inactive_account_is_forbidden(self, credentials):
        service = _service_returning(Failure(error=AuthError.account_inactive()))

        with pytest.raises(HTTPException) as exc_info:
            await get_current_account(credentials, service)

        assert exc_info.value.status_code == 403

    @pytest.mark.parametrize(
        "error",
        [
            AuthError.invalid_token(TokenFailureReason.EXPIRED),
            AuthError.invalid_token(TokenFailureReason.WRONG_PURPOSE),
            AuthError.account_not_found(),
        ],
    )
    async def test_token_failures_are_unauthorized(self, credentials, error):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_account(
                credentials, _service_returning(Failure(error=error))
            )

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    @pytest.mark.parametrize(
        "overrides", [{"email": None}, {"role": None}, {"email": None, "role": None}]
    )
    async def test_claims_without_account_fields_are_unauthorized(
        self, credentials, overrides
    ):
        service = _service_returning(Success(value=_claims(**overrides)))

        with pytest.raises(HTTPException) as exc_info:
            await get_current_account(credentials, service)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Access token is missing account claims"


@pytest.mark.unit
class TestRequireAdmin:
    async def test_admin_passes(self):
        admin = CurrentAccount(
            account_id=uuid7(),
            email="a@example.com",
            role=AccountRole.ADMIN,
            token_id="t",
        )

        assert await require_admin(admin) is admin

    @pytest.mark.parametrize("role", [AccountRole.USER, AccountRole.MODERATOR])
    async def test_other_roles_forbidden(self, role):
        account = CurrentAccount(
            account_id=uuid7(), email="a@example.com", role=role, token_id="t"
        )

        with pytest.raises(HTTPException) as exc_info:
            await require_admin(account)

        assert exc_info.value.status_code == 403
