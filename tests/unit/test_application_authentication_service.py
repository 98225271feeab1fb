"""Unit tests for AuthenticationService.

Tests cover:
- Login outcomes (success, unknown email, wrong password, locked, inactive)
- Lock expiry compare-and-swap and retry
- Refresh, logout and access token checks
- Password recovery (no enumeration, delivery failures swallowed)
- Registration, email verification, unlock

Architecture:
- Unit tests for application service (mocked dependencies)
- Mock repository and adapter protocols
- Async tests (service uses async repository)
"""

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from src.application.dtos import FORGOT_PASSWORD_MESSAGE, AccountView, LoginResult
from src.application.services.authentication_service import AuthenticationService
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import (
    AccountRole,
    AccountStatus,
    TokenFailureReason,
    TokenPurpose,
)
from src.domain.errors import AuthError
from src.domain.policies import LockoutPolicy
from src.domain.protocols import TokenClaims
from tests.conftest import create_account


def create_claims(account_id, purpose=TokenPurpose.REFRESH) -> TokenClaims:
    now = datetime.now(UTC)
    return TokenClaims(
        account_id=account_id,
        purpose=purpose,
        issued_at=now,
        expires_at=now + timedelta(hours=1),
        token_id=str(uuid7()),
        email="alice@example.com",
        role=AccountRole.USER,
    )


@pytest.fixture
def mock_repo():
    return AsyncMock()


@pytest.fixture
def mock_password_service():
    service = Mock()
    service.verify_password.return_value = True
    service.hash_password.return_value = "$2b$10$newhash"
    return service


@pytest.fixture
def mock_token_service():
    service = Mock()
    service.issue_access_token.return_value = "access_token_123"
    service.issue_refresh_token.return_value = "refresh_token_456"
    service.issue_password_reset_token.return_value = "reset_token_789"
    service.access_token_ttl_seconds = 3600
    return service


@pytest.fixture
def mock_delivery():
    return AsyncMock()


@pytest.fixture
def mock_logger():
    logger = Mock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def service(
    mock_repo, mock_password_service, mock_token_service, mock_delivery, mock_logger
):
    return AuthenticationService(
        account_repository=mock_repo,
        password_service=mock_password_service,
        token_service=mock_token_service,
        lockout_policy=LockoutPolicy(threshold=5, cooldown=timedelta(minutes=30)),
        reset_delivery=mock_delivery,
        logger=mock_logger,
    )


@pytest.mark.unit
class TestLogin:
    """Test login outcomes."""

    async def test_login_success_returns_tokens_and_resets_counters(
        self, service, mock_repo
    ):
        # Arrange
        account = create_account(failed_login_attempts=2)
        mock_repo.find_by_email.return_value = account
        mock_repo.update.return_value = replace(account, failed_login_attempts=0)

        # Act
        result = await service.login("Alice@Example.com ", "NewPass123")

        # Assert
        assert isinstance(result, Success)
        assert isinstance(result.value, LoginResult)
        assert result.value.access_token == "access_token_123"
        assert result.value.refresh_token == "refresh_token_456"
        assert result.value.token_type == "bearer"
        assert result.value.expires_in == 3600
        mock_repo.find_by_email.assert_awaited_once_with("alice@example.com")
        _, kwargs = mock_repo.update.call_args
        assert kwargs["failed_login_attempts"] == 0
        assert kwargs["locked_until"] is None
        assert kwargs["last_login_at"] is not None

    async def test_login_result_has_no_password_hash(self, service, mock_repo):
        account = create_account()
        mock_repo.find_by_email.return_value = account
        mock_repo.update.return_value = account

        result = await service.login("alice@example.com", "NewPass123")

        assert isinstance(result.value.account, AccountView)
        assert not hasattr(result.value.account, "password_hash")

    async def test_unknown_email_returns_invalid_credentials(
        self, service, mock_repo, mock_password_service
    ):
        mock_repo.find_by_email.return_value = None

        result = await service.login("ghost@example.com", "NewPass123")

        assert result == Failure(error=AuthError.invalid_credentials())
        mock_password_service.verify_dummy.assert_called_once_with("NewPass123")
        mock_password_service.verify_password.assert_not_called()
        mock_repo.record_failed_login.assert_not_awaited()

    async def test_wrong_password_records_failure(
        self, service, mock_repo, mock_password_service
    ):
        account = create_account(failed_login_attempts=1)
        mock_repo.find_by_email.return_value = account
        mock_repo.record_failed_login.return_value = replace(
            account, failed_login_attempts=2
        )
        mock_password_service.verify_password.return_value = False

        result = await service.login("alice@example.com", "WrongPass1")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_CREDENTIALS
        account_id, threshold, locked_until, now = (
            mock_repo.record_failed_login.call_args.args
        )
        assert account_id == account.id
        assert threshold == 5
        assert locked_until == now + timedelta(minutes=30)
        mock_repo.update.assert_not_awaited()

    async def test_locked_account_refused_without_password_check(
        self, service, mock_repo, mock_password_service
    ):
        until = datetime.now(UTC) + timedelta(minutes=10)
        mock_repo.find_by_email.return_value = create_account(
            failed_login_attempts=5, locked_until=until
        )

        result = await service.login("alice@example.com", "NewPass123")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.ACCOUNT_LOCKED
        assert result.error.locked_until == until
        mock_password_service.verify_password.assert_not_called()

    async def test_expired_lock_cleared_then_login_proceeds(self, service, mock_repo):
        account = create_account(
            failed_login_attempts=5,
            locked_until=datetime.now(UTC) - timedelta(minutes=1),
            version=4,
        )
        cleared = replace(account, failed_login_attempts=0, locked_until=None, version=5)
        mock_repo.find_by_email.return_value = account
        mock_repo.clear_expired_lock.return_value = cleared
        mock_repo.update.return_value = cleared

        result = await service.login("alice@example.com", "NewPass123")

        assert isinstance(result, Success)
        mock_repo.clear_expired_lock.assert_awaited_once_with(account.id, 4)

    async def test_lost_lock_expiry_race_rereads_account(self, service, mock_repo):
        """A concurrent write wins the compare-and-swap: re-read and re-evaluate."""
        expired = create_account(
            failed_login_attempts=5,
            locked_until=datetime.now(UTC) - timedelta(minutes=1),
            version=4,
        )
        already_cleared = replace(
            expired, failed_login_attempts=0, locked_until=None, version=5
        )
        mock_repo.find_by_email.return_value = expired
        mock_repo.clear_expired_lock.return_value = None
        mock_repo.find_by_id.return_value = already_cleared
        mock_repo.update.return_value = already_cleared

        result = await service.login("alice@example.com", "NewPass123")

        assert isinstance(result, Success)
        mock_repo.clear_expired_lock.assert_awaited_once()
        mock_repo.find_by_id.assert_awaited_once_with(expired.id)

    async def test_inactive_account_with_correct_password(self, service, mock_repo):
        mock_repo.find_by_email.return_value = create_account(
            status=AccountStatus.PENDING_VERIFICATION
        )

        result = await service.login("alice@example.com", "NewPass123")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.ACCOUNT_INACTIVE
        mock_repo.update.assert_not_awaited()

    async def test_inactive_account_with_wrong_password_is_not_counted(
        self, service, mock_repo, mock_password_service
    ):
        mock_repo.find_by_email.return_value = create_account(
            status=AccountStatus.SUSPENDED
        )
        mock_password_service.verify_password.return_value = False

        result = await service.login("alice@example.com", "WrongPass1")

        assert result.error.code is ErrorCode.INVALID_CREDENTIALS
        mock_repo.record_failed_login.assert_not_awaited()

    async def test_store_fault_propagates(self, service, mock_repo):
        mock_repo.find_by_email.side_effect = ConnectionError("database unreachable")

        with pytest.raises(ConnectionError):
            await service.login("alice@example.com", "NewPass123")


@pytest.mark.unit
class TestRefreshAndLogout:
    """Test refresh, logout and access token checks."""

    async def test_refresh_issues_new_access_token(
        self, service, mock_repo, mock_token_service
    ):
        account = create_account()
        mock_token_service.verify.return_value = Success(value=create_claims(account.id))
        mock_repo.find_by_id.return_value = account

        result = await service.refresh("refresh_token_456")

        assert isinstance(result, Success)
        assert result.value.access_token == "access_token_123"
        mock_token_service.verify.assert_called_once_with(
            "refresh_token_456", TokenPurpose.REFRESH
        )
        mock_token_service.issue_refresh_token.assert_not_called()

    async def test_refresh_rejected_token(self, service, mock_token_service):
        error = AuthError.invalid_token(TokenFailureReason.WRONG_PURPOSE)
        mock_token_service.verify.return_value = Failure(error=error)

        result = await service.refresh("access_token_123")

        assert result == Failure(error=error)

    async def test_refresh_for_deleted_account(
        self, service, mock_repo, mock_token_service
    ):
        mock_token_service.verify.return_value = Success(value=create_claims(uuid7()))
        mock_repo.find_by_id.return_value = None

        result = await service.refresh("refresh_token_456")

        assert result.error.code is ErrorCode.ACCOUNT_NOT_FOUND

    async def test_refresh_for_suspended_account(
        self, service, mock_repo, mock_token_service
    ):
        account = create_account(status=AccountStatus.SUSPENDED)
        mock_token_service.verify.return_value = Success(value=create_claims(account.id))
        mock_repo.find_by_id.return_value = account

        result = await service.refresh("refresh_token_456")

        assert result.error.code is ErrorCode.ACCOUNT_INACTIVE

    async def test_logout_records_timestamp(self, service, mock_repo):
        account = create_account()
        mock_repo.update.return_value = account

        result = await service.logout(account.id)

        assert result == Success(value=None)
        _, kwargs = mock_repo.update.call_args
        assert set(kwargs) == {"last_logout_at"}

    async def test_logout_unknown_account(self, service, mock_repo):
        mock_repo.update.return_value = None

        result = await service.logout(uuid7())

        assert result.error.code is ErrorCode.ACCOUNT_NOT_FOUND

    async def test_authenticate_access_token_expects_access_purpose(
        self, service, mock_repo, mock_token_service
    ):
        account = create_account()
        claims = create_claims(account.id, TokenPurpose.ACCESS)
        mock_token_service.verify.return_value = Success(value=claims)
        mock_repo.find_by_id.return_value = account

        result = await service.authenticate_access_token("access_token_123")

        assert result == Success(value=claims)
        mock_token_service.verify.assert_called_once_with(
            "access_token_123", TokenPurpose.ACCESS
        )
        mock_repo.find_by_id.assert_awaited_once_with(account.id)

    async def test_authenticate_access_token_uses_stored_role(
        self, service, mock_repo, mock_token_service
    ):
        account = create_account(role=AccountRole.USER)
        claims = replace(
            create_claims(account.id, TokenPurpose.ACCESS), role=AccountRole.ADMIN
        )
        mock_token_service.verify.return_value = Success(value=claims)
        mock_repo.find_by_id.return_value = account

        result = await service.authenticate_access_token("access_token_123")

        assert result.value.role is AccountRole.USER

    @pytest.mark.parametrize(
        "status", [AccountStatus.SUSPENDED, AccountStatus.INACTIVE]
    )
    async def test_authenticate_access_token_refuses_inactive_account(
        self, service, mock_repo, mock_token_service, status
    ):
        account = create_account(status=status)
        mock_token_service.verify.return_value = Success(
            value=create_claims(account.id, TokenPurpose.ACCESS)
        )
        mock_repo.find_by_id.return_value = account

        result = await service.authenticate_access_token("access_token_123")

        assert result == Failure(error=AuthError.account_inactive())

    async def test_authenticate_access_token_refuses_deleted_account(
        self, service, mock_repo, mock_token_service
    ):
        mock_token_service.verify.return_value = Success(
            value=create_claims(uuid7(), TokenPurpose.ACCESS)
        )
        mock_repo.find_by_id.return_value = None

        result = await service.authenticate_access_token("access_token_123")

        assert result == Failure(error=AuthError.account_not_found())

    async def test_authenticate_access_token_rejected_token_skips_store(
        self, service, mock_repo, mock_token_service
    ):
        mock_token_service.verify.return_value = Failure(
            error=AuthError.invalid_token(TokenFailureReason.EXPIRED)
        )

        result = await service.authenticate_access_token("access_token_123")

        assert result.error.reason is TokenFailureReason.EXPIRED
        mock_repo.find_by_id.assert_not_awaited()


@pytest.mark.unit
class TestPasswordRecovery:
    """Test forgot_password, reset_password and change_password."""

    async def test_forgot_password_known_and_unknown_are_identical(
        self, service, mock_repo, mock_delivery
    ):
        mock_repo.find_by_email.return_value = create_account()
        known = await service.forgot_password("alice@example.com")

        mock_repo.find_by_email.return_value = None
        unknown = await service.forgot_password("ghost@example.com")

        assert known == unknown
        assert known.value.message == FORGOT_PASSWORD_MESSAGE
        mock_delivery.deliver_reset_link.assert_awaited_once_with(
            "alice@example.com", "reset_token_789"
        )

    async def test_forgot_password_swallows_delivery_failure(
        self, service, mock_repo, mock_delivery, mock_logger
    ):
        mock_repo.find_by_email.return_value = create_account()
        mock_delivery.deliver_reset_link.side_effect = ConnectionError("smtp down")

        result = await service.forgot_password("alice@example.com")

        assert isinstance(result, Success)
        mock_logger.error.assert_called_once()

    async def test_reset_password_stores_new_hash(
        self, service, mock_repo, mock_token_service, mock_password_service
    ):
        account = create_account()
        mock_token_service.verify.return_value = Success(
            value=create_claims(account.id, TokenPurpose.PASSWORD_RESET)
        )
        mock_repo.find_by_id.return_value = account
        mock_repo.update.return_value = account

        result = await service.reset_password("reset_token_789", "NewPass123")

        assert result == Success(value=None)
        mock_password_service.hash_password.assert_called_once_with("NewPass123")
        mock_repo.update.assert_awaited_once_with(
            account.id, password_hash="$2b$10$newhash"
        )

    async def test_reset_password_rejects_non_reset_token(
        self, service, mock_repo, mock_token_service
    ):
        error = AuthError.invalid_token(TokenFailureReason.WRONG_PURPOSE)
        mock_token_service.verify.return_value = Failure(error=error)

        result = await service.reset_password("access_token_123", "NewPass123")

        assert result == Failure(error=error)
        mock_token_service.verify.assert_called_once_with(
            "access_token_123", TokenPurpose.PASSWORD_RESET
        )
        mock_repo.update.assert_not_awaited()

    async def test_change_password_wrong_current_not_counted(
        self, service, mock_repo, mock_password_service
    ):
        account = create_account()
        mock_repo.find_by_id.return_value = account
        mock_password_service.verify_password.return_value = False

        result = await service.change_password(account.id, "WrongPass1", "NewPass456")

        assert result.error.code is ErrorCode.INVALID_CREDENTIALS
        mock_repo.record_failed_login.assert_not_awaited()
        mock_repo.update.assert_not_awaited()


@pytest.mark.unit
class TestAccountLifecycle:
    """Test register, verify_email and unlock."""

    async def test_register_creates_pending_account(
        self, service, mock_repo, mock_password_service
    ):
        mock_repo.find_by_email.return_value = None
        mock_repo.save.return_value = True

        result = await service.register(" Bob@Example.com", "NewPass123", " Bob ")

        assert isinstance(result, Success)
        assert result.value.email == "bob@example.com"
        assert result.value.name == "Bob"
        assert result.value.status is AccountStatus.PENDING_VERIFICATION
        assert result.value.role is AccountRole.USER
        saved = mock_repo.save.call_args.args[0]
        assert saved.password_hash == "$2b$10$newhash"

    async def test_register_duplicate_email(self, service, mock_repo):
        mock_repo.find_by_email.return_value = create_account()

        result = await service.register("alice@example.com", "NewPass123", "Alice")

        assert result.error.code is ErrorCode.EMAIL_ALREADY_EXISTS
        mock_repo.save.assert_not_awaited()

    async def test_register_loses_insert_race(self, service, mock_repo):
        mock_repo.find_by_email.return_value = None
        mock_repo.save.return_value = False

        result = await service.register("alice@example.com", "NewPass123", "Alice")

        assert result.error.code is ErrorCode.EMAIL_ALREADY_EXISTS

    async def test_verify_email_activates_pending_account(self, service, mock_repo):
        account = create_account(status=AccountStatus.PENDING_VERIFICATION)
        mock_repo.find_by_id.return_value = account
        mock_repo.update.return_value = replace(
            account, status=AccountStatus.ACTIVE, email_verified_at=datetime.now(UTC)
        )

        result = await service.verify_email(account.id)

        assert result.value.status is AccountStatus.ACTIVE
        _, kwargs = mock_repo.update.call_args
        assert kwargs["status"] is AccountStatus.ACTIVE

    async def test_verify_email_keeps_suspended_status(self, service, mock_repo):
        account = create_account(status=AccountStatus.SUSPENDED)
        mock_repo.find_by_id.return_value = account
        mock_repo.update.return_value = replace(
            account, email_verified_at=datetime.now(UTC)
        )

        await service.verify_email(account.id)

        _, kwargs = mock_repo.update.call_args
        assert kwargs["status"] is AccountStatus.SUSPENDED

    async def test_verify_email_is_idempotent(self, service, mock_repo):
        account = replace(create_account(), email_verified_at=datetime.now(UTC))
        mock_repo.find_by_id.return_value = account

        result = await service.verify_email(account.id)

        assert isinstance(result, Success)
        mock_repo.update.assert_not_awaited()

    async def test_unlock_clears_counters(self, service, mock_repo):
        account = create_account()
        mock_repo.update.return_value = account

        result = await service.unlock(account.id)

        assert isinstance(result, Success)
        mock_repo.update.assert_awaited_once_with(
            account.id, failed_login_attempts=0, locked_until=None
        )
