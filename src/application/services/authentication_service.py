"""Authentication service.

Orchestrates the credential store, lockout policy, password hasher and
token service into the account authentication flows.

Login state machine:
    LookupAccount -> (not found: dummy bcrypt check, INVALID_CREDENTIALS)
    CheckLock -> (locked: ACCOUNT_LOCKED; expired: clear counters, continue)
    VerifyPassword -> (mismatch: count failure, INVALID_CREDENTIALS)
    CheckStatus -> (not active: ACCOUNT_INACTIVE)
    IssueTokens -> Success(LoginResult)

Every expected failure is returned as ``Failure(AuthError)``. Exceptions
from the store or the hashing backend propagate unchanged.

Tokens are stateless: ``logout`` only records ``last_logout_at``. Access
and refresh tokens already issued stay valid until they expire, and the
refresh token is not rotated on use.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, policies)
- NO infrastructure imports (adapters are injected via protocols)
"""

import asyncio
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos.auth_dtos import (
    AccountView,
    ForgotPasswordResult,
    LoginResult,
    RefreshResult,
)
from src.core.result import Failure, Result, Success
from src.domain.entities.account import Account
from src.domain.enums import AccountRole, AccountStatus, TokenPurpose
from src.domain.errors import AuthError
from src.domain.policies import Allowed, LockExpired, Locked, LockoutPolicy
from src.domain.protocols import (
    AccountRepository,
    LoggerProtocol,
    PasswordHashingProtocol,
    PasswordResetDeliveryProtocol,
    TokenClaims,
    TokenServiceProtocol,
)
from src.domain.value_objects.email import normalize_email


class AuthenticationService:
    """Account authentication and session token lifecycle.

    The only writer of lockout counters, login timestamps and password
    hashes. All writes go through the repository's atomic operations.

    Usage:
        service = AuthenticationService(
            account_repository=repo,
            password_service=BcryptPasswordService(cost_factor=12),
            token_service=JWTService(auth_config),
            lockout_policy=LockoutPolicy(threshold=5, cooldown=timedelta(minutes=30)),
            reset_delivery=StubEmailService(logger, reset_url_base),
            logger=logger,
        )

        match await service.login("alice@example.com", "NewPass123"):
            case Success(value=result):
                ...
            case Failure(error=AuthError(code=ErrorCode.ACCOUNT_LOCKED) as error):
                ...
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenServiceProtocol,
        lockout_policy: LockoutPolicy,
        reset_delivery: PasswordResetDeliveryProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._accounts = account_repository
        self._passwords = password_service
        self._tokens = token_service
        self._lockout = lockout_policy
        self._reset_delivery = reset_delivery
        self._logger = logger.bind(service="authentication")

    # =========================================================================
    # Session flows
    # =========================================================================

    async def login(self, email: str, password: str) -> Result[LoginResult, AuthError]:
        """Authenticate with email and password.

        Args:
            email: Email as typed by the user (normalized here).
            password: Plaintext password.

        Returns:
            Success(LoginResult) with public account view and both tokens.
            Failure(AuthError):
                - INVALID_CREDENTIALS: unknown email or wrong password
                - ACCOUNT_LOCKED: lockout window active (password not checked)
                - ACCOUNT_INACTIVE: password correct, status not ACTIVE
        """
        now = datetime.now(UTC)
        account = await self._accounts.find_by_email(normalize_email(email))
        if account is None:
            await asyncio.to_thread(self._passwords.verify_dummy, password)
            self._logger.info("Login failed", reason="unknown_email")
            return Failure(error=AuthError.invalid_credentials())

        match await self._check_lock(account, now):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=account):
                pass

        password_matches = await asyncio.to_thread(
            self._passwords.verify_password, password, account.password_hash
        )
        if not password_matches:
            await self._record_failure(account, now)
            return Failure(error=AuthError.invalid_credentials())

        if not account.is_active:
            self._logger.info(
                "Login refused for inactive account",
                account_id=str(account.id),
                status=account.status.value,
            )
            return Failure(error=AuthError.account_inactive())

        counters = self._lockout.on_success(now)
        updated = await self._accounts.update(
            account.id,
            failed_login_attempts=counters.failed_login_attempts,
            locked_until=counters.locked_until,
            last_login_at=counters.last_login_at,
        )
        if updated is None:
            return Failure(error=AuthError.invalid_credentials())

        self._logger.info("Login succeeded", account_id=str(updated.id))
        return Success(
            value=LoginResult(
                account=AccountView.from_account(updated),
                access_token=self._tokens.issue_access_token(updated),
                refresh_token=self._tokens.issue_refresh_token(updated),
                expires_in=self._tokens.access_token_ttl_seconds,
            )
        )

    async def refresh(self, refresh_token: str) -> Result[RefreshResult, AuthError]:
        """Mint a new access token from a refresh token.

        The refresh token is not rotated.

        Returns:
            Success(RefreshResult) with a new access token.
            Failure(AuthError):
                - INVALID_OR_EXPIRED_TOKEN: bad, expired or wrong-purpose token
                - ACCOUNT_NOT_FOUND: account no longer exists
                - ACCOUNT_INACTIVE: account is no longer ACTIVE
        """
        match self._tokens.verify(refresh_token, TokenPurpose.REFRESH):
            case Failure(error=error):
                self._log_token_rejected("refresh", error)
                return Failure(error=error)
            case Success(value=claims):
                pass

        account = await self._accounts.find_by_id(claims.account_id)
        if account is None:
            return Failure(error=AuthError.account_not_found())
        if not account.is_active:
            return Failure(error=AuthError.account_inactive())

        self._logger.info("Access token refreshed", account_id=str(account.id))
        return Success(
            value=RefreshResult(
                access_token=self._tokens.issue_access_token(account),
                expires_in=self._tokens.access_token_ttl_seconds,
            )
        )

    async def logout(self, account_id: UUID) -> Result[None, AuthError]:
        """Record a logout.

        Bookkeeping only: tokens are stateless, so tokens issued before the
        logout remain valid until they expire.

        Returns:
            Success(None), or Failure(ACCOUNT_NOT_FOUND).
        """
        updated = await self._accounts.update(
            account_id, last_logout_at=datetime.now(UTC)
        )
        if updated is None:
            return Failure(error=AuthError.account_not_found())

        self._logger.info("Logout recorded", account_id=str(account_id))
        return Success(value=None)

    async def authenticate_access_token(
        self, access_token: str
    ) -> Result[TokenClaims, AuthError]:
        """Verify a bearer access token and the account behind it.

        The account is loaded on every call, so suspending or deleting it
        takes effect before the token expires. Email and role in the
        returned claims come from the stored account, not the token.

        Returns:
            Success(TokenClaims).
            Failure(AuthError):
                - INVALID_OR_EXPIRED_TOKEN: bad, expired or wrong-purpose token
                - ACCOUNT_NOT_FOUND: account no longer exists
                - ACCOUNT_INACTIVE: account is no longer ACTIVE
        """
        match self._tokens.verify(access_token, TokenPurpose.ACCESS):
            case Failure(error=error):
                self._log_token_rejected("access", error)
                return Failure(error=error)
            case Success(value=claims):
                pass

        account = await self._accounts.find_by_id(claims.account_id)
        if account is None:
            return Failure(error=AuthError.account_not_found())
        if not account.is_active:
            self._logger.info(
                "Access token refused for inactive account",
                account_id=str(account.id),
                status=account.status.value,
            )
            return Failure(error=AuthError.account_inactive())

        return Success(value=replace(claims, email=account.email, role=account.role))

    # =========================================================================
    # Password recovery
    # =========================================================================

    async def forgot_password(
        self, email: str
    ) -> Result[ForgotPasswordResult, AuthError]:
        """Send a password reset link if the account exists.

        Always returns the identical Success, whether the email is known,
        unknown, or delivery failed.
        """
        account = await self._accounts.find_by_email(normalize_email(email))
        if account is None:
            self._logger.info("Password reset requested", account_found=False)
            return Success(value=ForgotPasswordResult())

        reset_token = self._tokens.issue_password_reset_token(account.id)
        try:
            await self._reset_delivery.deliver_reset_link(account.email, reset_token)
        except Exception as error:
            self._logger.error(
                "Password reset delivery failed",
                error=error,
                account_id=str(account.id),
            )
        else:
            self._logger.info(
                "Password reset requested",
                account_found=True,
                account_id=str(account.id),
            )

        return Success(value=ForgotPasswordResult())

    async def reset_password(
        self, reset_token: str, new_password: str
    ) -> Result[None, AuthError]:
        """Set a new password using a password reset token.

        Lockout bookkeeping is left untouched; use ``unlock`` for that.

        Returns:
            Success(None).
            Failure(AuthError):
                - INVALID_OR_EXPIRED_TOKEN: bad, expired or wrong-purpose token
                - ACCOUNT_NOT_FOUND: account no longer exists
        """
        match self._tokens.verify(reset_token, TokenPurpose.PASSWORD_RESET):
            case Failure(error=error):
                self._log_token_rejected("password_reset", error)
                return Failure(error=error)
            case Success(value=claims):
                pass

        account = await self._accounts.find_by_id(claims.account_id)
        if account is None:
            return Failure(error=AuthError.account_not_found())

        return await self._store_new_password(account.id, new_password, "reset")

    async def change_password(
        self,
        account_id: UUID,
        current_password: str,
        new_password: str,
    ) -> Result[None, AuthError]:
        """Change the password of an authenticated account.

        A wrong current password returns INVALID_CREDENTIALS and is not
        counted towards lockout.
        """
        account = await self._accounts.find_by_id(account_id)
        if account is None:
            return Failure(error=AuthError.account_not_found())

        current_matches = await asyncio.to_thread(
            self._passwords.verify_password, current_password, account.password_hash
        )
        if not current_matches:
            self._logger.warning(
                "Password change rejected", account_id=str(account_id)
            )
            return Failure(error=AuthError.invalid_credentials())

        return await self._store_new_password(account.id, new_password, "change")

    # =========================================================================
    # Account lifecycle
    # =========================================================================

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        role: AccountRole = AccountRole.USER,
    ) -> Result[AccountView, AuthError]:
        """Create an account in PENDING_VERIFICATION.

        The password is hashed before the account is stored.

        Returns:
            Success(AccountView), or Failure(EMAIL_ALREADY_EXISTS).
        """
        normalized = normalize_email(email)
        if await self._accounts.find_by_email(normalized) is not None:
            return Failure(error=AuthError.email_already_exists())

        password_hash = await asyncio.to_thread(
            self._passwords.hash_password, password
        )
        now = datetime.now(UTC)
        account = Account(
            id=uuid7(),
            email=normalized,
            password_hash=password_hash,
            name=name.strip(),
            role=role,
            status=AccountStatus.PENDING_VERIFICATION,
            created_at=now,
            updated_at=now,
        )
        if not await self._accounts.save(account):
            return Failure(error=AuthError.email_already_exists())

        self._logger.info(
            "Account registered", account_id=str(account.id), role=role.value
        )
        return Success(value=AccountView.from_account(account))

    async def verify_email(self, account_id: UUID) -> Result[AccountView, AuthError]:
        """Mark the email verified and activate a pending account.

        Idempotent: an already verified account is returned unchanged.
        Inactive or suspended accounts keep their status.
        """
        account = await self._accounts.find_by_id(account_id)
        if account is None:
            return Failure(error=AuthError.account_not_found())
        if account.is_email_verified:
            return Success(value=AccountView.from_account(account))

        status = account.status
        if status is AccountStatus.PENDING_VERIFICATION:
            status = AccountStatus.ACTIVE

        updated = await self._accounts.update(
            account_id,
            email_verified_at=datetime.now(UTC),
            status=status,
        )
        if updated is None:
            return Failure(error=AuthError.account_not_found())

        self._logger.info(
            "Email verified", account_id=str(account_id), status=status.value
        )
        return Success(value=AccountView.from_account(updated))

    async def unlock(self, account_id: UUID) -> Result[AccountView, AuthError]:
        """Clear lockout bookkeeping explicitly (administrative)."""
        updated = await self._accounts.update(
            account_id, failed_login_attempts=0, locked_until=None
        )
        if updated is None:
            return Failure(error=AuthError.account_not_found())

        self._logger.info("Account unlocked", account_id=str(account_id))
        return Success(value=AccountView.from_account(updated))

    async def get_profile(self, account_id: UUID) -> Result[AccountView, AuthError]:
        account = await self._accounts.find_by_id(account_id)
        if account is None:
            return Failure(error=AuthError.account_not_found())
        return Success(value=AccountView.from_account(account))

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _check_lock(
        self, account: Account, now: datetime
    ) -> Result[Account, AuthError]:
        """Evaluate the lock, clearing an expired one in the same step.

        When the compare-and-swap loses to a concurrent write, the account is
        re-read and evaluated again, so an expiry is never applied twice.
        """
        while True:
            match self._lockout.evaluate(account, now):
                case Allowed():
                    return Success(value=account)
                case Locked(until=until):
                    self._logger.info(
                        "Login refused for locked account",
                        account_id=str(account.id),
                        locked_until=until.isoformat(),
                    )
                    return Failure(error=AuthError.account_locked(until))
                case LockExpired(observed_version=version):
                    cleared = await self._accounts.clear_expired_lock(
                        account.id, version
                    )
                    if cleared is not None:
                        self._logger.info(
                            "Expired lock cleared", account_id=str(account.id)
                        )
                        return Success(value=cleared)

                    current = await self._accounts.find_by_id(account.id)
                    if current is None:
                        return Failure(error=AuthError.invalid_credentials())
                    account = current

    async def _record_failure(self, account: Account, now: datetime) -> None:
        # Only unlocked, active accounts accumulate failures.
        if not account.is_active:
            self._logger.info(
                "Login failed for inactive account", account_id=str(account.id)
            )
            return

        updated = await self._accounts.record_failed_login(
            account.id,
            self._lockout.threshold,
            self._lockout.lock_expiry(now),
            now,
        )
        if updated is None:
            return

        if updated.locked_until is not None:
            self._logger.warning(
                "Account locked after failed logins",
                account_id=str(account.id),
                failed_login_attempts=updated.failed_login_attempts,
                locked_until=updated.locked_until.isoformat(),
            )
        else:
            self._logger.info(
                "Login failed",
                reason="wrong_password",
                account_id=str(account.id),
                failed_login_attempts=updated.failed_login_attempts,
            )

    async def _store_new_password(
        self, account_id: UUID, new_password: str, flow: str
    ) -> Result[None, AuthError]:
        password_hash = await asyncio.to_thread(
            self._passwords.hash_password, new_password
        )
        updated = await self._accounts.update(account_id, password_hash=password_hash)
        if updated is None:
            return Failure(error=AuthError.account_not_found())

        self._logger.info("Password updated", account_id=str(account_id), flow=flow)
        return Success(value=None)

    def _log_token_rejected(self, purpose: str, error: AuthError) -> None:
        self._logger.info(
            "Token rejected",
            expected_purpose=purpose,
            reason=error.reason.value if error.reason else None,
        )
