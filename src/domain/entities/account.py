"""Account domain entity for authentication.

Pure business data, no framework dependencies.

An Account is a snapshot of the durable credential record. The entity is
never mutated in place by the authentication flows: every change
(lockout counters, login timestamps, password hash, status) is applied by
an atomic repository operation, which returns a fresh snapshot.

Lockout:
    - failed_login_attempts: consecutive failures since the last success
    - locked_until: refuse logins until this instant (None = not locked)
    - Decisions live in ``src.domain.policies.lockout_policy``

Concurrency:
    - version: row version, incremented by every write; used for
      compare-and-swap when clearing an expired lock
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.enums import AccountRole, AccountStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class Account:
    """Account domain entity.

    Business Rules:
        - Only ACTIVE accounts authenticate
        - Email is stored lowercase (see ``normalize_email``)
        - password_hash is never plaintext and never leaves the service layer
        - failed_login_attempts is never decremented except to 0

    Attributes:
        id: Unique account identifier (immutable).
        email: Normalized, unique email address.
        password_hash: bcrypt hash (never plaintext).
        name: Display name.
        role: Authorization role carried in tokens.
        status: Lifecycle status.
        failed_login_attempts: Consecutive failed logins.
        locked_until: End of the current lock window, if any.
        last_login_at: Timestamp of the last successful login.
        last_logout_at: Timestamp of the last logout (bookkeeping only).
        email_verified_at: Timestamp of email verification.
        version: Row version for optimistic concurrency.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.

    Example:
        >>> account = Account(
        ...     id=uuid7(),
        ...     email="alice@example.com",
        ...     password_hash="$2b$12$...",
        ...     name="Alice",
        ...     role=AccountRole.USER,
        ...     status=AccountStatus.ACTIVE,
        ...     created_at=datetime.now(UTC),
        ...     updated_at=datetime.now(UTC),
        ... )
        >>> account.is_active
        True
    """

    id: UUID
    email: str
    password_hash: str
    name: str
    role: AccountRole
    status: AccountStatus
    created_at: datetime
    updated_at: datetime
    failed_login_attempts: int = 0
    locked_until: datetime | None = None
    last_login_at: datetime | None = None
    last_logout_at: datetime | None = None
    email_verified_at: datetime | None = None
    version: int = 1

    @property
    def is_active(self) -> bool:
        """Check whether the account may authenticate.

        Returns:
            bool: True if status is ACTIVE.
        """
        return self.status.can_authenticate()

    @property
    def is_email_verified(self) -> bool:
        """Check whether the email address has been verified.

        Returns:
            bool: True if email_verified_at is set.
        """
        return self.email_verified_at is not None
