"""AccountRepository protocol for credential persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.

Atomicity:
    The lockout counters are shared mutable state. Implementations MUST
    apply ``record_failed_login`` as a single atomic increment and
    ``clear_expired_lock`` as a compare-and-swap on ``version``. A
    read-then-write in two steps undercounts concurrent failures.

Only the authentication service calls the mutation methods.
"""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from src.domain.entities.account import Account


class AccountRepository(Protocol):
    """Account repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        find_by_id: Retrieve account by ID
        find_by_email: Retrieve account by normalized email
        save: Create new account
        update: Apply a partial update in one statement
        record_failed_login: Atomic failure increment with lock at threshold
        clear_expired_lock: Compare-and-swap reset of an expired lock

    Implementations:
        - AccountRepository: SQLAlchemy (PostgreSQL)
        - InMemoryAccountRepository: process-local (tests, development)
    """

    async def find_by_id(self, account_id: UUID) -> Account | None:
        """Find account by ID.

        Args:
            account_id: Account's unique identifier.

        Returns:
            Account if found, None otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by email address.

        Args:
            email: Normalized (lowercase, trimmed) email address.

        Returns:
            Account if found, None otherwise.
        """
        ...

    async def save(self, account: Account) -> bool:
        """Create new account.

        The account MUST already carry its password hash.

        Args:
            account: Account entity to persist.

        Returns:
            True if created, False if the email is already registered.
        """
        ...

    async def update(self, account_id: UUID, **fields: Any) -> Account | None:
        """Apply a partial update and bump the row version.

        Args:
            account_id: Account to update.
            **fields: Account attributes to overwrite.

        Returns:
            Updated account, or None if the account does not exist.
        """
        ...

    async def record_failed_login(
        self,
        account_id: UUID,
        threshold: int,
        locked_until: datetime,
        now: datetime,
    ) -> Account | None:
        """Atomically count one failed login.

        Applies only while the account is not locked at ``now``; a failure
        against an active lock (for example one set by a concurrent request)
        changes nothing. Otherwise ``failed_login_attempts`` goes up by one,
        capped at ``threshold``, and reaching the threshold locks the account
        until ``locked_until``. The counter is tied to the lock rather than
        to its own value, so a counter left above a lowered threshold still
        locks on the next failure.

        Args:
            account_id: Account that failed authentication.
            threshold: Lockout threshold.
            locked_until: Lock expiry to apply when the threshold is reached.
            now: Failure instant, compared against the current lock.

        Returns:
            Account after the update, or None if it does not exist.
        """
        ...

    async def clear_expired_lock(
        self,
        account_id: UUID,
        expected_version: int,
    ) -> Account | None:
        """Reset counters of an expired lock if the row is unchanged.

        Sets ``failed_login_attempts = 0`` and ``locked_until = None`` only
        when the stored version still equals ``expected_version``.

        Args:
            account_id: Account whose lock expired.
            expected_version: Version observed when the expiry was evaluated.

        Returns:
            Updated account if the swap won, None if the row changed meanwhile.
        """
        ...
