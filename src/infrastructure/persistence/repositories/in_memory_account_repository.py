"""In-memory account storage implementation.

Concrete implementation of the AccountRepository protocol using a dict
guarded by one asyncio.Lock. No external dependencies - useful for
testing and development.

Each mutation runs entirely under the lock, which gives the same
atomicity as the single-statement SQL adapter: concurrent failed logins
are each counted exactly once.

Note:
    Not suitable for production with multiple processes/servers.
    Accounts are lost on restart. Use AccountRepository for production.
"""

import asyncio
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from src.domain.entities.account import Account
from src.infrastructure.persistence.repositories.account_repository import (
    UPDATABLE_FIELDS,
)


class InMemoryAccountRepository:
    """In-memory dict storage for accounts.

    Usage:
        repo = InMemoryAccountRepository()
        await repo.save(account)
        account = await repo.find_by_email("alice@example.com")
    """

    def __init__(self) -> None:
        """Initialize in-memory storage."""
        self._accounts: dict[UUID, Account] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, account_id: UUID) -> Account | None:
        return self._accounts.get(account_id)

    async def find_by_email(self, email: str) -> Account | None:
        for account in self._accounts.values():
            if account.email == email:
                return account
        return None

    async def save(self, account: Account) -> bool:
        """Store a new account.

        Returns:
            False if the id or email is already taken.
        """
        async with self._lock:
            if account.id in self._accounts:
                return False
            if any(a.email == account.email for a in self._accounts.values()):
                return False
            self._accounts[account.id] = account
            return True

    async def update(self, account_id: UUID, **fields: Any) -> Account | None:
        """Apply a partial update and bump the version.

        Raises:
            ValueError: If a field is unknown or not updatable.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update account fields: {sorted(unknown)}")

        async with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                return None
            return self._store(current, **fields)

    async def record_failed_login(
        self,
        account_id: UUID,
        threshold: int,
        locked_until: datetime,
        now: datetime,
    ) -> Account | None:
        """Count one failed login unless locked; lock at the threshold."""
        async with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                return None
            if current.locked_until is not None and current.locked_until > now:
                return current

            attempts = current.failed_login_attempts + 1
            if attempts < threshold:
                locked_until = current.locked_until
            return self._store(
                current,
                failed_login_attempts=min(attempts, threshold),
                locked_until=locked_until,
            )

    async def clear_expired_lock(
        self,
        account_id: UUID,
        expected_version: int,
    ) -> Account | None:
        """Reset the lock only if the version still matches."""
        async with self._lock:
            current = self._accounts.get(account_id)
            if current is None or current.version != expected_version:
                return None
            return self._store(current, failed_login_attempts=0, locked_until=None)

    def _store(self, current: Account, **fields: Any) -> Account:
        updated = replace(
            current,
            **fields,
            version=current.version + 1,
            updated_at=datetime.now(UTC),
        )
        self._accounts[current.id] = updated
        return updated
