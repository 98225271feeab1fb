"""AccountRepository - SQLAlchemy implementation of AccountRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Account entities and database AccountModel.

Every mutation is one UPDATE ... RETURNING statement committed on its own,
so lockout counters are never read-modified-written in Python:

    UPDATE accounts
       SET failed_login_attempts = failed_login_attempts + 1,
           locked_until = CASE WHEN failed_login_attempts + 1 >= :threshold
                               THEN :locked_until ELSE locked_until END,
           version = version + 1
     WHERE id = :id AND failed_login_attempts < :threshold
 RETURNING *
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.account import Account
from src.domain.enums import AccountRole, AccountStatus
from src.infrastructure.persistence.models.account import Account as AccountModel

UPDATABLE_FIELDS = frozenset(
    {
        "email",
        "password_hash",
        "name",
        "role",
        "status",
        "failed_login_attempts",
        "locked_until",
        "last_login_at",
        "last_logout_at",
        "email_verified_at",
    }
)


class AccountRepository:
    """SQLAlchemy implementation of AccountRepository protocol.

    This class does NOT inherit from AccountRepository protocol (Protocol uses
    structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = AccountRepository(session)
        ...     account = await repo.find_by_email("alice@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, account_id: UUID) -> Account | None:
        """Find account by ID.

        Args:
            account_id: Account's unique identifier.

        Returns:
            Domain Account entity if found, None otherwise.
        """
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        account_model = result.scalar_one_or_none()

        if account_model is None:
            return None

        return self._to_domain(account_model)

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by normalized email address.

        Emails are stored normalized, so this is an exact match.

        Args:
            email: Normalized email address.

        Returns:
            Domain Account entity if found, None otherwise.
        """
        stmt = (
            select(AccountModel)
            .where(AccountModel.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        account_model = result.scalar_one_or_none()

        if account_model is None:
            return None

        return self._to_domain(account_model)

    async def save(self, account: Account) -> bool:
        """Create new account in database.

        Args:
            account: Domain Account entity to persist (hash already set).

        Returns:
            True if created, False if the email already exists.
        """
        account_model = self._to_model(account)
        self.session.add(account_model)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True

    async def update(self, account_id: UUID, **fields: Any) -> Account | None:
        """Apply a partial update in a single statement.

        Args:
            account_id: Account to update.
            **fields: Attributes to overwrite (see UPDATABLE_FIELDS).

        Returns:
            Updated account, or None if it does not exist.

        Raises:
            ValueError: If a field is unknown or not updatable.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update account fields: {sorted(unknown)}")

        values = {
            name: value.value if isinstance(value, Enum) else value
            for name, value in fields.items()
        }
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(**values, version=AccountModel.version + 1)
            .returning(AccountModel)
        )
        return await self._execute_returning(stmt)

    async def record_failed_login(
        self,
        account_id: UUID,
        threshold: int,
        locked_until: datetime,
        now: datetime,
    ) -> Account | None:
        """Atomically count one failed login.

        One UPDATE guarded on the lock, so concurrent failures never lose an
        increment and a locked row is left alone.

        Args:
            account_id: Account that failed authentication.
            threshold: Lockout threshold.
            locked_until: Lock expiry applied when the threshold is reached.
            now: Failure instant.

        Returns:
            Account after the update. If the account is locked at ``now``
            the row is unchanged and returned as is. None if the account
            does not exist.
        """
        attempts = AccountModel.failed_login_attempts + 1
        stmt = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                or_(
                    AccountModel.locked_until.is_(None),
                    AccountModel.locked_until <= now,
                ),
            )
            .values(
                failed_login_attempts=func.least(attempts, threshold),
                locked_until=case(
                    (attempts >= threshold, locked_until),
                    else_=AccountModel.locked_until,
                ),
                version=AccountModel.version + 1,
            )
            .returning(AccountModel)
        )
        account = await self._execute_returning(stmt)
        if account is None:
            return await self.find_by_id(account_id)
        return account

    async def clear_expired_lock(
        self,
        account_id: UUID,
        expected_version: int,
    ) -> Account | None:
        """Compare-and-swap reset of an expired lock.

        Args:
            account_id: Account whose lock expired.
            expected_version: Version the expiry was evaluated against.

        Returns:
            Updated account, or None if another write got there first.
        """
        stmt = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.version == expected_version,
            )
            .values(
                failed_login_attempts=0,
                locked_until=None,
                version=AccountModel.version + 1,
            )
            .returning(AccountModel)
        )
        return await self._execute_returning(stmt)

    async def _execute_returning(self, stmt: Any) -> Account | None:
        result = await self.session.execute(
            stmt, execution_options={"populate_existing": True}
        )
        account_model = result.scalar_one_or_none()
        await self.session.commit()

        if account_model is None:
            return None

        return self._to_domain(account_model)

    def _to_domain(self, account_model: AccountModel) -> Account:
        """Convert database model to domain entity.

        Args:
            account_model: SQLAlchemy AccountModel instance.

        Returns:
            Domain Account entity.
        """
        return Account(
            id=account_model.id,
            email=account_model.email,
            password_hash=account_model.password_hash,
            name=account_model.name,
            role=AccountRole(account_model.role),
            status=AccountStatus(account_model.status),
            failed_login_attempts=account_model.failed_login_attempts,
            locked_until=account_model.locked_until,
            last_login_at=account_model.last_login_at,
            last_logout_at=account_model.last_logout_at,
            email_verified_at=account_model.email_verified_at,
            version=account_model.version,
            created_at=account_model.created_at,
            updated_at=account_model.updated_at,
        )

    def _to_model(self, account: Account) -> AccountModel:
        """Convert domain entity to database model.

        Args:
            account: Domain Account entity.

        Returns:
            SQLAlchemy AccountModel instance.
        """
        return AccountModel(
            id=account.id,
            email=account.email,
            password_hash=account.password_hash,
            name=account.name,
            role=account.role.value,
            status=account.status.value,
            failed_login_attempts=account.failed_login_attempts,
            locked_until=account.locked_until,
            last_login_at=account.last_login_at,
            last_logout_at=account.last_logout_at,
            email_verified_at=account.email_verified_at,
            version=account.version,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
