"""Account database model for authentication.

This module defines the Account model storing credentials and lockout state.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - status: only "active" accounts can login
    - failed_login_attempts: Track for account lockout
    - locked_until: Temporary account lockout after failed attempts

Concurrency:
    - version: incremented by every UPDATE; compare-and-swap key for
      clearing expired locks
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Account(BaseMutableModel):
    """Account model for authentication and account management.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Timestamp when account registered (from BaseMutableModel)
        updated_at: Timestamp when account last updated (from BaseMutableModel)
        email: Unique email address (lowercase, indexed)
        password_hash: Bcrypt hashed password (NEVER plaintext)
        name: Display name
        role: user, moderator or admin
        status: pending_verification, active, inactive or suspended
        failed_login_attempts: Consecutive failed logins (resets on success)
        locked_until: Timestamp until which account is locked (nullable)
        last_login_at: Last successful login (nullable)
        last_logout_at: Last logout (nullable)
        email_verified_at: Email verification timestamp (nullable)
        version: Row version for optimistic concurrency

    Indexes:
        - ix_accounts_email: (email) unique, for login queries
        - ix_accounts_status: (status) for filtering
    """

    __tablename__ = "accounts"

    # Email address (unique, indexed for login queries)
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Account email address (unique, lowercase)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Display name",
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="user",
        comment="Account role (user, moderator, admin)",
    )

    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="pending_verification",
        index=True,
        comment="Lifecycle status (only 'active' can login)",
    )

    # Failed login tracking (for account lockout)
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Consecutive failed login attempts (resets on success or lock expiry)",
    )

    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Timestamp until which account is locked",
    )

    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Last successful login",
    )

    last_logout_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Last logout (bookkeeping only, tokens stay valid until expiry)",
    )

    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Email verification timestamp",
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Row version, incremented on every update",
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Human-readable representation of account.
        """
        return (
            f"<Account("
            f"id={self.id}, "
            f"email={self.email!r}, "
            f"status={self.status!r}, "
            f"failed_login_attempts={self.failed_login_attempts}"
            f")>"
        )
