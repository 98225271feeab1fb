"""create_accounts_table

Revision ID: 7c3e1a9d2f40
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c3e1a9d2f40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts table."""
    op.create_table(
        "accounts",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        # Identity and credentials
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="Account email address (unique, lowercase)",
        ),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Bcrypt hashed password",
        ),
        sa.Column(
            "name",
            sa.String(length=100),
            nullable=False,
            comment="Display name",
        ),
        sa.Column(
            "role",
            sa.String(length=20),
            nullable=False,
            comment="Account role (user, moderator, admin)",
        ),
        sa.Column(
            "status",
            sa.String(length=30),
            nullable=False,
            comment="Lifecycle status (only 'active' can login)",
        ),
        # Lockout bookkeeping
        sa.Column(
            "failed_login_attempts",
            sa.Integer(),
            nullable=False,
            comment="Consecutive failed login attempts (resets on success or lock expiry)",
        ),
        sa.Column(
            "locked_until",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Timestamp until which account is locked",
        ),
        sa.Column(
            "last_login_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Last successful login",
        ),
        sa.Column(
            "last_logout_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Last logout (bookkeeping only, tokens stay valid until expiry)",
        ),
        sa.Column(
            "email_verified_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Email verification timestamp",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Row version, incremented on every update",
        ),
        # Constraints
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        op.f("ix_accounts_email"),
        "accounts",
        ["email"],
        unique=True,
    )
    op.create_index(
        op.f("ix_accounts_status"),
        "accounts",
        ["status"],
        unique=False,
    )


def downgrade() -> None:
    """Drop accounts table."""
    op.drop_index(op.f("ix_accounts_status"), table_name="accounts")
    op.drop_index(op.f("ix_accounts_email"), table_name="accounts")
    op.drop_table("accounts")
