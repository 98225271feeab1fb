"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Authentication configuration (explicit AuthConfig object)
- Database (PostgreSQL)
- Password hashing (bcrypt)
- Session tokens (JWT)
- Lockout policy
- Password reset delivery (stub email)
- Logging (structlog console)

Settings are read once per process here and handed to constructors; no
component reads settings on its own.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import AuthConfig, get_settings
from src.core.enums import Environment
from src.domain.policies import LockoutPolicy
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols import (
        LoggerProtocol,
        PasswordHashingProtocol,
        PasswordResetDeliveryProtocol,
        TokenServiceProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_auth_config() -> AuthConfig:
    """Get the authentication configuration (app-scoped).

    Returns:
        AuthConfig built once from settings.
    """
    return AuthConfig.from_settings(get_settings())


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns:
        BcryptPasswordService with the configured cost factor.
    """
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=get_auth_config().bcrypt_rounds)


@lru_cache()
def get_token_service() -> "TokenServiceProtocol":
    """Get JWT token service singleton (app-scoped).

    Returns:
        JWTService with one signing secret per token purpose.
    """
    from src.infrastructure.security import JWTService

    return JWTService(get_auth_config())


@lru_cache()
def get_lockout_policy() -> LockoutPolicy:
    """Get lockout policy singleton (app-scoped)."""
    config = get_auth_config()
    return LockoutPolicy(
        threshold=config.lockout_threshold,
        cooldown=config.lockout_cooldown,
    )


# ============================================================================
# Email Service (Application-Scoped)
# ============================================================================


@lru_cache()
def get_reset_delivery() -> "PasswordResetDeliveryProtocol":
    """Get password reset delivery singleton (app-scoped).

    All environments use StubEmailService (logs the link) until a mail
    provider adapter exists.
    """
    from src.infrastructure.email import StubEmailService

    return StubEmailService(
        logger=get_logger(),
        reset_url_base=get_auth_config().password_reset_url_base,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Yields:
        Database session for request duration.

    Usage:
        @router.post("/auth/login")
        async def login(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
