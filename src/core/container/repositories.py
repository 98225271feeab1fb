"""Repository dependency factories.

Request-scoped repository instances. Each request gets a fresh repository
bound to its own session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session
from src.infrastructure.persistence.repositories import AccountRepository


async def get_account_repository(
    session: AsyncSession = Depends(get_db_session),
) -> AccountRepository:
    """Get account repository (request-scoped).

    Args:
        session: Database session for request duration.
            Injected via Depends(get_db_session).

    Returns:
        AccountRepository instance.
    """
    return AccountRepository(session=session)
