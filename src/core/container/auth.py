"""Authentication service dependency factory.

Request-scoped AuthenticationService wired with:
- AccountRepository (request-scoped, uses session)
- BcryptPasswordService, JWTService, LockoutPolicy (app-scoped singletons)
- StubEmailService delivery and structlog logger (app-scoped singletons)
"""

from fastapi import Depends

from src.application.services.authentication_service import AuthenticationService
from src.core.container.infrastructure import (
    get_lockout_policy,
    get_logger,
    get_password_service,
    get_reset_delivery,
    get_token_service,
)
from src.core.container.repositories import get_account_repository
from src.domain.protocols import AccountRepository


async def get_authentication_service(
    account_repository: AccountRepository = Depends(get_account_repository),
) -> AuthenticationService:
    """Get AuthenticationService (request-scoped).

    Usage:
        @router.post("/login")
        async def login(
            service: AuthenticationService = Depends(get_authentication_service),
        ):
            result = await service.login(data.email, data.password)
    """
    return AuthenticationService(
        account_repository=account_repository,
        password_service=get_password_service(),
        token_service=get_token_service(),
        lockout_policy=get_lockout_policy(),
        reset_delivery=get_reset_delivery(),
        logger=get_logger(),
    )
