"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating bearer access tokens.
Use these dependencies to protect routes that require authentication.

Usage:
    # Protected route (requires auth)
    @router.get("/protected")
    async def protected_route(
        current_account: CurrentAccount = Depends(get_current_account),
    ):
        return {"account_id": str(current_account.account_id)}

    # Admin-only route
    @router.post("/admin-only")
    async def admin_route(
        current_account: CurrentAccount = Depends(require_admin),
    ): ...
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.services.authentication_service import AuthenticationService
from src.core.container import get_authentication_service
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import AccountRole
from src.domain.errors import AuthError
from src.domain.protocols import TokenClaims

# auto_error=True returns 401 if no token provided
bearer_scheme = HTTPBearer(auto_error=True)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentAccount:
    """Active account behind a verified access token.

    Attributes:
        account_id: Account identifier (from the 'sub' claim).
        email: Email address as currently stored.
        role: Account role as currently stored.
        token_id: JWT unique identifier (from the 'jti' claim).
    """

    account_id: UUID
    email: str
    role: AccountRole
    token_id: str


async def get_current_account(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> CurrentAccount:
    """Get current authenticated account from the access token.

    Args:
        credentials: Bearer token from Authorization header.
        service: Authentication service (injected).

    Returns:
        CurrentAccount with identity from a valid access token.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired or was
            issued for another purpose, or its account no longer exists.
        HTTPException 403: If the account is no longer active.
    """
    result = await service.authenticate_access_token(credentials.credentials)

    match result:
        case Success(
            value=TokenClaims(email=str() as email, role=AccountRole() as role) as claims
        ):
            return CurrentAccount(
                account_id=claims.account_id,
                email=email,
                role=role,
                token_id=claims.token_id,
            )
        case Failure(error=AuthError(code=ErrorCode.ACCOUNT_INACTIVE) as error):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=error.message,
            )
        case Failure(error=error):
            raise _unauthorized(error.message)
        case _:
            raise _unauthorized("Access token is missing account claims")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_admin(
    current_account: Annotated[CurrentAccount, Depends(get_current_account)],
) -> CurrentAccount:
    """Require the ADMIN role.

    Raises:
        HTTPException 403: If the caller is not an admin.
    """
    if current_account.role is not AccountRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return current_account
