"""Authentication router.

Endpoints:
    POST /api/v1/auth/register                    - Create account (pending verification)
    POST /api/v1/auth/login                       - Exchange credentials for tokens
    POST /api/v1/auth/refresh-token               - Exchange refresh token for access token
    POST /api/v1/auth/logout                      - Record logout (tokens stay valid)
    POST /api/v1/auth/forgot-password             - Request password reset link
    POST /api/v1/auth/reset-password              - Set password with reset token
    POST /api/v1/auth/change-password             - Change password (authenticated)
    GET  /api/v1/auth/profile                     - Current account profile
    POST /api/v1/auth/verify-email/{account_id}   - Mark email verified (admin)
    POST /api/v1/auth/unlock/{account_id}         - Clear lockout (admin)

Every handler matches on the service Result: Success maps to the response
schema, Failure(AuthError) maps to an RFC 7807 response via
ErrorResponseBuilder.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.services.authentication_service import AuthenticationService
from src.core.container import get_authentication_service
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentAccount,
    get_current_account,
    require_admin,
)
from src.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from src.schemas.auth_schemas import (
    AccountResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
    RegisterRequest,
    ResetPasswordRequest,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

Service = Annotated[AuthenticationService, Depends(get_authentication_service)]

_AUTH_ERRORS: dict[int | str, dict] = {
    401: {"model": ProblemDetails, "description": "Invalid credentials or token"},
    403: {"model": ProblemDetails, "description": "Account not active"},
    423: {"model": ProblemDetails, "description": "Account temporarily locked"},
}


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AccountResponse,
    responses={409: {"model": ProblemDetails, "description": "Email already exists"}},
    summary="Register account",
)
async def register(
    request: Request,
    data: RegisterRequest,
    service: Service,
) -> AccountResponse | JSONResponse:
    """Create an account awaiting email verification."""
    result = await service.register(data.email, data.password, data.name)

    match result:
        case Success(value=view):
            return AccountResponse.from_view(view)
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses=_AUTH_ERRORS,
    summary="Login",
)
async def login(
    request: Request,
    data: LoginRequest,
    service: Service,
) -> LoginResponse | JSONResponse:
    """Authenticate with email and password.

    Returns access and refresh tokens. Repeated failures lock the account
    for a cooldown period (423 with Retry-After).
    """
    result = await service.login(data.email, data.password)

    match result:
        case Success(value=login_result):
            return LoginResponse(
                account=AccountResponse.from_view(login_result.account),
                access_token=login_result.access_token,
                refresh_token=login_result.refresh_token,
                token_type=login_result.token_type,
                expires_in=login_result.expires_in,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/refresh-token",
    response_model=RefreshTokenResponse,
    responses=_AUTH_ERRORS,
    summary="Refresh access token",
)
async def refresh_token(
    request: Request,
    data: RefreshTokenRequest,
    service: Service,
) -> RefreshTokenResponse | JSONResponse:
    """Issue a new access token. The refresh token itself is not rotated."""
    result = await service.refresh(data.refresh_token)

    match result:
        case Success(value=refreshed):
            return RefreshTokenResponse(
                access_token=refreshed.access_token,
                token_type=refreshed.token_type,
                expires_in=refreshed.expires_in,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout",
)
async def logout(
    request: Request,
    current_account: Annotated[CurrentAccount, Depends(get_current_account)],
    service: Service,
) -> MessageResponse | JSONResponse:
    """Record the logout time.

    Issued tokens are not revoked; clients must discard them.
    """
    result = await service.logout(current_account.account_id)

    match result:
        case Success():
            return MessageResponse(message="Logged out")
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Request password reset",
    description="Always returns the same response so account existence is not revealed.",
)
async def forgot_password(
    request: Request,
    data: ForgotPasswordRequest,
    service: Service,
) -> MessageResponse | JSONResponse:
    result = await service.forgot_password(data.email)

    match result:
        case Success(value=outcome):
            return MessageResponse(message=outcome.message)
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={
        401: {"model": ProblemDetails, "description": "Invalid or expired token"},
        404: {"model": ProblemDetails, "description": "Account not found"},
    },
    summary="Reset password",
)
async def reset_password(
    request: Request,
    data: ResetPasswordRequest,
    service: Service,
) -> MessageResponse | JSONResponse:
    """Set a new password using the token from the reset link."""
    result = await service.reset_password(data.token, data.new_password)

    match result:
        case Success():
            return MessageResponse(message="Password has been reset")
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/change-password",
    response_model=MessageResponse,
    responses={401: {"model": ProblemDetails, "description": "Wrong current password"}},
    summary="Change password",
)
async def change_password(
    request: Request,
    data: ChangePasswordRequest,
    current_account: Annotated[CurrentAccount, Depends(get_current_account)],
    service: Service,
) -> MessageResponse | JSONResponse:
    result = await service.change_password(
        current_account.account_id, data.current_password, data.new_password
    )

    match result:
        case Success():
            return MessageResponse(message="Password changed")
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.get(
    "/profile",
    response_model=AccountResponse,
    responses={404: {"model": ProblemDetails, "description": "Account not found"}},
    summary="Get profile",
)
async def get_profile(
    request: Request,
    current_account: Annotated[CurrentAccount, Depends(get_current_account)],
    service: Service,
) -> AccountResponse | JSONResponse:
    result = await service.get_profile(current_account.account_id)

    match result:
        case Success(value=view):
            return AccountResponse.from_view(view)
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/verify-email/{account_id}",
    response_model=AccountResponse,
    responses={404: {"model": ProblemDetails, "description": "Account not found"}},
    summary="Verify email (admin)",
)
async def verify_email(
    request: Request,
    account_id: UUID,
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    service: Service,
) -> AccountResponse | JSONResponse:
    """Mark an account's email verified, activating a pending account."""
    result = await service.verify_email(account_id)

    match result:
        case Success(value=view):
            return AccountResponse.from_view(view)
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)


@router.post(
    "/unlock/{account_id}",
    response_model=AccountResponse,
    responses={404: {"model": ProblemDetails, "description": "Account not found"}},
    summary="Unlock account (admin)",
)
async def unlock(
    request: Request,
    account_id: UUID,
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    service: Service,
) -> AccountResponse | JSONResponse:
    result = await service.unlock(account_id)

    match result:
        case Success(value=view):
            return AccountResponse.from_view(view)
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
