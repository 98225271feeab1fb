"""Error response builder for RFC 7807 Problem Details.

Maps authentication errors (returned by value from AuthenticationService)
onto HTTP status codes and problem details bodies.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

import math
from datetime import UTC, datetime

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.enums import ErrorCode
from src.domain.errors import AuthError
from src.presentation.routers.api.v1.errors.problem_details import ProblemDetails

# ErrorCode -> (HTTP status, title)
_AUTH_ERROR_STATUS: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Invalid Credentials"),
    ErrorCode.ACCOUNT_LOCKED: (status.HTTP_423_LOCKED, "Account Locked"),
    ErrorCode.ACCOUNT_INACTIVE: (status.HTTP_403_FORBIDDEN, "Account Inactive"),
    ErrorCode.INVALID_OR_EXPIRED_TOKEN: (
        status.HTTP_401_UNAUTHORIZED,
        "Invalid Or Expired Token",
    ),
    ErrorCode.ACCOUNT_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Account Not Found"),
    ErrorCode.EMAIL_ALREADY_EXISTS: (status.HTTP_409_CONFLICT, "Email Already Exists"),
}


def problem_type(request: Request, slug: str) -> str:
    """Problem type URI under this server's base URL."""
    return f"{str(request.base_url).rstrip('/')}/errors/{slug}"


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_auth_error(error, request)
    """

    @staticmethod
    def from_auth_error(error: AuthError, request: Request) -> JSONResponse:
        """Convert AuthError to an RFC 7807 JSON response.

        ACCOUNT_LOCKED responses carry a Retry-After header; token errors
        carry WWW-Authenticate.

        Args:
            error: Authentication error returned by the service.
            request: FastAPI Request object (for instance URL).

        Returns:
            JSONResponse with ProblemDetails content.
        """
        status_code, title = ErrorResponseBuilder.status_for(error.code)

        problem = ProblemDetails(
            type=problem_type(request, error.code.value.replace("_", "-")),
            title=title,
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            code=error.code.value,
            reason=error.reason.value if error.reason else None,
            locked_until=error.locked_until,
        )

        headers: dict[str, str] = {}
        if error.locked_until is not None:
            remaining = (error.locked_until - datetime.now(UTC)).total_seconds()
            headers["Retry-After"] = str(max(1, math.ceil(remaining)))
        if error.code is ErrorCode.INVALID_OR_EXPIRED_TOKEN:
            headers["WWW-Authenticate"] = "Bearer"

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(mode="json", exclude_none=True),
            headers=headers or None,
        )

    @staticmethod
    def status_for(code: ErrorCode) -> tuple[int, str]:
        """Map an error code to (HTTP status, title).

        Example:
            >>> ErrorResponseBuilder.status_for(ErrorCode.ACCOUNT_LOCKED)
            (423, 'Account Locked')
        """
        return _AUTH_ERROR_STATUS.get(
            code, (status.HTTP_400_BAD_REQUEST, "Request Failed")
        )
