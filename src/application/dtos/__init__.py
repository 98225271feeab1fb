"""Application DTOs."""

from src.application.dtos.auth_dtos import (
    FORGOT_PASSWORD_MESSAGE,
    AccountView,
    ForgotPasswordResult,
    LoginResult,
    RefreshResult,
)

__all__ = [
    "FORGOT_PASSWORD_MESSAGE",
    "AccountView",
    "ForgotPasswordResult",
    "LoginResult",
    "RefreshResult",
]
