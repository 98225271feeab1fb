"""Application services."""

from src.application.services.authentication_service import AuthenticationService

__all__ = ["AuthenticationService"]
