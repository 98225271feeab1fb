"""Domain errors package.

Usage:
    from src.domain.errors import AuthError
"""

from src.domain.errors.authentication_error import AuthError

__all__ = ["AuthError"]
