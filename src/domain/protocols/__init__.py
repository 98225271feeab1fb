"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.
Do NOT re-export from other domain subpackages (events, entities) to avoid
circular import risks.

Usage:
    from src.domain.protocols import AccountRepository, TokenServiceProtocol
"""

# Service protocols
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.password_reset_delivery_protocol import (
    PasswordResetDeliveryProtocol,
)
from src.domain.protocols.token_service_protocol import (
    TokenClaims,
    TokenServiceProtocol,
)

# Repository protocols
from src.domain.protocols.account_repository import AccountRepository

__all__ = [
    # Service protocols
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "PasswordResetDeliveryProtocol",
    "TokenClaims",
    "TokenServiceProtocol",
    # Repository protocols
    "AccountRepository",
]
