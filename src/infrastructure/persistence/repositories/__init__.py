"""Repository implementations (adapters).

Usage:
    from src.infrastructure.persistence.repositories import AccountRepository
"""

from src.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from src.infrastructure.persistence.repositories.in_memory_account_repository import (
    InMemoryAccountRepository,
)

__all__ = [
    "AccountRepository",
    "InMemoryAccountRepository",
]
