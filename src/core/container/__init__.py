"""Container module - Centralized dependency injection.

    from src.core.container import get_authentication_service, get_logger

The container is organized into modules:
- infrastructure: Config, database, logging, security services, delivery
- repositories: Repository factories
- auth: AuthenticationService factory
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_auth_config,
    get_database,
    get_db_session,
    get_lockout_policy,
    get_logger,
    get_password_service,
    get_reset_delivery,
    get_token_service,
)

# Repositories
from src.core.container.repositories import get_account_repository

# Services
from src.core.container.auth import get_authentication_service

__all__ = [
    # Infrastructure
    "get_auth_config",
    "get_database",
    "get_db_session",
    "get_lockout_policy",
    "get_logger",
    "get_password_service",
    "get_reset_delivery",
    "get_token_service",
    # Repositories
    "get_account_repository",
    # Services
    "get_authentication_service",
]
