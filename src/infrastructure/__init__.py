"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- persistence/: Credential store (SQLAlchemy/PostgreSQL and in-memory)
- security/: bcrypt password hashing, JWT session tokens
- email/: Password reset delivery
- logging/: structlog adapters

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
