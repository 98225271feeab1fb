"""Domain layer - Pure business logic.

This layer contains the account entity, value objects, lockout policy and
protocols (ports). The domain layer has NO dependencies on any framework
or infrastructure - it is pure Python.

Structure:
- entities/: Domain entities (have identity)
- enums/: Roles, statuses, token purposes and token failure reasons
- errors/: Authentication error taxonomy
- policies/: Lockout policy (pure decisions over an account snapshot)
- protocols/: Domain protocols (repository interfaces, service interfaces)
- value_objects/: Value objects (immutable, no identity)

The domain layer defines WHAT the business does, not HOW it's implemented.
"""
