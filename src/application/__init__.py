"""Application layer - Use cases and orchestration.

Structure:
- services/: AuthenticationService (login, refresh, logout, password recovery,
  registration and account lifecycle)
- dtos/: Result dataclasses handed to the presentation layer

The application layer orchestrates domain logic but contains no business rules.
"""
