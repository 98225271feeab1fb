"""Presentation layer - API endpoints and HTTP concerns.

This layer contains FastAPI routers and endpoint definitions. The presentation
layer is thin - it calls the AuthenticationService and translates Result
values to HTTP responses (RFC 7807 for failures).

Structure:
- routers/api/v1/: API version 1 endpoints
- routers/api/middleware/: Authentication dependencies

The presentation layer depends on the application layer but contains NO
business logic.
"""
