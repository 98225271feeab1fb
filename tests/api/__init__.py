"""API tests package.

Drives /api/v1/auth through TestClient with the AuthenticationService
dependency overridden to use the in-memory credential store.
"""
