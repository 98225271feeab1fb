"""Test suite for the authentication service.

- unit/: Domain, policy and service logic with mocked ports
- integration/: Real bcrypt, JWT and credential store adapters
- api/: HTTP endpoints through the FastAPI app
"""
