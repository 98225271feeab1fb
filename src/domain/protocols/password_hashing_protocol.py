"""Password hashing protocol for domain layer.

This protocol defines the interface for password hashing and verification.
Infrastructure layer provides the bcrypt implementation.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
    - No framework dependencies in domain

Both operations are CPU bound by design. Async callers run them with
``asyncio.to_thread`` and never race them against a timeout.
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = await asyncio.to_thread(
            password_service.hash_password, "SecurePass123!"
        )
        is_valid = await asyncio.to_thread(
            password_service.verify_password, "SecurePass123!", password_hash
        )
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).

        Note:
            - Fresh salt per call, embedded in the output
            - Raises only on encoding faults (treated as fatal)
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Args:
            password: Plaintext password to verify.
            password_hash: Hashed password from the credential store.

        Returns:
            True if password matches hash, False otherwise.

        Note:
            - Constant-time comparison
            - Returns False for invalid hash format (no exceptions)
        """
        ...

    def verify_dummy(self, password: str) -> None:
        """Do the work of one verification without a stored hash.

        Used when the account does not exist, so an unknown email takes as
        long as a wrong password.
        """
        ...
