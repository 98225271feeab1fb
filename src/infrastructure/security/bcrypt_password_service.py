"""Bcrypt password hashing service (adapter).

This service implements the PasswordHashingProtocol using bcrypt.

Architecture:
    - Implements PasswordHashingProtocol (no inheritance required)
    - Structural typing via Protocol
    - Cost factor comes from AuthConfig, injected via dependency container

Security:
    - Fresh salt per hash, embedded in the output
    - Constant-time comparison delegated to bcrypt.checkpw
    - Cost factor 10-20 (12 = ~250ms per hash)

Performance:
    - Hash and verify are CPU bound by design; async callers run them in a
      worker thread (asyncio.to_thread) and never race them against a timeout

bcrypt only reads the first 72 bytes of a password; longer inputs are
truncated explicitly so hashing and verification always agree.
"""

from functools import cached_property

import bcrypt

from src.core.constants import (
    BCRYPT_MAX_PASSWORD_BYTES,
    BCRYPT_ROUNDS_DEFAULT,
    BCRYPT_ROUNDS_MAX,
    BCRYPT_ROUNDS_MIN,
)


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from src.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("NewPass123")
        is_valid = password_service.verify_password("NewPass123", password_hash)
    """

    def __init__(self, cost_factor: int = BCRYPT_ROUNDS_DEFAULT) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor. Logarithmic: each +1 doubles
                computation time (10 = ~60ms, 12 = ~250ms, 14 = ~1000ms).

        Raises:
            ValueError: If cost_factor is outside 10-20.
        """
        if cost_factor < BCRYPT_ROUNDS_MIN:
            msg = f"Cost factor must be at least {BCRYPT_ROUNDS_MIN} for security"
            raise ValueError(msg)
        if cost_factor > BCRYPT_ROUNDS_MAX:
            msg = f"Cost factor above {BCRYPT_ROUNDS_MAX} is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        return self._cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$<cost>$...), always
            60 characters long.

        Raises:
            UnicodeEncodeError: If the password cannot be encoded (fatal).

        Example:
            >>> service = BcryptPasswordService(cost_factor=12)
            >>> service.hash_password("NewPass123") != service.hash_password("NewPass123")
            True
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(self._encode(password), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Args:
            password: Plaintext password to verify.
            password_hash: Hashed password from the credential store.

        Returns:
            True if password matches hash, False otherwise (including a
            malformed hash).

        Example:
            >>> service = BcryptPasswordService()
            >>> password_hash = service.hash_password("NewPass123")
            >>> service.verify_password("wrong", password_hash)
            False
            >>> service.verify_password("NewPass123", "invalid_hash")
            False
        """
        try:
            return bcrypt.checkpw(
                self._encode(password), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            # Invalid hash format or encoding error
            return False

    def verify_dummy(self, password: str) -> None:
        """Spend one verification on a throwaway hash.

        Login calls this for unknown emails so that they cost the same bcrypt
        work as a wrong password for an existing account. The hash is built
        once per service at the configured cost factor.
        """
        self.verify_password(password, self._dummy_hash)

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash_password("unused-dummy-password")

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
