"""Token purposes.

Every issued token carries a ``purpose`` claim and is signed with the
secret of that purpose. Verification always states the purpose it expects,
so a token minted for one flow cannot be replayed in another.
"""

from enum import Enum


class TokenPurpose(str, Enum):
    """Purpose claim of a stateless session token.

    Attributes:
        ACCESS: Short-lived credential authorizing API calls.
        REFRESH: Long-lived credential used only to mint access tokens.
        PASSWORD_RESET: Single-purpose credential proving the holder
            received the reset link.
    """

    ACCESS = "access"
    REFRESH = "refresh"
    PASSWORD_RESET = "password_reset"
