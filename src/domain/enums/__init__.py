"""Domain enums for authentication.

Available Enums:
    - AccountRole: Roles carried in token claims (user, moderator, admin)
    - AccountStatus: Account lifecycle status (only ACTIVE authenticates)
    - TokenPurpose: Purpose claim of issued tokens (access, refresh, reset)
    - TokenFailureReason: Why a token was rejected
"""

from src.domain.enums.account_role import AccountRole
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.token_failure_reason import TokenFailureReason
from src.domain.enums.token_purpose import TokenPurpose

__all__ = [
    "AccountRole",
    "AccountStatus",
    "TokenFailureReason",
    "TokenPurpose",
]
