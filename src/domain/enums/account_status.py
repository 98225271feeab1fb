"""Account lifecycle status.

Status Transitions:
    pending_verification -> active      (email verified)
    active -> inactive / suspended      (administrative action)
    inactive / suspended -> active      (administrative action)

Only ACTIVE accounts may authenticate.
"""

from enum import Enum


class AccountStatus(str, Enum):
    """Account lifecycle status."""

    PENDING_VERIFICATION = "pending_verification"
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"

    def can_authenticate(self) -> bool:
        """Check whether accounts in this status may log in.

        Returns:
            bool: True only for ACTIVE.
        """
        return self is AccountStatus.ACTIVE
