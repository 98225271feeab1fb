"""Domain policies.

Usage:
    from src.domain.policies import LockoutPolicy, Allowed, Locked, LockExpired
"""

from src.domain.policies.lockout_policy import (
    Allowed,
    LockDecision,
    LockExpired,
    Locked,
    LockoutCounters,
    LockoutPolicy,
)

__all__ = [
    "Allowed",
    "LockDecision",
    "LockExpired",
    "Locked",
    "LockoutCounters",
    "LockoutPolicy",
]
