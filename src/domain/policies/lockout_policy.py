"""Brute-force lockout policy.

Pure decisions over an account snapshot. The policy never writes: the
authentication service applies its decisions through the repository's
atomic operations.

Rules:
    - ``locked_until`` in the future: login refused, password not checked
    - ``locked_until`` in the past: the lock has expired and the counters
      must be cleared as part of the same evaluation (lazy expiry)
    - Each failure against an unlocked account adds one to the counter
    - Reaching the threshold locks the account for the cooldown; the counter
      stays at the threshold
    - Success clears the counter and the lock

Usage:
    policy = LockoutPolicy(threshold=5, cooldown=timedelta(minutes=30))

    match policy.evaluate(account, now):
        case Locked(until=until):
            ...
        case LockExpired(observed_version=version):
            ...
        case Allowed():
            ...
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from src.domain.entities.account import Account


@dataclass(frozen=True, slots=True)
class Allowed:
    """No active lock, proceed with password verification."""


@dataclass(frozen=True, slots=True)
class Locked:
    """Account is inside its lockout window."""

    until: datetime


@dataclass(frozen=True, slots=True)
class LockExpired:
    """Lock window has passed; counters must be cleared before proceeding.

    Attributes:
        observed_version: Row version the decision was made against, used
            for the compare-and-swap that clears the lock.
    """

    observed_version: int


type LockDecision = Allowed | Locked | LockExpired


@dataclass(frozen=True, slots=True, kw_only=True)
class LockoutCounters:
    """Lockout bookkeeping to persist after an attempt."""

    failed_login_attempts: int
    locked_until: datetime | None
    last_login_at: datetime | None = None


class LockoutPolicy:
    """Threshold/cooldown lockout rules.

    Args:
        threshold: Consecutive failures that lock the account.
        cooldown: How long the lock lasts.

    Raises:
        ValueError: If threshold or cooldown is not positive.
    """

    def __init__(self, threshold: int, cooldown: timedelta) -> None:
        if threshold < 1:
            raise ValueError("Lockout threshold must be at least 1")
        if cooldown <= timedelta(0):
            raise ValueError("Lockout cooldown must be positive")
        self.threshold = threshold
        self.cooldown = cooldown

    def evaluate(self, account: Account, now: datetime) -> LockDecision:
        """Decide whether a login attempt may proceed.

        Args:
            account: Current account snapshot.
            now: Evaluation instant (timezone-aware).

        Returns:
            Locked if the lock is still active, LockExpired if a lock is set
            but has passed, Allowed otherwise.
        """
        if account.locked_until is None:
            return Allowed()
        if now < account.locked_until:
            return Locked(until=account.locked_until)
        return LockExpired(observed_version=account.version)

    def on_failure(self, account: Account, now: datetime) -> LockoutCounters:
        """Counters after one more failed attempt.

        The authentication service does not persist this result. The
        stores apply the same transition atomically in
        ``AccountRepository.record_failed_login`` and are the authority;
        this method mirrors them for a single snapshot, and the repository
        tests check that both agree.

        Args:
            account: Unlocked account snapshot the failure applies to.
            now: Failure instant.

        Returns:
            LockoutCounters with the incremented counter, and a lock expiry
            once the threshold is reached.
        """
        attempts = min(account.failed_login_attempts + 1, self.threshold)
        if attempts >= self.threshold:
            return LockoutCounters(
                failed_login_attempts=attempts,
                locked_until=self.lock_expiry(now),
            )
        return LockoutCounters(
            failed_login_attempts=attempts,
            locked_until=account.locked_until,
        )

    def on_success(self, now: datetime) -> LockoutCounters:
        """Counters after a successful login."""
        return LockoutCounters(
            failed_login_attempts=0,
            locked_until=None,
            last_login_at=now,
        )

    def lock_expiry(self, now: datetime) -> datetime:
        """Instant a lock applied at ``now`` ends."""
        return now + self.cooldown
