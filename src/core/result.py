"""Result types for railway-oriented programming.

Expected failures (wrong password, locked account, expired token) travel as
values instead of exceptions, so callers map every outcome explicitly.
Only unexpected faults (database unreachable, hashing backend broken) are
raised.

Usage:
    def check_status(account: Account) -> Result[Account, AuthError]:
        if not account.status.can_authenticate():
            return Failure(error=AuthError.account_inactive())
        return Success(value=account)

    match check_status(account):
        case Success(value=account):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
