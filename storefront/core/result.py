"""Result types for railway-oriented programming.

Operations whose failure is an expected outcome (a missing token, an expired
link, an invalid order) return a Result instead of raising. Callers branch on
the variant with structural pattern matching.

Usage:
    def consume(token_id: str) -> Result[DownloadGrant, TokenError]:
        if token_id not in store:
            return Failure(error=TokenError(code=ErrorCode.TOKEN_NOT_FOUND, ...))
        return Success(value=grant)

    match consume(token_id):
        case Success(value=grant):
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
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error describing why the operation failed.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
