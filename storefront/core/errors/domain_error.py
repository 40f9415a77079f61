"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for every error that travels as data inside a
Result. It does not inherit from Exception: these errors are returned, not
raised.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class TokenError(DomainError):
        pass
"""

from dataclasses import dataclass

from storefront.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging. Never shown to customers.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
