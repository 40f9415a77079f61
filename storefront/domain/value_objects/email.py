"""Email value object with validation.

Immutable value object that validates email format.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class Email:
    """Email value object with format validation.

    Uses email-validator for RFC-compliant syntax checks (no DNS lookups).

    Attributes:
        value: The email address string (validated, normalized).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> str(Email("Cook@Example.com"))
        'Cook@example.com'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and normalize email after initialization.

        Raises:
            ValueError: If email format is invalid.
        """
        try:
            validated = validate_email(self.value, check_deliverability=False)
            object.__setattr__(self, "value", validated.normalized)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email: {e}") from e

    def __str__(self) -> str:
        """Return email address as string."""
        return self.value
