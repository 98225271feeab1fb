"""Email value object and normalization.

Account emails are case-insensitive: every write and every lookup goes
through ``normalize_email`` so the stored value and the query value agree.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


def normalize_email(raw: str) -> str:
    """Normalize an email for storage and lookup.

    Lookup paths (login, forgot password) normalize without validating so
    that a malformed address is simply "not found" instead of a distinct
    validation error.

    Args:
        raw: Email as supplied by the caller.

    Returns:
        str: Trimmed, lowercased email.

    Example:
        >>> normalize_email("  Alice@Example.COM ")
        'alice@example.com'
    """
    return raw.strip().lower()


@dataclass(frozen=True)
class Email:
    """Email value object with format validation.

    Uses email-validator library for RFC-compliant validation, then applies
    ``normalize_email`` so the whole address is lowercase.

    Attributes:
        value: The email address string (validated, lowercase)

    Raises:
        ValueError: If email format is invalid

    Example:
        >>> email = Email("Alice@Example.com")
        >>> str(email)
        'alice@example.com'
        >>> Email("invalid")
        Traceback (most recent call last):
        ...
        ValueError: Invalid email: ...
    """

    value: str

    def __post_init__(self) -> None:
        """Validate email format after initialization.

        Raises:
            ValueError: If email format is invalid.
        """
        try:
            # No deliverability check (no DNS lookups on the request path)
            validated = validate_email(
                normalize_email(self.value), check_deliverability=False
            )
            object.__setattr__(self, "value", normalize_email(validated.normalized))
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email: {e}") from e

    def __str__(self) -> str:
        """Return email address as string.

        Returns:
            str: The email address.
        """
        return self.value

    def __repr__(self) -> str:
        """Return repr for debugging.

        Returns:
            str: String representation of Email object.
        """
        return f"Email('{self.value}')"
