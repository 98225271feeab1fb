"""Domain value objects (immutable, no identity)."""

from src.domain.value_objects.email import Email, normalize_email

__all__ = ["Email", "normalize_email"]
