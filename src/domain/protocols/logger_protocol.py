"""Structured logging port.

The authentication service logs every security-relevant outcome (login
success and failure, lock transitions, reset requests) as a message plus
key-value context. Adapters decide rendering (console or JSON) and must
redact secrets before output.

What may appear in context:
    - account_id, email (only on events about that account)
    - token prefixes (first 8 characters), never whole tokens
    - failure reasons and attempt counters

What must never appear:
    - passwords (old or new) and password hashes
    - signing secrets
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Backend-agnostic structured logger.

    ``bind``/``with_context`` return a new logger; the receiver is not
    mutated, so a service can keep one base logger and derive a scoped one
    per operation.
    """

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a failed operation.

        Args:
            message: Static event description.
            error: Exception that caused the failure. Adapters add
                ``error_type`` and ``error_message`` fields for it.
            **context: Structured fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a failure that prevents any authentication from succeeding.

        Example: the credential store is unreachable at startup.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger that adds ``context`` to every call.

        Example:
            log = logger.bind(operation="login", email=email)
            log.info("Login attempt rejected", reason="invalid_credentials")
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Same as ``bind``."""
        ...
