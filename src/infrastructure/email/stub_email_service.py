"""Stub email service (development/testing).

Implements PasswordResetDeliveryProtocol by logging the reset link instead
of sending mail. Both records pass through the logging redaction, so only
a token prefix reaches the output, in ``reset_token`` and inside
``reset_url``.
"""

from urllib.parse import urlencode

from src.domain.protocols.logger_protocol import LoggerProtocol


class StubEmailService:
    """Log-only password reset delivery.

    Args:
        logger: Structured logger.
        reset_url_base: Frontend page receiving ``?token=``.
    """

    def __init__(self, logger: LoggerProtocol, reset_url_base: str) -> None:
        self._logger = logger
        self._reset_url_base = reset_url_base

    def build_reset_url(self, reset_token: str) -> str:
        """Build the reset link delivered to the account holder.

        Example:
            >>> service.build_reset_url("abc")
            'http://localhost:5173/reset-password?token=abc'
        """
        return f"{self._reset_url_base}?{urlencode({'token': reset_token})}"

    async def deliver_reset_link(self, email: str, reset_token: str) -> None:
        """Log a password reset link instead of emailing it."""
        reset_url = self.build_reset_url(reset_token)
        self._logger.info(
            "[STUB] Password reset email",
            to_email=email,
            reset_token=reset_token,
        )
        self._logger.debug("[STUB] Password reset link", reset_url=reset_url)
