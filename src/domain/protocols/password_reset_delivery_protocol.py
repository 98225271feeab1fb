"""Password reset delivery protocol.

Out-of-band delivery of reset tokens (email in production, log stub in
development). Delivery is fire-and-forget from the caller's point of view:
``forgot_password`` logs and swallows any failure raised here.
"""

from typing import Protocol


class PasswordResetDeliveryProtocol(Protocol):
    """Protocol for delivering password reset links.

    Implementations:
        - StubEmailService: src/infrastructure/email/stub_email_service.py
    """

    async def deliver_reset_link(self, email: str, reset_token: str) -> None:
        """Deliver a password reset link.

        Args:
            email: Recipient email address.
            reset_token: Password reset token to embed in the link.
        """
        ...
