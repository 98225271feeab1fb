"""Unit tests for StubEmailService (log-only reset delivery)."""

from unittest.mock import Mock

import pytest

from src.infrastructure.email import StubEmailService
from src.infrastructure.logging.console_adapter import redact_secrets


@pytest.fixture
def mock_logger():
    return Mock()


@pytest.mark.unit
class TestStubEmailService:
    def test_build_reset_url_encodes_token(self, mock_logger):
        service = StubEmailService(mock_logger, "https://app.test/reset-password")

        url = service.build_reset_url("a.b+c")

        assert url == "https://app.test/reset-password?token=a.b%2Bc"

    async def test_deliver_logs_recipient(self, mock_logger):
        service = StubEmailService(mock_logger, "https://app.test/reset-password")

        await service.deliver_reset_link("alice@example.com", "header.payload.sig")

        message, = mock_logger.info.call_args.args
        assert "Password reset" in message
        assert mock_logger.info.call_args.kwargs["to_email"] == "alice@example.com"
        mock_logger.debug.assert_called_once()

    async def test_logged_fields_keep_only_token_prefix(self, mock_logger):
        token = "eyJhbGciOiJIUzI1NiJ9.payload.signature"
        service = StubEmailService(mock_logger, "https://app.test/reset-password")

        await service.deliver_reset_link("alice@example.com", token)

        for call in (mock_logger.info.call_args, mock_logger.debug.call_args):
            rendered = redact_secrets(None, "info", dict(call.kwargs))
            assert token not in str(rendered)
            assert "eyJhbGci..." in str(rendered)
