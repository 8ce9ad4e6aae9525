"""Tests for LoggingNotifier."""

import logging

from auth.exceptions import CredentialRejectedError
from auth.notifier import LoggingNotifier


class TestLoggingNotifier:

    def test_success_logged_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="auth.notifier"):
            LoggingNotifier().success("Login successful!", "Welcome back, Super!")

        assert "Welcome back, Super!" in caplog.text
        assert caplog.records[0].levelno == logging.INFO

    def test_error_includes_status(self, caplog):
        with caplog.at_level(logging.INFO, logger="auth.notifier"):
            LoggingNotifier().error(CredentialRejectedError("Bad credentials", status_code=401))

        assert "HTTP 401" in caplog.text
        assert "Bad credentials" in caplog.text
        assert caplog.records[0].levelno == logging.ERROR

    def test_error_without_message_uses_type_name(self, caplog):
        with caplog.at_level(logging.INFO, logger="auth.notifier"):
            LoggingNotifier().error(CredentialRejectedError())

        assert "CredentialRejectedError" in caplog.text
