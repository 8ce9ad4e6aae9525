"""Logging-backed notifier for headless clients and scripts."""

import logging

from auth.exceptions import AuthError

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Writes user-facing notifications to the log instead of a UI."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def success(self, title: str, content: str, duration_ms: int = 3000) -> None:
        self._log.info(f"{title} {content}")

    def error(self, error: AuthError) -> None:
        status = f" (HTTP {error.status_code})" if error.status_code else ""
        message = error.message or type(error).__name__
        self._log.error(f"Authentication failed{status}: {message}")
