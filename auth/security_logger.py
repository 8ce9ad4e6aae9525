"""Security event logging for the client auth flow.

Events go to the "auth.security" logger and into a bounded in-memory buffer
that can be queried for diagnostics. Secrets (passwords, codes, tokens) are
never part of an event.
"""

import logging
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Any

security_log = logging.getLogger("auth.security")


class SecurityEvent(Enum):
    """Auth security event types."""

    LOGIN_REQUESTED = "login_requested"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    MFA_CHALLENGE_ISSUED = "mfa_challenge_issued"
    MFA_CODE_SENT = "mfa_code_sent"
    MFA_CODE_SEND_FAILED = "mfa_code_send_failed"
    MFA_CODE_REJECTED = "mfa_code_rejected"
    PROFILE_FETCH_FAILED = "profile_fetch_failed"
    SESSION_RESET = "session_reset"
    ROLE_SWITCHED = "role_switched"


# Events that indicate something went wrong are logged at WARNING
_WARNING_EVENTS = {
    SecurityEvent.LOGIN_FAILED,
    SecurityEvent.MFA_CODE_SEND_FAILED,
    SecurityEvent.MFA_CODE_REJECTED,
    SecurityEvent.PROFILE_FETCH_FAILED,
}


class SecurityLogger:
    """Security event logger with a bounded recent-events buffer."""

    def __init__(self, max_events: int = 500, log: logging.Logger | None = None):
        self._events: deque[dict[str, Any]] = deque(maxlen=max_events)
        self._log = log or security_log

    def log(
        self,
        event: SecurityEvent,
        user_name: str | None = None,
        mfa_id: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Record an event."""
        record = {
            "event_type": event.value,
            "user_name": user_name,
            "mfa_id": mfa_id,
            "status_code": status_code,
            "details": details,
            "created_at": datetime.now(timezone.utc),
        }
        self._events.append(record)

        level = logging.WARNING if event in _WARNING_EVENTS else logging.INFO
        self._log.log(
            level,
            f"auth event {event.value}",
            extra={"security_event": record},
        )

    def get_recent_events(
        self,
        user_name: str | None = None,
        event_type: SecurityEvent | None = None,
        limit: int = 100,
    ) -> list[dict]:
        """Query recent events, newest first, with optional filters."""
        results = []
        for record in reversed(self._events):
            if user_name and record["user_name"] != user_name:
                continue
            if event_type and record["event_type"] != event_type.value:
                continue
            results.append(record)
            if len(results) >= limit:
                break
        return results

    def clear(self) -> None:
        """Drop buffered events."""
        self._events.clear()
