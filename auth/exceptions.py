"""Typed exceptions for auth failures.

Transports raise these instead of returning ad-hoc error shapes, so the
session state machine can branch on the exception type alone.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from auth.types import MfaChallenge


class AuthError(Exception):
    """Base class for authentication errors.

    Carries whatever the server told us: HTTP status, response headers
    (keys lower-cased) and the parsed error body, if there was one.
    """

    def __init__(
        self,
        message: str = "",
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.data = data

    def header(self, name: str) -> str | None:
        """Case-insensitive response header lookup."""
        return self.headers.get(name.lower())


class CredentialRejectedError(AuthError):
    """Login rejected for a reason other than an MFA challenge."""


class MfaChallengeIssued(AuthError):
    """
    Server wants a second factor before issuing tokens.

    Not a real failure. It arrives over the error channel (401 plus a
    challenge header) and is turned into a state transition by the session.
    """

    def __init__(self, challenge: "MfaChallenge", **kwargs):
        kwargs.setdefault("status_code", 401)
        super().__init__(
            f"MFA challenge issued ({challenge.mfa_type.name})", **kwargs
        )
        self.challenge = challenge


class ProfileFetchFailedError(AuthError):
    """Tokens were issued but the user profile could not be loaded."""


class TransportFailureError(AuthError):
    """Network failure, server error, or a response we could not decode."""


class DemoAccountsDisabledError(AuthError):
    """Role switching with built-in accounts is turned off in config."""
