"""
HTTP transport for the auth backend.

Performs the four remote calls the session needs and converts every
failure into a typed AuthError, so callers never inspect raw responses.
"""

import json
import logging
from typing import Any

import requests
from pydantic import ValidationError

from auth.challenge import parse_challenge_header
from auth.config import AuthConfig
from auth.exceptions import (
    CredentialRejectedError,
    MfaChallengeIssued,
    ProfileFetchFailedError,
    TransportFailureError,
)
from auth.interfaces import SessionStorage
from auth.types import MfaType, TokenPair, UserProfile

logger = logging.getLogger(__name__)

# Some deployments wrap payloads as {"code": 200, "data": {...}, "msg": "..."}
_ENVELOPE_KEYS = frozenset({"code", "data", "msg", "message", "success"})


class HttpAuthTransport:
    """Auth backend client over requests.

    The profile call reads the token from storage at request time, so it
    picks up a token written moments earlier by the login flow.
    """

    def __init__(
        self,
        config: AuthConfig,
        storage: SessionStorage,
        session: requests.Session | None = None,
    ):
        if not config.api_base_url:
            raise ValueError("api_base_url is required")

        self._config = config
        self._storage = storage
        self._owns_http = session is None
        self._http = session or requests.Session()
        self._base_url = config.api_base_url.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Send a request and return the decoded payload.

        Raises:
            MfaChallengeIssued: 401 carrying a recognised challenge header
            CredentialRejectedError: Any other 4xx
            TransportFailureError: Network errors, 5xx, undecodable bodies
        """
        url = self._url(path)
        try:
            response = self._http.request(
                method,
                url,
                json=payload,
                headers=headers,
                timeout=self._config.request_timeout_seconds,
            )
        except (requests.exceptions.RequestException, ConnectionError) as e:
            logger.error(f"Auth request {method} {path} failed: {e}")
            raise TransportFailureError(f"Connection failed: {e}")

        response_headers = {k.lower(): v for k, v in response.headers.items()}

        if response.status_code >= 400:
            self._raise_for_status(response, response_headers)

        if not response.content:
            return None
        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError):
            logger.error(f"Auth backend returned invalid JSON for {path}")
            raise TransportFailureError(
                "Invalid response from auth backend",
                status_code=response.status_code,
                headers=response_headers,
            )

        if _is_envelope(body):
            return body["data"]
        return body

    def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_http:
            self._http.close()
            logger.info("HttpAuthTransport closed")

    def _raise_for_status(self, response: requests.Response, headers: dict[str, str]) -> None:
        status = response.status_code
        try:
            data = response.json() if response.content else None
        except (json.JSONDecodeError, ValueError):
            data = None

        message = _error_message(data) or f"HTTP {status}"
        error_kwargs = {"status_code": status, "headers": headers, "data": data}

        if status == 401:
            challenge = parse_challenge_header(headers.get(self._config.mfa_header_name.lower()))
            if challenge is not None:
                raise MfaChallengeIssued(challenge, **error_kwargs)

        if status >= 500:
            logger.error(f"Auth backend error {status}: {message}")
            raise TransportFailureError(message, **error_kwargs)

        raise CredentialRejectedError(message, **error_kwargs)

    def _token_pair(self, body: Any, path: str) -> TokenPair:
        try:
            return TokenPair.model_validate(body)
        except ValidationError as e:
            logger.error(f"Auth backend returned malformed tokens for {path}: {e}")
            raise TransportFailureError("Malformed token payload")

    def primary_login(self, user_name: str, password: str) -> TokenPair:
        """Log in with user name and password."""
        path = self._config.login_path
        body = self._request("POST", path, {"userName": user_name, "password": password})
        return self._token_pair(body, path)

    def submit_mfa_code(self, code: str, mfa_id: str, mfa_type: MfaType) -> TokenPair:
        """Exchange a second-factor code for tokens."""
        path = self._config.mfa_login_path
        body = self._request(
            "POST",
            path,
            {"code": code, "mfaId": mfa_id, "mfaType": int(mfa_type)},
        )
        return self._token_pair(body, path)

    def resend_code(self, mfa_id: str) -> TokenPair:
        """Ask the backend to (re)send an SMS code for a pending challenge."""
        path = self._config.send_code_path
        body = self._request("POST", path, {"mfaId": mfa_id})
        return self._token_pair(body, path)

    def fetch_profile(self) -> UserProfile | None:
        """
        Fetch the profile for the currently stored token.

        Returns None when the backend answers with no profile.
        """
        headers = {}
        token = self._storage.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        path = self._config.user_info_path
        body = self._request("GET", path, headers=headers)
        if not body:
            return None
        try:
            return UserProfile.model_validate(body)
        except ValidationError as e:
            raise ProfileFetchFailedError(f"Malformed profile: {e}")


def _error_message(data: Any) -> str | None:
    """Pull a human-readable message out of an error body, if any."""
    if isinstance(data, dict):
        for key in ("message", "msg", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return None


def _is_envelope(body: Any) -> bool:
    """True only for a wrapper object, not a payload that has its own "data" field."""
    return isinstance(body, dict) and "data" in body and set(body) <= _ENVELOPE_KEYS
