"""Session storage backends.

Both backends hold the same three values: access token, refresh token and
the user profile. clear_all removes all of them and is safe on empty storage.
"""

import logging

from pydantic import ValidationError

from auth.config import AuthConfig
from auth.types import UserProfile
from clients.valkey_client import ValkeyClient

logger = logging.getLogger(__name__)


class MemorySessionStorage:
    """Process-local storage. Lost on exit."""

    def __init__(self):
        self._token: str | None = None
        self._refresh_token: str | None = None
        self._profile: dict | None = None

    def get_token(self) -> str | None:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def get_refresh_token(self) -> str | None:
        return self._refresh_token

    def set_refresh_token(self, refresh_token: str) -> None:
        self._refresh_token = refresh_token

    def get_profile(self) -> UserProfile | None:
        if self._profile is None:
            return None
        return UserProfile.model_validate(self._profile)

    def set_profile(self, profile: UserProfile) -> None:
        # Stored serialized so callers can't mutate it through a shared reference
        self._profile = profile.to_storage()

    def clear_all(self) -> None:
        self._token = None
        self._refresh_token = None
        self._profile = None


class ValkeySessionStorage:
    """Session storage in Valkey, so a session survives process restarts.

    Keys are namespaced with config.storage_key_prefix. If
    config.storage_expiry_hours is set every write refreshes that TTL.
    """

    TOKEN_KEY = "token"
    REFRESH_TOKEN_KEY = "refresh_token"
    PROFILE_KEY = "user_info"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._prefix = config.storage_key_prefix
        self._expire_seconds = (
            config.storage_expiry_hours * 3600
            if config.storage_expiry_hours is not None
            else None
        )

    def _key(self, name: str) -> str:
        """Generate namespaced Valkey key."""
        return f"{self._prefix}{name}"

    def get_token(self) -> str | None:
        return self._valkey.get(self._key(self.TOKEN_KEY))

    def set_token(self, token: str) -> None:
        self._valkey.set(self._key(self.TOKEN_KEY), token, self._expire_seconds)

    def get_refresh_token(self) -> str | None:
        return self._valkey.get(self._key(self.REFRESH_TOKEN_KEY))

    def set_refresh_token(self, refresh_token: str) -> None:
        self._valkey.set(
            self._key(self.REFRESH_TOKEN_KEY), refresh_token, self._expire_seconds
        )

    def get_profile(self) -> UserProfile | None:
        """Load the stored profile. A corrupt entry reads as no profile."""
        try:
            data = self._valkey.get_json(self._key(self.PROFILE_KEY))
        except ValueError as e:
            logger.warning(f"Discarding unreadable stored profile: {e}")
            return None
        if data is None:
            return None
        try:
            return UserProfile.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Discarding invalid stored profile: {e}")
            return None

    def set_profile(self, profile: UserProfile) -> None:
        self._valkey.set_json(
            self._key(self.PROFILE_KEY), profile.to_storage(), self._expire_seconds
        )

    def clear_all(self) -> None:
        self._valkey.delete(
            self._key(self.TOKEN_KEY),
            self._key(self.REFRESH_TOKEN_KEY),
            self._key(self.PROFILE_KEY),
        )
