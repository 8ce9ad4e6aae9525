"""Collaborator contracts consumed by AuthSession.

Anything with matching methods satisfies these; nothing needs to inherit.
"""

from typing import Protocol

from auth.exceptions import AuthError
from auth.types import MfaType, TokenPair, UserProfile


class AuthTransport(Protocol):
    """The four remote auth calls. Failures raise AuthError subclasses."""

    def primary_login(self, user_name: str, password: str) -> TokenPair: ...

    def submit_mfa_code(self, code: str, mfa_id: str, mfa_type: MfaType) -> TokenPair: ...

    def resend_code(self, mfa_id: str) -> TokenPair: ...

    def fetch_profile(self) -> UserProfile | None: ...

    def close(self) -> None: ...


class SessionStorage(Protocol):
    """Persisted session material. Getters return None when unset."""

    def get_token(self) -> str | None: ...

    def set_token(self, token: str) -> None: ...

    def get_refresh_token(self) -> str | None: ...

    def set_refresh_token(self, refresh_token: str) -> None: ...

    def get_profile(self) -> UserProfile | None: ...

    def set_profile(self, profile: UserProfile) -> None: ...

    def clear_all(self) -> None: ...


class Notifier(Protocol):
    """User-facing notifications."""

    def success(self, title: str, content: str, duration_ms: int = 3000) -> None: ...

    def error(self, error: AuthError) -> None: ...


class Router(Protocol):
    """Navigation hooks around login and logout."""

    def redirect_to_login(self) -> None: ...

    def redirect_after_login(self) -> None: ...

    def current_route_requires_auth(self) -> bool: ...


class DependentStores(Protocol):
    """Stores whose contents depend on who is logged in."""

    def reset_route_store(self) -> None: ...

    def reset_tab_store(self) -> None: ...

    def init_auth_routes(self) -> None: ...
