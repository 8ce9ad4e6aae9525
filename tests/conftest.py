"""Shared test fixtures for the auth session test suite."""

from unittest.mock import Mock

import pytest

from auth.config import AuthConfig
from auth.notifier import LoggingNotifier
from auth.security_logger import SecurityLogger
from auth.session import AuthSession
from auth.storage import MemorySessionStorage
from auth.types import TokenPair, UserProfile
from clients.auth_transport import HttpAuthTransport


# =============================================================================
# TEST DATA
# =============================================================================

SUPER_PROFILE = UserProfile(userId="0", userName="Super", userRole="super")
ADMIN_PROFILE = UserProfile(userId="1", userName="Admin", userRole="admin")

TEST_TOKENS = TokenPair(token="access-token-1", refreshToken="refresh-token-1")


# =============================================================================
# COLLABORATOR FIXTURES
# =============================================================================


@pytest.fixture
def config() -> AuthConfig:
    """Config with demo accounts on so role switching can be exercised."""
    return AuthConfig(
        api_base_url="https://auth.test.local",
        enable_demo_accounts=True,
    )


@pytest.fixture
def storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture
def transport():
    """Transport mock: login succeeds and the profile fetch returns SUPER_PROFILE."""
    mock = Mock(spec=HttpAuthTransport)
    mock.primary_login.return_value = TEST_TOKENS
    mock.submit_mfa_code.return_value = TEST_TOKENS
    mock.resend_code.return_value = TEST_TOKENS
    mock.fetch_profile.return_value = SUPER_PROFILE
    return mock


@pytest.fixture
def notifier():
    return Mock(spec=LoggingNotifier)


@pytest.fixture
def router():
    """Router mock sitting on a public route."""
    mock = Mock(spec=["redirect_to_login", "redirect_after_login", "current_route_requires_auth"])
    mock.current_route_requires_auth.return_value = False
    return mock


@pytest.fixture
def stores():
    return Mock(spec=["reset_route_store", "reset_tab_store", "init_auth_routes"])


@pytest.fixture
def security_logger() -> SecurityLogger:
    return SecurityLogger()


@pytest.fixture
def auth_session(config, transport, storage, notifier, router, stores, security_logger) -> AuthSession:
    """AuthSession wired to mocks and in-memory storage, starting anonymous."""
    return AuthSession(
        config=config,
        transport=transport,
        storage=storage,
        notifier=notifier,
        router=router,
        stores=stores,
        security_logger=security_logger,
    )
