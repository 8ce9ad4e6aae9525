"""Tests for demo role switching."""

import pytest

from auth.config import AuthConfig
from auth.demo import DEMO_ACCOUNTS, RoleSwitcher
from auth.exceptions import CredentialRejectedError, DemoAccountsDisabledError
from auth.security_logger import SecurityEvent
from auth.session import AuthSession
from auth.types import SessionState
from conftest import SUPER_PROFILE, TEST_TOKENS


class TestUpdateUserRole:

    def test_super_role_authenticates_as_super(self, auth_session, transport, stores):
        assert auth_session.update_user_role("super") is True

        transport.primary_login.assert_called_once_with("Super", "super123")
        assert auth_session.state == SessionState.AUTHENTICATED
        assert auth_session.user_info == SUPER_PROFILE
        assert auth_session.token == TEST_TOKENS.token
        stores.reset_route_store.assert_called_once()
        stores.init_auth_routes.assert_called_once()

    def test_routes_reset_before_reinit(self, auth_session, stores):
        auth_session.update_user_role("admin")

        names = [c[0] for c in stores.method_calls]
        assert names.index("reset_route_store") < names.index("init_auth_routes")

    def test_no_notification_or_redirect(self, auth_session, notifier, router):
        auth_session.update_user_role("user")

        notifier.success.assert_not_called()
        router.redirect_after_login.assert_not_called()

    def test_uses_fixed_credentials(self, auth_session, transport):
        for role, (user_name, password) in DEMO_ACCOUNTS.items():
            transport.primary_login.reset_mock()
            auth_session.update_user_role(role)
            transport.primary_login.assert_called_once_with(user_name, password)

    def test_rejected_login_leaves_routes_alone(self, auth_session, transport, stores):
        transport.primary_login.side_effect = CredentialRejectedError("nope", status_code=401)

        assert auth_session.update_user_role("super") is False

        assert auth_session.state == SessionState.ANONYMOUS
        stores.reset_route_store.assert_not_called()
        stores.init_auth_routes.assert_not_called()

    def test_failed_profile_still_rebuilds_routes(self, auth_session, transport, stores):
        """No reset on failed hydration; routes are rebuilt regardless."""
        transport.fetch_profile.return_value = None

        auth_session.update_user_role("super")

        assert auth_session.is_authenticated is False
        stores.reset_tab_store.assert_not_called()
        stores.init_auth_routes.assert_called_once()

    def test_unknown_role_raises(self, auth_session):
        with pytest.raises(ValueError, match="Unknown role"):
            auth_session.update_user_role("root")

    def test_records_role_switch(self, auth_session, security_logger):
        auth_session.update_user_role("super")

        events = security_logger.get_recent_events(event_type=SecurityEvent.ROLE_SWITCHED)
        assert events[0]["details"] == {"role": "super"}


class TestDisabled:

    def test_raises_when_disabled(self, transport, storage, notifier, router, stores):
        session = AuthSession(AuthConfig(), transport, storage, notifier, router, stores)

        with pytest.raises(DemoAccountsDisabledError):
            session.update_user_role("super")

        transport.primary_login.assert_not_called()


class TestCustomAccounts:

    def test_injected_switcher_with_own_accounts(
        self, config, transport, storage, notifier, router, stores
    ):
        switcher = RoleSwitcher(config, transport, stores, accounts={"qa": ("QA", "qa-pass")})
        session = AuthSession(
            config, transport, storage, notifier, router, stores, role_switcher=switcher
        )

        session.update_user_role("qa")

        transport.primary_login.assert_called_once_with("QA", "qa-pass")
