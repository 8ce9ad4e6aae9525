"""Role switching with built-in demo accounts.

For demos and local testing only. Disabled unless
AuthConfig.enable_demo_accounts is set.
"""

import logging
from typing import TYPE_CHECKING

from auth.config import AuthConfig
from auth.exceptions import AuthError, DemoAccountsDisabledError
from auth.interfaces import AuthTransport, DependentStores
from auth.security_logger import SecurityEvent, SecurityLogger

if TYPE_CHECKING:
    from auth.session import AuthSession

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS: dict[str, tuple[str, str]] = {
    "super": ("Super", "super123"),
    "admin": ("Admin", "admin123"),
    "user": ("User01", "user01123"),
}


class RoleSwitcher:
    """Logs the session in as the demo account for a role."""

    def __init__(
        self,
        config: AuthConfig,
        transport: AuthTransport,
        stores: DependentStores,
        security_logger: SecurityLogger | None = None,
        accounts: dict[str, tuple[str, str]] | None = None,
    ):
        self._config = config
        self._transport = transport
        self._stores = stores
        self._security_logger = security_logger or SecurityLogger()
        self._accounts = accounts if accounts is not None else DEMO_ACCOUNTS

    def switch(self, session: "AuthSession", role: str) -> bool:
        """
        Log in as the account for role and rebuild the route table.

        No welcome notification, redirect or reset happens here. Returns
        False if the demo login itself was rejected.

        Raises:
            DemoAccountsDisabledError: If demo accounts are disabled.
            ValueError: If role has no demo account.
        """
        if not self._config.enable_demo_accounts:
            raise DemoAccountsDisabledError("Demo accounts are disabled")

        if role not in self._accounts:
            raise ValueError(
                f"Unknown role '{role}', expected one of {sorted(self._accounts)}"
            )

        user_name, password = self._accounts[role]
        try:
            tokens = self._transport.primary_login(user_name, password)
        except AuthError as e:
            logger.warning(f"Demo login for role '{role}' failed: {e}")
            return False

        session.login_by_token(tokens)
        self._stores.reset_route_store()
        self._stores.init_auth_routes()

        self._security_logger.log(
            SecurityEvent.ROLE_SWITCHED, user_name=user_name, details={"role": role}
        )
        return True
