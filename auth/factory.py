"""Wiring for a ready-to-use AuthSession."""

from auth.config import AuthConfig
from auth.interfaces import DependentStores, Notifier, Router, SessionStorage
from auth.notifier import LoggingNotifier
from auth.security_logger import SecurityLogger
from auth.session import AuthSession
from auth.storage import MemorySessionStorage, ValkeySessionStorage
from clients.auth_transport import HttpAuthTransport
from clients.valkey_client import ValkeyClient


def create_auth_session(
    config: AuthConfig,
    router: Router,
    stores: DependentStores,
    notifier: Notifier | None = None,
    storage: SessionStorage | None = None,
    valkey_url: str | None = None,
) -> AuthSession:
    """
    Build an AuthSession talking HTTP to config.api_base_url.

    Storage defaults to Valkey when valkey_url is given, else in-memory.
    Notifications default to the log.

    Usage:
        session = create_auth_session(AuthConfig.from_env(), router, stores)
        session.login("Super", "super123")
        ...
        session.close()
    """
    if storage is None:
        if valkey_url:
            storage = ValkeySessionStorage(ValkeyClient(valkey_url), config)
        else:
            storage = MemorySessionStorage()

    return AuthSession(
        config=config,
        transport=HttpAuthTransport(config, storage),
        storage=storage,
        notifier=notifier or LoggingNotifier(),
        router=router,
        stores=stores,
        security_logger=SecurityLogger(),
    )
