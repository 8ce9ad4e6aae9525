"""Client-side authentication session: login, MFA challenge, logout."""

from auth.exceptions import (
    AuthError,
    CredentialRejectedError,
    MfaChallengeIssued,
    ProfileFetchFailedError,
    TransportFailureError,
    DemoAccountsDisabledError,
)
from auth.types import (
    MfaType,
    SessionState,
    TokenPair,
    UserProfile,
    MfaChallenge,
    Session,
)
from auth.config import AuthConfig
from auth.challenge import parse_challenge_header
from auth.interfaces import AuthTransport, SessionStorage, Notifier, Router, DependentStores
from auth.storage import MemorySessionStorage, ValkeySessionStorage
from auth.notifier import LoggingNotifier
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.session import AuthSession
from auth.demo import RoleSwitcher, DEMO_ACCOUNTS
