"""Client auth session state machine.

Drives a login attempt through credential submission, an optional MFA
challenge, token issuance and profile hydration, and tears the session down
again on logout or on a failed hydration. One AuthSession is built at
application start and handed to whatever needs it.

Entry points run their remote calls one after another and hold no lock;
overlapping calls on the same session race, last writer wins.
"""

import logging
from typing import TYPE_CHECKING

from auth.config import AuthConfig
from auth.exceptions import AuthError, MfaChallengeIssued
from auth.interfaces import AuthTransport, DependentStores, Notifier, Router, SessionStorage
from auth.security_logger import SecurityEvent, SecurityLogger
from auth.types import MfaChallenge, MfaType, Session, SessionState, TokenPair, UserProfile

if TYPE_CHECKING:
    from auth.demo import RoleSwitcher

logger = logging.getLogger(__name__)


class AuthSession:
    """Owns the client's session state and the login/MFA/logout flow.

    Storage is written as a side effect; the in-memory fields are the source
    of truth while the process runs. On construction the state is restored
    from storage (authenticated if a token was persisted).
    """

    def __init__(
        self,
        config: AuthConfig,
        transport: AuthTransport,
        storage: SessionStorage,
        notifier: Notifier,
        router: Router,
        stores: DependentStores,
        security_logger: SecurityLogger | None = None,
        role_switcher: "RoleSwitcher | None" = None,
    ):
        self._config = config
        self._transport = transport
        self._storage = storage
        self._notifier = notifier
        self._router = router
        self._stores = stores
        self._security_logger = security_logger or SecurityLogger()
        self._role_switcher = role_switcher

        self._init_state()

    def _init_state(self) -> None:
        """Load defaults, then whatever the storage still holds."""
        self._token = self._storage.get_token() or ""
        self._refresh_token = self._storage.get_refresh_token() or ""
        self._user_info = self._storage.get_profile() or UserProfile()
        self._login_loading = False
        self._show_code_input = False
        self._challenge = MfaChallenge()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    @property
    def current_mfa_id(self) -> str:
        return self._challenge.mfa_id

    @property
    def state(self) -> SessionState:
        if self._token:
            return SessionState.AUTHENTICATED
        if self._login_loading:
            return SessionState.LOGGING_IN
        if self._challenge.active:
            return SessionState.MFA_PENDING
        return SessionState.ANONYMOUS

    @property
    def token(self) -> str:
        return self._token

    @property
    def user_info(self) -> UserProfile:
        return self._user_info

    @property
    def login_loading(self) -> bool:
        return self._login_loading

    @property
    def challenge(self) -> MfaChallenge:
        return self._challenge.model_copy()

    @property
    def session(self) -> Session:
        return Session(
            token=self._token,
            refresh_token=self._refresh_token,
            user_info=self._user_info.model_copy(),
        )

    @property
    def show_code_input(self) -> bool:
        """Whether the UI should show the MFA code field."""
        return self._show_code_input

    def set_show_code_input(self, value: bool) -> None:
        self._show_code_input = value

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def reset_auth_store(self) -> None:
        """Tear the session down. Safe to call when already logged out."""
        was_authenticated = self.is_authenticated

        self._storage.clear_all()
        self._init_state()

        self._stores.reset_tab_store()
        self._stores.reset_route_store()

        if self._router.current_route_requires_auth():
            self._router.redirect_to_login()

        if was_authenticated:
            self._security_logger.log(SecurityEvent.SESSION_RESET)
        logger.debug("Auth session reset")

    # -------------------------------------------------------------------------
    # Post-login completion
    # -------------------------------------------------------------------------

    def login_by_token(self, tokens: TokenPair) -> bool:
        """Hydrate the session from freshly issued tokens.

        Tokens are persisted before the profile fetch so the fetch can use
        them. If no profile comes back the written tokens are left in storage
        and False is returned; callers decide whether to reset.
        """
        self._storage.set_token(tokens.token)
        self._storage.set_refresh_token(tokens.refresh_token)

        try:
            profile = self._transport.fetch_profile()
        except AuthError as e:
            logger.warning(f"Profile fetch failed after login: {e}")
            profile = None

        if profile is None:
            self._security_logger.log(SecurityEvent.PROFILE_FETCH_FAILED)
            return False

        self._storage.set_profile(profile)

        self._user_info = profile
        self._token = tokens.token
        self._refresh_token = tokens.refresh_token
        self._challenge = MfaChallenge()
        self._show_code_input = False

        self._security_logger.log(SecurityEvent.LOGIN_SUCCEEDED, user_name=profile.user_name)
        return True

    def handle_action_after_login(self, tokens: TokenPair) -> bool:
        """Complete a login: redirect and welcome on success, reset otherwise."""
        if self.login_by_token(tokens):
            self._router.redirect_after_login()
            self._notifier.success(
                self._config.login_success_title,
                self._config.login_success_template.format(
                    user_name=self._user_info.user_name
                ),
                self._config.notification_duration_ms,
            )
            return True

        self.reset_auth_store()
        return False

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def login(self, user_name: str, password: str) -> None:
        """Log in with credentials.

        An MFA challenge moves the session to MFA_PENDING (and, for SMS,
        sends the code right away). Any other failure is reported through
        the notifier and leaves the state as it was.
        """
        self._login_loading = True
        self._security_logger.log(SecurityEvent.LOGIN_REQUESTED, user_name=user_name)
        try:
            try:
                tokens = self._transport.primary_login(user_name, password)
            except MfaChallengeIssued as challenge_signal:
                self._begin_challenge(challenge_signal.challenge, user_name)
            except AuthError as e:
                self._security_logger.log(
                    SecurityEvent.LOGIN_FAILED,
                    user_name=user_name,
                    status_code=e.status_code,
                    details={"error": type(e).__name__},
                )
                self._notifier.error(e)
            else:
                self.handle_action_after_login(tokens)
        finally:
            self._login_loading = False

    def _begin_challenge(self, challenge: MfaChallenge, user_name: str) -> None:
        self._challenge = MfaChallenge(
            mfa_id=challenge.mfa_id, mfa_type=challenge.mfa_type, active=True
        )
        self._show_code_input = True
        self._security_logger.log(
            SecurityEvent.MFA_CHALLENGE_ISSUED,
            user_name=user_name,
            mfa_id=challenge.mfa_id,
            details={"mfa_type": challenge.mfa_type.name},
        )
        logger.info(f"MFA challenge issued ({challenge.mfa_type.name})")

        if challenge.mfa_type == MfaType.SMS:
            # Flag covers the primary login call only
            self._login_loading = False
            self.send_code(challenge.mfa_id)

    def login_by_code(self, code: str, mfa_id: str, mfa_type: MfaType) -> None:
        """Answer an MFA challenge.

        A rejected code is not reported to the user here; the challenge stays
        open so a fresh code can be tried.
        """
        try:
            tokens = self._transport.submit_mfa_code(code, mfa_id, MfaType(mfa_type))
        except AuthError as e:
            self._security_logger.log(
                SecurityEvent.MFA_CODE_REJECTED, mfa_id=mfa_id, status_code=e.status_code
            )
            logger.info(f"MFA code not accepted: {e}")
            return

        self.handle_action_after_login(tokens)

    def send_code(self, mfa_id: str) -> None:
        """Request an SMS code for a pending challenge.

        The backend answers this call with tokens, and those are run through
        the full post-login completion. A failure with an error body resets
        the session; one without is ignored.
        """
        try:
            tokens = self._transport.resend_code(mfa_id)
        except AuthError as e:
            self._security_logger.log(
                SecurityEvent.MFA_CODE_SEND_FAILED, mfa_id=mfa_id, status_code=e.status_code
            )
            if e.data:
                self.reset_auth_store()
            else:
                logger.info(f"Code send failed without error body: {e}")
            return

        self._security_logger.log(SecurityEvent.MFA_CODE_SENT, mfa_id=mfa_id)
        self.handle_action_after_login(tokens)

    def update_user_role(self, role: str) -> bool:
        """Switch to one of the built-in demo accounts. See auth.demo."""
        if self._role_switcher is None:
            from auth.demo import RoleSwitcher

            self._role_switcher = RoleSwitcher(
                self._config, self._transport, self._stores, self._security_logger
            )
        return self._role_switcher.switch(self, role)

    def close(self) -> None:
        """Release the transport's connections. Session state is left as is."""
        self._transport.close()
