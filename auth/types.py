"""Pydantic models for the client auth session."""

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MfaType(IntEnum):
    """Second-factor delivery method. Values match the server's wire codes."""

    SMS = 1
    TOTP = 2


class SessionState(str, Enum):
    """Where the session currently sits in the login flow."""

    ANONYMOUS = "anonymous"
    LOGGING_IN = "logging_in"
    MFA_PENDING = "mfa_pending"
    AUTHENTICATED = "authenticated"


class TokenPair(BaseModel):
    """Token material returned by login, MFA code and code resend calls."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., min_length=1)
    refresh_token: str = Field(default="", alias="refreshToken")


class UserProfile(BaseModel):
    """
    Profile record returned by the user-info endpoint.

    Only user_name is read by the session (for the welcome message). Any
    other fields the server sends are kept as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    user_id: str = Field(default="", alias="userId")
    user_name: str = Field(default="", alias="userName")
    user_role: str = Field(default="user", alias="userRole")

    def to_storage(self) -> dict:
        """Serialize with wire aliases, extras included."""
        return self.model_dump(by_alias=True)


class MfaChallenge(BaseModel):
    """Pending second-factor challenge."""

    mfa_id: str = ""
    mfa_type: MfaType = MfaType.SMS
    active: bool = False

    @model_validator(mode="after")
    def _active_requires_id(self) -> "MfaChallenge":
        if self.active and not self.mfa_id:
            raise ValueError("active challenge requires a non-empty mfa_id")
        return self


class Session(BaseModel):
    """Snapshot of the committed session. Authenticated iff token is set."""

    token: str = ""
    refresh_token: str = ""
    user_info: UserProfile = Field(default_factory=UserProfile)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)
