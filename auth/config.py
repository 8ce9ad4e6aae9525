"""Auth session configuration."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "AUTH_"


class AuthConfig(BaseModel):
    """
    Auth session configuration.

    Endpoint paths are joined onto api_base_url by the HTTP transport.
    Durations use their natural units (seconds for requests, hours for
    storage, milliseconds for UI notifications).
    """

    # Backend
    api_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the auth backend",
    )
    login_path: str = Field(default="/auth/login")
    mfa_login_path: str = Field(default="/auth/login/mfa")
    send_code_path: str = Field(default="/auth/mfa/send-code")
    user_info_path: str = Field(default="/auth/user-info")
    mfa_header_name: str = Field(
        default="x-authenticate",
        description="Response header carrying the MFA challenge",
    )
    request_timeout_seconds: int = Field(
        default=10,
        description="Per-request timeout for auth calls",
        ge=1,
        le=120,
    )

    # Storage
    storage_key_prefix: str = Field(
        default="auth:",
        description="Key prefix for persisted session data",
        min_length=1,
    )
    storage_expiry_hours: int | None = Field(
        default=None,
        description="TTL for persisted session data (None keeps it until logout)",
        ge=1,
        le=2160,
    )

    # Notifications
    notification_duration_ms: int = Field(
        default=3000,
        description="How long the welcome notification stays visible",
        ge=0,
    )
    login_success_title: str = Field(default="Login successful!")
    login_success_template: str = Field(
        default="Welcome back, {user_name}!",
        description="Welcome message, formatted with the profile's user_name",
    )

    # Demo
    enable_demo_accounts: bool = Field(
        default=False,
        description="Allow switching roles with the built-in demo accounts",
    )

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "AuthConfig":
        """
        Build config from AUTH_* environment variables.

        A .env file is loaded first if present; real environment variables
        take precedence over it. Unset variables fall back to defaults.
        """
        load_dotenv(dotenv_path)

        values = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw
        return cls.model_validate(values)
