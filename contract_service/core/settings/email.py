"""Email provider settings (Resend HTTP API).

Environment variables use RESEND_ prefix.
Example: RESEND_API_KEY=re_xxx, RESEND_FROM_EMAIL="Contracts <noreply@example.com>"
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmailSettings(BaseSettings):
    """Transactional email configuration.

    A missing API key leaves the email channel unconfigured; sends then fail
    with a "not configured" result instead of raising.
    """

    api_key: SecretStr | None = Field(
        default=None,
        description="Resend API key",
    )
    from_email: str = Field(
        default="SmartPRO <noreply@portal.thesmartpro.io>",
        min_length=3,
        max_length=255,
        description="Sender address (optionally with display name)",
    )
    api_base: str = Field(
        default="https://api.resend.com",
        description="Resend API base URL",
    )
    timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP timeout for provider calls in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="RESEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_configured(self) -> bool:
        return self.api_key is not None and bool(self.api_key.get_secret_value())


__all__ = ["EmailSettings"]
