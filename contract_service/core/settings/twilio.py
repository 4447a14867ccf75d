"""SMS and WhatsApp provider settings (Twilio Messages API).

Environment variables use TWILIO_ prefix.
Example: TWILIO_ACCOUNT_SID=ACxxx, TWILIO_AUTH_TOKEN=xxx, TWILIO_PHONE_NUMBER=+15005550006
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TwilioSettings(BaseSettings):
    """Credentials and sender numbers for the SMS and WhatsApp channels."""

    account_sid: str | None = Field(default=None, description="Twilio account SID")
    auth_token: SecretStr | None = Field(default=None, description="Twilio auth token")
    phone_number: str | None = Field(
        default=None,
        description="Sender number for SMS (E.164)",
    )
    whatsapp_number: str | None = Field(
        default=None,
        description="Sender number for WhatsApp (E.164, without the whatsapp: prefix)",
    )
    whatsapp_template_sid: str | None = Field(
        default=None,
        description="Default WhatsApp content template. When set, template mode replaces free-form bodies",
    )
    api_base: str = Field(
        default="https://api.twilio.com/2010-04-01",
        description="Twilio REST API base URL",
    )
    timeout: float = Field(default=30.0, ge=1.0, le=300.0, description="HTTP timeout in seconds")
    default_region: str = Field(
        default="OM",
        min_length=2,
        max_length=2,
        description="Region used to parse phone numbers written without a country code",
    )

    model_config = SettingsConfigDict(
        env_prefix="TWILIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.account_sid) and self.auth_token is not None and bool(
            self.auth_token.get_secret_value()
        )


__all__ = ["TwilioSettings"]
