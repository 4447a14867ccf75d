"""HTTP application settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Title, version and routing of the FastAPI app, plus the bind address used by ``server run``.

    Environment variables use APP_ prefix.
    Example: APP_DEBUG=true, APP_API_PREFIX=/api/v2
    """

    service_name: str = Field(
        default="contract-service",
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Identifier used in startup logs",
    )
    title: str = Field(default="Contract Service API", min_length=1, description="OpenAPI title")
    version: str = Field(default="0.1.0", description="OpenAPI version string")
    api_prefix: str = Field(
        default="/api/v1",
        pattern=r"^/[^\s]*$",
        description="Mount point for the notifications and workflows routers",
    )
    debug: bool = Field(default=False, description="FastAPI debug mode; also echoes SQL")
    host: str = Field(default="0.0.0.0", description="Bind host for `server run`")  # noqa: S104
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port for `server run`")

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )


__all__ = ["AppSettings"]
