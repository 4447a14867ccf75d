"""Workflow engine settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    """Limits applied to workflow runs.

    Environment variables use WORKFLOW_ prefix.
    Example: WORKFLOW_MAX_STEP_INVOCATIONS=500
    """

    max_step_invocations: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on step invocations per execution (guards against jump cycles)",
    )
    webhook_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP timeout for webhook steps",
    )
    history_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Default number of executions returned by history queries",
    )

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )


__all__ = ["WorkflowSettings"]
