"""SQLAlchemy models for the notifications feature."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from contract_service.core.database import JSONType, UUIDTimestampedBase


class Notification(UUIDTimestampedBase):
    """In-app notification shown in the user's notification center.

    Written by the in-app channel; one row per (recipient, dispatch call).
    The ``metadata`` column is exposed as ``extra_data`` because ``metadata``
    is reserved on declarative classes.
    """

    __tablename__ = "notifications"

    user_id: Mapped[UUID] = mapped_column(
        nullable=False,
        index=True,
        comment="Profile that receives the notification",
    )
    type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="general",
        comment="Category tag (e.g., 'workflow', 'contract')",
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    priority: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="medium",
        comment="low, medium, high, urgent",
    )
    action_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    extra_data: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSONType,
        nullable=True,
    )
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_notifications_user_read", "user_id", "read"),)


class Profile(UUIDTimestampedBase):
    """User profile (employee, employer or promoter contact details).

    Only read here, to resolve workflow notification recipients.
    """

    __tablename__ = "profiles"

    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)


__all__ = ["Notification", "Profile"]
