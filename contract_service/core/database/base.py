"""Declarative base and shared column mixins.

Every table uses a random UUID primary key and carries created/updated
timestamps. JSON columns use ``JSONType`` so the same models run on Postgres
(JSONB) and on SQLite in tests and local development.

Example:
    class Workflow(UUIDTimestampedBase):
        __tablename__ = "workflows"
        name: Mapped[str] = mapped_column(String(255))
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, MetaData, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

# Deterministic constraint and index names
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

JSONType = JSONB().with_variant(JSON(), "sqlite")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class UUIDPKMixin:
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """created_at / updated_at, set by Python and by server default for raw inserts."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )


class AuditColumnsMixin:
    """Initiating user; null for system-triggered rows."""

    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)


class UUIDTimestampedBase(Base, UUIDPKMixin, TimestampMixin):
    __abstract__ = True


__all__ = [
    "NAMING_CONVENTION",
    "AuditColumnsMixin",
    "Base",
    "JSONType",
    "TimestampMixin",
    "UUIDPKMixin",
    "UUIDTimestampedBase",
]
