"""Declarative base, column mixins and the generic repository used by feature models."""

from __future__ import annotations

from contract_service.core.database.base import (
    AuditColumnsMixin,
    Base,
    JSONType,
    TimestampMixin,
    UUIDPKMixin,
    UUIDTimestampedBase,
)
from contract_service.core.database.exceptions import NotFoundError, RepositoryError
from contract_service.core.database.repository import BaseRepository

__all__ = [
    "AuditColumnsMixin",
    "Base",
    "BaseRepository",
    "JSONType",
    "NotFoundError",
    "RepositoryError",
    "TimestampMixin",
    "UUIDPKMixin",
    "UUIDTimestampedBase",
]
