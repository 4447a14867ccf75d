"""FastAPI dependencies shared across features."""

from __future__ import annotations

from .database import SessionFactoryDep, get_db_session_factory

__all__ = ["SessionFactoryDep", "get_db_session_factory"]
