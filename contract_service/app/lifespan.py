"""Startup and shutdown hooks for the API process."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from contract_service.core.settings import get_app_settings, get_db_settings, get_logging_settings
from contract_service.infra.database import close_database, init_database
from contract_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging(get_logging_settings())
    db_settings = get_db_settings()

    logger.info(
        "Starting %s",
        app.title,
        extra={
            "service": get_app_settings().service_name,
            "version": app.version,
            "database": "configured" if db_settings.is_configured else "local sqlite",
            "operation": "app.startup",
        },
    )
    # Only the local SQLite fallback gets tables created at startup
    await init_database(create_tables=db_settings.is_sqlite)

    try:
        yield
    finally:
        await close_database()
        logger.info("Stopped", extra={"operation": "app.shutdown"})
