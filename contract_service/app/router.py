"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract_service.core.settings import get_app_settings
from contract_service.features.health.router import router as health_router
from contract_service.features.metrics.router import router as metrics_router
from contract_service.features.notifications.router import router as notifications_router
from contract_service.features.workflows.router import router as workflows_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from contract_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Feature routers are mounted under the API prefix; health and metrics
    stay at the root for probes and scrapers.
    """
    settings = app_settings or get_app_settings()

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(notifications_router, prefix=settings.api_prefix)
    app.include_router(workflows_router, prefix=settings.api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": settings.api_prefix})
