"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from contract_service.app.exception_handlers import configure_exception_handlers
from contract_service.app.lifespan import lifespan
from contract_service.app.router import setup_routers
from contract_service.core.settings import get_app_settings

DESCRIPTION = (
    "Notification dispatch over email, SMS, WhatsApp and in-app channels, "
    "and execution of database-defined workflows."
)


def create_app() -> FastAPI:
    """Build the app: settings-driven metadata, problem-details errors, feature routers.

    Database and logging are initialized in ``lifespan``, so building the app
    has no side effects and tests can override dependencies before the first
    request.
    """
    settings = get_app_settings()
    app = FastAPI(
        title=settings.title,
        version=settings.version,
        description=DESCRIPTION,
        debug=settings.debug,
        lifespan=lifespan,
    )
    configure_exception_handlers(app)
    setup_routers(app, settings)
    return app
