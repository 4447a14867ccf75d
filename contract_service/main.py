"""ASGI entry point: ``uvicorn contract_service.main:app``."""

from __future__ import annotations

from contract_service.app.main import create_app

app = create_app()
