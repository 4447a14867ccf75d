"""Exception handlers rendering errors as RFC 7807 problem details."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from contract_service.core.exceptions import AppException

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(
    request: Request,
    status_code: int,
    detail: str,
    *,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    **extra: Any,
) -> JSONResponse:
    body: dict[str, Any] = {
        "type": type_,
        "title": title or HTTPStatus(status_code).phrase,
        "status": status_code,
        "detail": detail,
        "instance": instance or request.url.path,
        **extra,
    }
    return JSONResponse(status_code=status_code, content=body, media_type=PROBLEM_MEDIA_TYPE)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    status_code = int(exc.status_code)
    logger.warning(
        "Request rejected",
        extra={
            "path": request.url.path,
            "method": request.method,
            "problem_type": exc.type,
            "status_code": status_code,
            "operation": "http.app_exception",
        },
    )
    return problem_response(
        request,
        status_code,
        exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance,
        **exc.extra,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every invalid field with its dotted location."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "errors": len(errors), "operation": "http.validation"},
    )
    return problem_response(
        request,
        HTTPStatus.UNPROCESSABLE_ENTITY,
        "Request validation failed",
        type_="validation-error",
        errors=errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        extra={"path": request.url.path, "method": request.method, "operation": "http.unhandled"},
    )
    return problem_response(
        request,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        type_="internal-error",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["configure_exception_handlers", "problem_response"]
