"""HTTP-facing exceptions rendered as RFC 7807 problem details.

Senders, the dispatcher, step executors and the workflow engine report
failures as result objects. Only route handlers raise these; the handlers in
``contract_service.app.exception_handlers`` turn them into responses.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class AppException(Exception):
    """A request that cannot be served, described as problem details.

    Subclasses pin ``status_code`` and the default ``type``; the title comes
    from the HTTP status phrase unless given.

    Example:
        raise NotFoundException(
            detail="Workflow execution 3f1c... not found",
            type="workflow-execution-not-found",
            extra={"execution_id": "3f1c..."},
        )
    """

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_type: str = "about:blank"

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        type: str | None = None,  # noqa: A002
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail)
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail
        self.type = type or self.default_type
        self.title = title or _status_phrase(self.status_code)
        self.instance = instance
        self.extra = extra or {}


class NotFoundException(AppException):
    """The addressed resource does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    default_type = "not-found"


class BadRequestException(AppException):
    """The request is well-formed JSON but cannot be acted on."""

    status_code = HTTPStatus.BAD_REQUEST
    default_type = "bad-request"


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


__all__ = ["AppException", "BadRequestException", "NotFoundException"]
