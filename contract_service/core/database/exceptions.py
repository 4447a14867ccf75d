"""Repository-level errors, independent of the HTTP layer."""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """A repository call could not be completed.

    ``details`` carries structured context and is appended to ``str(exc)``.
    """

    def __init__(self, message: str, **details: Any) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class NotFoundError(RepositoryError):
    """No row of ``model_name`` matched the lookup."""

    def __init__(self, model_name: str, **lookup: Any) -> None:
        self.model_name = model_name
        self.lookup = lookup
        super().__init__(f"{model_name} not found", **lookup)


__all__ = ["NotFoundError", "RepositoryError"]
