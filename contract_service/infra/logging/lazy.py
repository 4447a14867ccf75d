"""Deferred log messages.

Debug lines that format step data, recipients or rendered bodies are passed
as lambdas; they are evaluated only if the level is enabled.
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Adapter whose message (and any positional args) may be zero-arg callables.

    Example:
        lazy_logger = get_lazy_logger(__name__)
        lazy_logger.debug(lambda: f"Dispatching to {len(recipients)} recipient(s)")
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        args = tuple(arg() if callable(arg) else arg for arg in args)
        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Return a lazy adapter for ``name``; ``context`` is attached to every record."""
    return LazyLoggerAdapter(logging.getLogger(name), context)
