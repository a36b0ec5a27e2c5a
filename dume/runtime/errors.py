"""Failure policy for optional window-platform queries.

Which native handles a GLFW build can hand out depends on the platform it was
compiled for. Those queries are the only calls whose failures are tolerated:
they are logged and answered with a fallback. Every other error propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias, TypeVar

T = TypeVar("T")

PlatformQueryErrors: TypeAlias = tuple[type[BaseException], ...]
PLATFORM_QUERY_ERRORS: PlatformQueryErrors = (
    RuntimeError,
    OSError,
    TypeError,
    AttributeError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Log the exception being handled, with its traceback."""
    logger.log(level, message, exc_info=True)


def query_optional(
    logger: logging.Logger,
    event: str,
    query: Callable[[], T],
    fallback: T,
) -> T:
    """Run a platform query, returning ``fallback`` if the platform lacks it."""
    try:
        return query()
    except PLATFORM_QUERY_ERRORS:
        log_recoverable(logger, event)
        return fallback


__all__ = ["PLATFORM_QUERY_ERRORS", "log_recoverable", "query_optional"]
