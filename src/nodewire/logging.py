"""Structured logging configuration for Nodewire.

Logs go through structlog: JSON lines in production, colored console output
in development. While a propagation runs, its origin path is bound to the
logging context so every event it emits (limit warnings, per-update stats)
can be traced back to the write that started it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor

_configured = False


def configure_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure structured logging for Nodewire.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format: "json" for machine-readable lines, "text" for the console.
    """
    global _configured

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if format.lower() == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def configure_from_settings() -> None:
    """Configure logging from the global ``NODEWIRE_LOG_*`` settings."""
    from nodewire.config import settings

    configure_logging(level=settings.log_level, format=settings.log_format)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, configuring from settings on first use."""
    if not _configured:
        configure_from_settings()

    return structlog.get_logger(name)  # type: ignore[no-any-return]


@contextmanager
def propagation_context(origin_path: str) -> Iterator[None]:
    """Tag every log event emitted inside the block with ``propagation_origin``.

    Nested blocks (a propagation started while another one is running) keep
    the outer origin once they exit.

    Example:
        ```python
        with propagation_context("node_a1b2.miles"):
            logger.warning("Propagation limit exceeded", limit=64)
            # -> {..., "propagation_origin": "node_a1b2.miles"}
        ```
    """
    tokens = structlog.contextvars.bind_contextvars(propagation_origin=origin_path)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


logger = get_logger("nodewire")
