"""structlog setup for the storefront.

Modules log through stdlib ``logging.getLogger(__name__)``; consumers that
emit structured records use ``get_logger``.  Both end up on the same
stdlib handlers once ``setup_logging`` has run.  The session's
``trace_id`` is bound in structlog's context and merged into every
structlog record.
"""

from __future__ import annotations

import logging
import sys
import uuid

import structlog


def get_trace_id() -> str | None:
    return structlog.contextvars.get_contextvars().get("trace_id")


def new_trace_id() -> str:
    """Start a new trace (one per CLI run or cart session)."""
    tid = uuid.uuid4().hex
    structlog.contextvars.bind_contextvars(trace_id=tid)
    return tid


def setup_logging(level: str = "INFO", format: str = "console") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.  Unknown names fall back to INFO.
        format: "json" or "console".
    """
    if format == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
