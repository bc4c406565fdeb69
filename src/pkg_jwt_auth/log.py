"""
Logging helpers for pkg_jwt_auth.

Library code only calls `get_logger`, which always logs through the
standard library; configuring the pipeline is left to
the host application. `configure_logging` is a convenience for the CLI
and for apps that have no structlog setup of their own.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(log_level: str = "info", *, json_output: bool = False) -> None:
    """Configure structlog on top of the standard library logger."""
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Events always end up on the stdlib logger `name`, so an unconfigured
    host only sees them through its own logging handlers and levels.
    Processors and wrapper class still come from the structlog config.
    """
    return structlog.wrap_logger(logging.getLogger(name))
