"""
Structured Logging

Every store mutation, remote-store failure and bootstrap step is logged
as a structured event. Logging never raises into the calling flow.

Modules obtain a logger with ``get_logger(__name__)``; the first call
configures structlog from the application settings.
"""

import logging
import sys
from typing import Optional

import structlog

from expense_tracker.config import AppSettings, get_settings

_configured = False


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Safe to call repeatedly; later calls re-apply the settings.
    """
    global _configured
    settings = settings or get_settings().app

    level = getattr(logging, settings.log_level)
    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(logging.StreamHandler(sys.stdout))
    root.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a named structured logger.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
