"""
Structlog configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from dehook.core.config import HookSettings, get_settings
from .context import add_trigger_context


def configure_logging(settings: Optional[HookSettings] = None) -> None:
    """
    Configure stdlib logging and structlog from settings.

    Usage:
        from dehook import configure_logging

        configure_logging()  # reads DEHOOK_LOG_LEVEL / DEHOOK_LOG_FORMAT
    """
    settings = settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=settings.log_level_value,
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_trigger_context,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.log_format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
