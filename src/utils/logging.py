# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Logging setup for the CourseGit API.

Modules log through the standard library. The provisioning workflow uses
structlog loggers so each stage is one event with its fields as keys.
Both end up on stdout: rendered for the console in development, as JSON
lines otherwise.

Example:
    >>> setup_logging(get_settings())
    >>> logger = get_logger(__name__)
    >>> with bound_context(group_id=42):
    ...     logger.info("group_provisioning_stage", stage="repo_resolved")
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from src.core.config.settings import Settings

# Libraries whose INFO output drowns out the workflow events
QUIET_LOGGERS = ("uvicorn.access", "aiohttp", "sqlalchemy.engine", "asyncio")


def _renderer(settings: "Settings") -> list[Processor]:
    if settings.is_development or settings.debug:
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(settings: "Settings") -> None:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Application settings; log_level, debug and environment
            are read.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def bound_context(**fields: object) -> AbstractContextManager[None]:
    """Attach fields to every log event inside the with block.

    Fields bound before the block are restored when it exits.

    Example:
        >>> with bound_context(group_id=42):
        ...     logger.info("group_provisioning_stage", stage="authorized")
    """
    return structlog.contextvars.bound_contextvars(**fields)
