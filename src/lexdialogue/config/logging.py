"""Logging configuration for lexdialogue.

structlog and stdlib records share one pipeline: structlog events are
wrapped for :class:`structlog.stdlib.ProcessorFormatter`, so the renderer
chosen by ``log_format`` applies to both, on stderr and in the log file.
Dialogue output owns stdout and never carries log records.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from lexdialogue.config.settings import LexDialogueSettings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def make_renderer(log_format: str) -> Any:
    """Return the final structlog processor for ``log_format``."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "structured":
        return structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "logger", "event"],
            drop_missing=True,
        )
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(settings: LexDialogueSettings) -> None:
    """Route structlog and stdlib logging through the configured handlers.

    Args:
        settings: Provides ``log_level``, ``log_format``, ``log_file`` and
            ``debug``.
    """
    level = logging.getLevelNamesMapping()[settings.log_level]
    formatter = ProcessorFormatter(
        processors=[
            ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            make_renderer(settings.log_format),
        ],
        foreign_pre_chain=SHARED_PROCESSORS,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                settings.log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    processors: list[Any] = [structlog.stdlib.filter_by_level, *SHARED_PROCESSORS]
    if settings.debug:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )
    processors.append(ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
