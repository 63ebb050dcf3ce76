"""lexdialogue configuration module."""

from __future__ import annotations

from typing import Any

import structlog

from lexdialogue.config.logging import configure_logging
from lexdialogue.config.settings import (
    LexDialogueSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

__all__ = [
    "LexDialogueSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "get_settings",
    "get_settings_for_cli",
    "reset_settings",
    "set_settings",
]

_logging_configured = False


def get_logger(name: str) -> Any:
    """Get a structlog logger, configuring logging from settings on first use.

    The CLI reconfigures logging once its options are known; library callers
    get the settings from the environment and config files.
    """
    global _logging_configured
    if not _logging_configured:
        configure_logging(get_settings())
        _logging_configured = True
    return structlog.get_logger(name)


def reset_settings() -> None:
    """Forget loaded settings and configure logging again on next use."""
    global _logging_configured
    clear_settings_cache()
    _logging_configured = False
