"""Output formatters for the lexdialogue CLI."""

from __future__ import annotations

from lexdialogue.cli.formatters.base import OutputFormat, OutputFormatter
from lexdialogue.cli.formatters.dialogue_formatter import DialogueFormatter
from lexdialogue.cli.formatters.error_formatter import ErrorFormatter

__all__ = [
    "DialogueFormatter",
    "ErrorFormatter",
    "OutputFormat",
    "OutputFormatter",
]
