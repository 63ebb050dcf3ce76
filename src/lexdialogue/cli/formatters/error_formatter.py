"""Formatter for command failures."""

from __future__ import annotations

import json

from rich.text import Text

from lexdialogue.cli.formatters.base import OutputFormatter
from lexdialogue.exceptions import LexDialogueError


class ErrorFormatter(OutputFormatter[Exception]):
    """Show an exception as a message with hint, or as a JSON error object."""

    def render(self, error: Exception) -> Text:
        if not isinstance(error, LexDialogueError):
            return Text(f"Error: {error}", style="red")
        text = Text(f"✗ {error.message}", style="red")
        if error.hint:
            text.append(f"\n→ {error.hint}", style="yellow")
        return text

    def to_json(self, error: Exception) -> str:
        if isinstance(error, LexDialogueError):
            payload = error.to_dict()
        else:
            payload = {"type": type(error).__name__, "message": str(error)}
        return json.dumps({"success": False, "error": payload}, indent=2, default=str)
