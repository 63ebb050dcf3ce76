"""Errors raised by lexdialogue.

Parsing never raises: malformed lines degrade to plain text and are reported
as warnings. These exceptions cover what can genuinely fail around it:
configuration, reading scripts, starting playback and exporting.
"""

from __future__ import annotations

from typing import Any


class LexDialogueError(Exception):
    """Base error carrying a message, an optional fix-it hint and details.

    The CLI prints ``message`` and ``hint``; ``details`` is structured data
    for logs and JSON error output.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.hint = hint
        self.details = details or {}
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Render the error as multi-line text for tracebacks and logs."""
        lines = [f"Error: {self.message}"]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        if self.details:
            lines.append("Details:")
            lines.extend(f"  {key}: {value}" for key, value in self.details.items())
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "hint": self.hint,
            "details": self.details,
        }


class ConfigurationError(LexDialogueError):
    """A settings source is unreadable, unsupported or misspelled."""


class DialogueFileNotFoundError(LexDialogueError):
    """A dialogue script could not be read."""


class PlaybackError(LexDialogueError):
    """Playback cannot proceed."""


class EmptyDialogueError(PlaybackError):
    """The dialogue has no section or no step to start playback from."""


class ExportError(LexDialogueError):
    """A dialogue cannot be encoded in the requested format."""
