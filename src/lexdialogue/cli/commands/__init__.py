"""lexdialogue CLI commands."""

from __future__ import annotations

from lexdialogue.cli.commands.convert import convert_command
from lexdialogue.cli.commands.debug import debug_command
from lexdialogue.cli.commands.play import play_command

__all__ = [
    "convert_command",
    "debug_command",
    "play_command",
]
