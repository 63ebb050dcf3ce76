"""lexdialogue: a reader and player for the Lex dialogue scripting language.

Scripts mix narrative prose, speaker lines, response choices, actors with
properties, typed variables, external function declarations and section
navigation. :func:`parse` turns script text into a :class:`Dialogue` and
:func:`play` walks it interactively.
"""

__version__ = "0.1.0"

from .config import LexDialogueSettings, get_logger, get_settings
from .exceptions import (
    ConfigurationError,
    EmptyDialogueError,
    ExportError,
    LexDialogueError,
    PlaybackError,
)
from .export import ExportFormat, dialogue_from_dict, dialogue_to_dict, export_dialogue
from .parser import Dialogue, DialogueParser, ParseResult, parse, parse_value
from .player import BufferedSink, ConsoleSink, DialoguePlayer, PlaybackStatus, play

__all__ = [
    "BufferedSink",
    "ConfigurationError",
    "ConsoleSink",
    "Dialogue",
    "DialogueParser",
    "DialoguePlayer",
    "EmptyDialogueError",
    "ExportError",
    "ExportFormat",
    "LexDialogueError",
    "LexDialogueSettings",
    "ParseResult",
    "PlaybackError",
    "PlaybackStatus",
    "__version__",
    "dialogue_from_dict",
    "dialogue_to_dict",
    "export_dialogue",
    "get_logger",
    "get_settings",
    "parse",
    "parse_value",
    "play",
]
