"""Interactive dialogue playback."""

from __future__ import annotations

from .engine import (
    COMPLETED_MESSAGE,
    DialoguePlayer,
    PlaybackPosition,
    PlaybackStatus,
    play,
)
from .output import BufferedSink, ConsoleSink, OutputSink

__all__ = [
    "COMPLETED_MESSAGE",
    "BufferedSink",
    "ConsoleSink",
    "DialoguePlayer",
    "OutputSink",
    "PlaybackPosition",
    "PlaybackStatus",
    "play",
]
