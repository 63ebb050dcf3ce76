"""Base formatter for CLI output."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, TypeVar

from rich.console import Console, RenderableType

T = TypeVar("T")


class OutputFormat(str, Enum):
    """How a command prints its result."""

    TEXT = "text"
    JSON = "json"


class OutputFormatter(ABC, Generic[T]):
    """Turn command results into rich renderables or JSON documents.

    Subclasses provide both views of the data; printing and capturing as a
    string are shared.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @abstractmethod
    def render(self, data: T) -> RenderableType:
        """Build the human readable view of ``data``."""

    @abstractmethod
    def to_json(self, data: T) -> str:
        """Serialize ``data`` as a JSON document."""

    def format(self, data: T, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        if format_type == OutputFormat.JSON:
            return self.to_json(data)
        buffer = io.StringIO()
        Console(file=buffer, width=120, emoji=False, highlight=False).print(
            self.render(data)
        )
        return buffer.getvalue()

    def print(self, data: T, format_type: OutputFormat = OutputFormat.TEXT) -> None:
        # JSON bypasses rich so the document is never highlighted or wrapped
        if format_type == OutputFormat.JSON:
            self.console.out(self.to_json(data), highlight=False)
        else:
            self.console.print(self.render(data))
