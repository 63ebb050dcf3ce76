"""Output sinks for dialogue playback."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from rich.console import Console

STDOUT = "stdout"
STDERR = "stderr"

PLAIN_CONSOLE_OPTIONS: dict[str, Any] = {
    "markup": False,
    "highlight": False,
    "emoji": False,
    "soft_wrap": True,
}


@runtime_checkable
class OutputSink(Protocol):
    """Destination for rendered playback output."""

    def write(self, text: str) -> None:
        """Emit text on the standard stream."""
        ...

    def write_error(self, text: str) -> None:
        """Emit text on the error stream."""
        ...


class ConsoleSink:
    """Write playback output to the terminal through rich consoles.

    Markup, emoji codes, highlighting and wrapping are disabled so dialogue
    text such as ``[a, b]`` or ``:wave:`` is printed verbatim.
    """

    def __init__(
        self, console: Console | None = None, error_console: Console | None = None
    ) -> None:
        self.console = console or Console(**PLAIN_CONSOLE_OPTIONS)
        self.error_console = error_console or Console(
            stderr=True, **PLAIN_CONSOLE_OPTIONS
        )

    def write(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False)

    def write_error(self, text: str) -> None:
        self.error_console.print(text, markup=False, highlight=False, emoji=False)


class BufferedSink:
    """Record playback output in memory, in emission order."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def write(self, text: str) -> None:
        self.records.append((STDOUT, text))

    def write_error(self, text: str) -> None:
        self.records.append((STDERR, text))

    @property
    def stdout(self) -> list[str]:
        return [text for stream, text in self.records if stream == STDOUT]

    @property
    def stderr(self) -> list[str]:
        return [text for stream, text in self.records if stream == STDERR]
