"""Index-based cursor over the trimmed lines of a dialogue script."""

from __future__ import annotations


class LineCursor:
    """Walk trimmed physical lines with one line of lookahead.

    Empty lines are kept so that multi-line blocks can stop on them.
    """

    def __init__(self, text: str) -> None:
        self._lines = [line.strip() for line in text.splitlines()]
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._lines)

    @property
    def line_number(self) -> int:
        """1-based number of the most recently consumed line (0 before any)."""
        return self._index

    def peek(self) -> str | None:
        """Return the next line without consuming it."""
        if self.exhausted:
            return None
        return self._lines[self._index]

    def next(self) -> str | None:
        """Consume and return the next line."""
        line = self.peek()
        if line is not None:
            self._index += 1
        return line

    def __len__(self) -> int:
        return len(self._lines)
