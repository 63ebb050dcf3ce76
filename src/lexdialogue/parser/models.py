"""Data models for parsed dialogue documents.

Values, steps and lines are closed unions of small dataclasses; callers
dispatch on them with ``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

META_SECTION_NAME = "Meta"


# Values


@dataclass(frozen=True)
class TextValue:
    """Free text value."""

    value: str


@dataclass(frozen=True)
class NumberValue:
    """64-bit float value."""

    value: float


@dataclass(frozen=True)
class BooleanValue:
    """Boolean value."""

    value: bool


@dataclass(frozen=True)
class ArrayValue:
    """Ordered list of raw strings. Elements are never type-inferred."""

    items: tuple[str, ...] = ()


Value: TypeAlias = TextValue | NumberValue | BooleanValue | ArrayValue


# Lines rendered inside a page


@dataclass
class TextLine:
    """Plain prose line."""

    text: str


@dataclass
class SpeakerText:
    """A line spoken by ``speaker``.

    ``speaker`` is the lowercased actor id for ``@id: text`` lines and the
    raw label for any other ``label: text`` line.
    """

    speaker: str
    text: str


@dataclass
class Response:
    """A player response choice.

    ``pages`` is reserved for nested choice trees; the grammar does not
    populate it.
    """

    text: str
    pages: list[Step] = field(default_factory=list)


Line: TypeAlias = TextLine | SpeakerText | Response


# Steps


@dataclass
class Comment:
    """Author comment, no effect at playback."""

    text: str


@dataclass
class LogInfo:
    """Informational log message."""

    text: str


@dataclass
class LogWarning:
    """Warning log message."""

    text: str


@dataclass
class LogError:
    """Error log message, emitted on the error stream."""

    text: str


@dataclass
class Page:
    """Block of lines presented together as one turn."""

    lines: list[Line] = field(default_factory=list)


@dataclass
class VariableAssign:
    """Replace a variable's value at playback."""

    name: str
    value: Value


@dataclass
class SectionBounce:
    """Call a section and return to the following step afterwards."""

    target: str


@dataclass
class SectionJump:
    """Permanently redirect playback to a section."""

    target: str


@dataclass
class EndJump:
    """End the current branch, returning from the nearest bounce if any."""


@dataclass
class TerminateJump:
    """End the whole session immediately."""


Step: TypeAlias = (
    Comment
    | LogInfo
    | LogWarning
    | LogError
    | Page
    | VariableAssign
    | SectionBounce
    | SectionJump
    | EndJump
    | TerminateJump
)


# Document


@dataclass
class Actor:
    """A named speaker with typed properties."""

    name: str
    properties: dict[str, Value] = field(default_factory=dict)


@dataclass
class Function:
    """External function declaration. Nothing in the core invokes it."""

    args: dict[str, Value] | None = None
    result: Value | None = None


@dataclass
class Section:
    """Named, ordered sequence of steps."""

    name: str
    steps: list[Step] = field(default_factory=list)


@dataclass
class Dialogue:
    """A parsed dialogue document.

    Actor, variable and function keys are always lowercase.
    """

    actors: dict[str, Actor] = field(default_factory=dict)
    variables: dict[str, Value] = field(default_factory=dict)
    functions: dict[str, Function] = field(default_factory=dict)
    sections: list[Section] = field(default_factory=list)

    def find_section(self, name: str) -> int | None:
        """Return the index of the first section called ``name``, if any."""
        for index, section in enumerate(self.sections):
            if section.name == name:
                return index
        return None

    def display_name(self, speaker: str) -> str:
        """Resolve a speaker key to its actor display name, else the key."""
        actor = self.actors.get(speaker)
        return actor.name if actor is not None else speaker
