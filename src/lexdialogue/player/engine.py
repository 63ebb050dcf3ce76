"""Interactive playback of parsed dialogues.

The player walks a :class:`Dialogue` one step per tick. Control flow is
held in two explicit stacks of ``(section, step)`` positions: the work
stack holding the single state in flight, and the return stack of resume
points pushed by section bounces. A ``None`` return frame means the bounce
had nothing after it, so returning from it ends the session.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum

from lexdialogue.config import get_logger
from lexdialogue.exceptions import EmptyDialogueError
from lexdialogue.parser.models import (
    Comment,
    Dialogue,
    EndJump,
    Line,
    LogError,
    LogInfo,
    LogWarning,
    Page,
    Response,
    SectionBounce,
    SectionJump,
    SpeakerText,
    Step,
    TerminateJump,
    TextLine,
    Value,
    VariableAssign,
)
from lexdialogue.player.output import ConsoleSink, OutputSink

logger = get_logger(__name__)

COMPLETED_MESSAGE = "Playback completed."


class PlaybackStatus(str, Enum):
    """Lifecycle of a playback session."""

    READY = "ready"
    RUNNING = "running"
    ENDED = "ended"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class PlaybackPosition:
    """Index of a step within a section."""

    section: int
    step: int


class DialoguePlayer:
    """Stateful walk over a dialogue.

    The parsed document is never modified; assignments go to the player's
    own copy of the variable table.
    """

    def __init__(
        self,
        dialogue: Dialogue,
        sink: OutputSink | None = None,
        delay: float = 0.0,
    ) -> None:
        """Initialize the player at the first step of the first section.

        Args:
            dialogue: Parsed dialogue to play
            sink: Destination for rendered output (terminal by default)
            delay: Pause in seconds between ticks

        Raises:
            EmptyDialogueError: If there is no section or the first section
                has no steps
        """
        if not dialogue.sections:
            raise EmptyDialogueError(
                message="No sections found in dialogue",
                hint="The script is empty; add at least one line of dialogue",
            )
        first_section = dialogue.sections[0]
        if not first_section.steps:
            raise EmptyDialogueError(
                message="No steps found in first section",
                hint="Add dialogue, a log line or a jump before the next header",
                details={"section": first_section.name},
            )

        self.dialogue = dialogue
        self.sink: OutputSink = sink if sink is not None else ConsoleSink()
        self.delay = delay
        self.variables: dict[str, Value] = dict(dialogue.variables)
        self.return_stack: list[PlaybackPosition | None] = []
        self.status = PlaybackStatus.READY
        self._pending: list[PlaybackPosition] = [PlaybackPosition(0, 0)]

    @property
    def position(self) -> PlaybackPosition | None:
        """The next position to execute, if any."""
        return self._pending[-1] if self._pending else None

    @property
    def finished(self) -> bool:
        return self.status in (PlaybackStatus.ENDED, PlaybackStatus.TERMINATED)

    def run(self) -> None:
        """Tick until no navigable state remains."""
        logger.info(
            "Starting playback",
            sections=len(self.dialogue.sections),
            variables=len(self.variables),
        )
        while self.tick():
            if self.delay:
                time.sleep(self.delay)

    def tick(self) -> bool:
        """Execute one step.

        Returns:
            True while there is a next state to execute
        """
        if not self._pending:
            return False

        self.status = PlaybackStatus.RUNNING
        position = self._pending.pop()
        step = self.dialogue.sections[position.section].steps[position.step]
        logger.debug(
            "Executing step",
            section=self.dialogue.sections[position.section].name,
            step=position.step,
            kind=type(step).__name__,
        )

        next_position = self._execute(position, step)

        if self.status is PlaybackStatus.TERMINATED:
            self._finish(PlaybackStatus.TERMINATED)
            return False
        if next_position is None:
            self._finish(PlaybackStatus.ENDED)
            return False

        self._pending.append(next_position)
        return True

    def _execute(
        self, position: PlaybackPosition, step: Step
    ) -> PlaybackPosition | None:
        """Run the side effects of ``step`` and return the next position."""
        if isinstance(step, Comment):
            pass
        elif isinstance(step, (LogInfo, LogWarning)):
            self.sink.write(step.text)
        elif isinstance(step, LogError):
            self.sink.write_error(step.text)
        elif isinstance(step, VariableAssign):
            self._assign(step)
        elif isinstance(step, Page):
            self.sink.write(self.render_page(step))
        elif isinstance(step, SectionJump):
            target = self._resolve(step.target)
            if target is None:
                return self._end_branch()
            return target
        elif isinstance(step, SectionBounce):
            target = self._resolve(step.target)
            if target is not None:
                self.return_stack.append(self._fall_through(position))
                return target
        elif isinstance(step, EndJump):
            return self._end_branch()
        elif isinstance(step, TerminateJump):
            self.status = PlaybackStatus.TERMINATED
            return None

        return self._fall_through(position)

    def _assign(self, step: VariableAssign) -> None:
        if step.name not in self.variables:
            self.sink.write_error(f"Variable assignment not pre-existing: {step.name}")
            logger.info("Assigning undeclared variable", variable=step.name)
        self.variables[step.name] = step.value

    def render_page(self, page: Page) -> str:
        """Render every line of a page, one row per line."""
        return "\n".join(self.render_line(line) for line in page.lines)

    def render_line(self, line: Line) -> str:
        if isinstance(line, SpeakerText):
            return f"{self.dialogue.display_name(line.speaker)}: {line.text}"
        if isinstance(line, Response):
            return f"- {line.text}"
        if isinstance(line, TextLine):
            return line.text
        raise TypeError(f"Unknown line type: {type(line).__name__}")

    def _resolve(self, name: str) -> PlaybackPosition | None:
        """Find the first step of the section called ``name``."""
        index = self.dialogue.find_section(name)
        if index is None:
            self.sink.write_error(f"Section not found: {name}")
            logger.info("Unresolved navigation target", target=name)
            return None
        if not self.dialogue.sections[index].steps:
            self.sink.write_error(f"Section has no steps: {name}")
            logger.info("Navigation target is empty", target=name)
            return None
        return PlaybackPosition(index, 0)

    def _fall_through(self, position: PlaybackPosition) -> PlaybackPosition | None:
        """Default next state when a step does not redirect control.

        Next step in the section; at the end of a section, the pending
        bounce return point; else the next non-empty section.
        """
        sections = self.dialogue.sections
        if position.step + 1 < len(sections[position.section].steps):
            return PlaybackPosition(position.section, position.step + 1)

        if self.return_stack:
            return self.return_stack.pop()

        for index in range(position.section + 1, len(sections)):
            if sections[index].steps:
                return PlaybackPosition(index, 0)
        return None

    def _end_branch(self) -> PlaybackPosition | None:
        """Return from the nearest bounce, or end the session."""
        if self.return_stack:
            return self.return_stack.pop()
        return None

    def _finish(self, status: PlaybackStatus) -> None:
        self.status = status
        self._pending.clear()
        self.return_stack.clear()
        self.sink.write(COMPLETED_MESSAGE)
        logger.info("Playback finished", status=status.value)


def play(
    dialogue: Dialogue, sink: OutputSink | None = None, delay: float = 0.0
) -> None:
    """Play a dialogue to completion or termination.

    Args:
        dialogue: Parsed dialogue to play
        sink: Destination for rendered output (terminal by default)
        delay: Pause in seconds between steps

    Raises:
        EmptyDialogueError: If the dialogue has nothing to start from
    """
    DialoguePlayer(dialogue, sink=sink, delay=delay).run()
