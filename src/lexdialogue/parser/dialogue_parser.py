"""Dialogue script parser.

Turns raw script text into a :class:`Dialogue` in a single forward pass.
Each line is offered to an ordered list of classifiers; the first that
accepts it wins. Parsing never fails: anything unrecognised becomes a plain
text line on a page, and suspicious input is reported as a warning.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lexdialogue.config import get_logger
from lexdialogue.parser import syntax
from lexdialogue.parser.cursor import LineCursor
from lexdialogue.parser.models import (
    META_SECTION_NAME,
    Actor,
    Comment,
    Dialogue,
    EndJump,
    Function,
    Line,
    LogError,
    LogInfo,
    LogWarning,
    Page,
    Response,
    Section,
    SectionBounce,
    SectionJump,
    SpeakerText,
    Step,
    TerminateJump,
    TextLine,
    TextValue,
    Value,
    VariableAssign,
)
from lexdialogue.parser.values import parse_value

logger = get_logger(__name__)


@dataclass
class ParseResult:
    """A parsed document plus the advisory warnings raised while parsing."""

    dialogue: Dialogue
    warnings: list[str] = field(default_factory=list)


class DialogueParser:
    """Parse dialogue script text into a :class:`Dialogue`."""

    def __init__(self) -> None:
        self._dialogue = Dialogue()
        self._warnings: list[str] = []
        self._cursor = LineCursor("")

    def parse(self, text: str) -> ParseResult:
        """Parse script text.

        Args:
            text: Raw dialogue script

        Returns:
            ParseResult holding the document and any warnings
        """
        self._dialogue = Dialogue()
        self._warnings = []
        self._cursor = LineCursor(text)

        current = Section(name=META_SECTION_NAME)

        while not self._cursor.exhausted:
            line = self._cursor.next()
            if not line:
                continue

            new_section = self._parse_section(line)
            if new_section is not None:
                if current.steps:
                    self._dialogue.sections.append(current)
                current = new_section
                continue

            if self._parse_actor_definition(line):
                continue

            step = self._parse_log_step(line) or self._parse_comment_step(line)
            if step is not None:
                current.steps.append(step)
                continue

            # Declarations populate the document, not the current section
            if self._parse_function_definition(line):
                continue

            if self._parse_variable_definition(line):
                continue

            step = (
                self._parse_variable_assignment(line)
                or self._parse_section_bounce(line)
                or self._parse_section_jump(line)
                or self._parse_page(line)
            )
            current.steps.append(step)

        # The section in progress is kept even when empty
        self._dialogue.sections.append(current)

        logger.debug(
            "Parsed dialogue",
            lines=len(self._cursor),
            sections=len(self._dialogue.sections),
            actors=len(self._dialogue.actors),
            variables=len(self._dialogue.variables),
            functions=len(self._dialogue.functions),
            warnings=len(self._warnings),
        )

        return ParseResult(dialogue=self._dialogue, warnings=self._warnings)

    def _warn(self, message: str) -> None:
        warning = f"line {self._cursor.line_number}: {message}"
        logger.debug("Parse warning", warning=warning)
        self._warnings.append(warning)

    def _parse_section(self, line: str) -> Section | None:
        """Parse a section header: ``# name``."""
        if not line.startswith(syntax.SECTION):
            return None
        return Section(name=line[len(syntax.SECTION) :].strip())

    def _parse_actor_definition(self, line: str) -> bool:
        """Parse an actor header and its property block.

        ``@id`` followed by ``key: value`` lines. The block stops at an empty
        line, a new construct, or a line that is not ``key: value``; that
        line is left for the next classifier.
        """
        if not line.startswith(syntax.ACTOR):
            return False

        header = line[len(syntax.ACTOR) :]
        # `@id: text` is a spoken line, not a definition
        if syntax.SEPARATOR in header:
            return False

        actor_id = header.strip()
        properties: dict[str, Value] = {}

        while True:
            next_line = self._cursor.peek()
            if next_line is None or syntax.is_new_step(next_line):
                break

            name, separator, raw_value = next_line.partition(syntax.SEPARATOR)
            if not separator:
                break

            self._cursor.next()
            properties[name.strip().lower()] = parse_value(raw_value.strip())

        name_override = properties.get("name")
        if isinstance(name_override, TextValue):
            display_name = name_override.value
        else:
            display_name = actor_id

        self._dialogue.actors[actor_id.lower()] = Actor(
            name=display_name, properties=properties
        )
        return True

    def _parse_log_step(self, line: str) -> Step | None:
        """Parse ``/// info``, ``//? warning`` or ``//! error``."""
        if line.startswith(syntax.LOG_INFO):
            return LogInfo(line[len(syntax.LOG_INFO) :].strip())
        if line.startswith(syntax.LOG_WARNING):
            return LogWarning(line[len(syntax.LOG_WARNING) :].strip())
        if line.startswith(syntax.LOG_ERROR):
            return LogError(line[len(syntax.LOG_ERROR) :].strip())
        return None

    def _parse_comment_step(self, line: str) -> Step | None:
        """Parse ``// comment``."""
        if not line.startswith(syntax.COMMENT):
            return None
        return Comment(line[len(syntax.COMMENT) :].strip())

    def _parse_function_definition(self, line: str) -> bool:
        """Parse ``!name[(arg[=default], ...)][: default_return]``."""
        if not line.startswith(syntax.FUNCTION):
            return False

        signature = line[len(syntax.FUNCTION) :]
        args: dict[str, Value] | None = None
        result: Value | None = None

        signature, separator, return_value = signature.partition(syntax.SEPARATOR)
        if separator:
            result = parse_value(return_value.strip())

        signature, separator, arg_definitions = signature.partition(syntax.ARGS_START)
        if separator:
            arg_definitions = arg_definitions.rstrip().rstrip(syntax.ARGS_END).strip()
            if arg_definitions:
                args = {}
                for definition in arg_definitions.split(syntax.ARG_SEPARATOR):
                    arg_name, _, default = definition.partition(syntax.ASSIGNMENT)
                    args[arg_name.strip()] = parse_value(default.strip())

        self._dialogue.functions[signature.strip().lower()] = Function(
            args=args, result=result
        )
        return True

    def _parse_variable_definition(self, line: str) -> bool:
        """Parse ``$name: value`` into the static variable table."""
        if not line.startswith(syntax.VARIABLE):
            return False

        name, separator, raw_value = line[len(syntax.VARIABLE) :].partition(
            syntax.SEPARATOR
        )
        if not separator:
            return False

        self._dialogue.variables[name.strip().lower()] = parse_value(raw_value.strip())
        return True

    def _parse_variable_assignment(self, line: str) -> Step | None:
        """Parse ``$name = value`` into an assignment step."""
        if not line.startswith(syntax.VARIABLE):
            return None

        name, separator, raw_value = line[len(syntax.VARIABLE) :].partition(
            syntax.ASSIGNMENT
        )
        if not separator:
            return None

        name = name.strip().lower()
        if name not in self._dialogue.variables:
            self._warn(f"static variable definition not found ({name})")

        return VariableAssign(name=name, value=parse_value(raw_value.strip()))

    def _parse_section_bounce(self, line: str) -> Step | None:
        """Parse ``=><= section``."""
        if not line.startswith(syntax.BOUNCE):
            return None
        return SectionBounce(line[len(syntax.BOUNCE) :].strip())

    def _parse_section_jump(self, line: str) -> Step | None:
        """Parse ``=> section``, ``=> end`` or ``=> terminate``."""
        if not line.startswith(syntax.JUMP):
            return None

        target = line[len(syntax.JUMP) :].strip()
        keyword = target.lower()
        if keyword == syntax.END_KEYWORD:
            return EndJump()
        if keyword == syntax.TERMINATE_KEYWORD:
            return TerminateJump()
        return SectionJump(target)

    def _parse_page(self, line: str) -> Step:
        """Collect ``line`` and the following lines up to a new construct."""
        lines = [self._parse_text_line(line)]

        while True:
            next_line = self._cursor.peek()
            if next_line is None or syntax.is_new_step(next_line):
                break
            self._cursor.next()
            lines.append(self._parse_text_line(next_line))

        return Page(lines=lines)

    def _parse_text_line(self, line: str) -> Line:
        """Classify one page line as a response, speaker text or plain text."""
        if line.startswith(syntax.RESPONSE):
            return Response(text=line[len(syntax.RESPONSE) :].strip())

        speaker, separator, text = line.partition(syntax.SEPARATOR)
        text = text.strip()
        if separator and text:
            speaker = speaker.strip()
            if speaker.startswith(syntax.ACTOR):
                speaker = speaker[len(syntax.ACTOR) :].strip().lower()
                if speaker not in self._dialogue.actors:
                    self._warn(f"actor definition not found ({speaker})")
            return SpeakerText(speaker=speaker, text=text)

        # Unparsed lines fall back to plain text so they stay visible
        return TextLine(line)


def parse(text: str) -> ParseResult:
    """Parse dialogue script text.

    Args:
        text: Raw dialogue script

    Returns:
        ParseResult holding the document and any warnings
    """
    return DialogueParser().parse(text)
