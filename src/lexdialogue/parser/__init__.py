"""Dialogue script parser for lexdialogue."""

from __future__ import annotations

from .dialogue_parser import DialogueParser, ParseResult, parse
from .models import (
    META_SECTION_NAME,
    Actor,
    ArrayValue,
    BooleanValue,
    Comment,
    Dialogue,
    EndJump,
    Function,
    Line,
    LogError,
    LogInfo,
    LogWarning,
    NumberValue,
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
from .values import parse_value

__all__ = [
    "META_SECTION_NAME",
    "Actor",
    "ArrayValue",
    "BooleanValue",
    "Comment",
    "Dialogue",
    "DialogueParser",
    "EndJump",
    "Function",
    "Line",
    "LogError",
    "LogInfo",
    "LogWarning",
    "NumberValue",
    "Page",
    "ParseResult",
    "Response",
    "Section",
    "SectionBounce",
    "SectionJump",
    "SpeakerText",
    "Step",
    "TerminateJump",
    "TextLine",
    "TextValue",
    "Value",
    "VariableAssign",
    "parse",
    "parse_value",
]
