"""Value type inference for variables, properties and function arguments."""

from __future__ import annotations

import re

from lexdialogue.parser import syntax
from lexdialogue.parser.models import (
    ArrayValue,
    BooleanValue,
    NumberValue,
    TextValue,
    Value,
)

# Float grammar: no digit separators, no inner whitespace
NUMBER_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def parse_value(text: str) -> Value:
    """Infer a value from its literal text.

    Precedence is boolean, then number, then bracketed array, then text.
    Array elements stay raw trimmed strings.

    Args:
        text: Trimmed literal text

    Returns:
        The inferred value
    """
    if text == syntax.TRUE_LITERAL:
        return BooleanValue(True)
    if text == syntax.FALSE_LITERAL:
        return BooleanValue(False)

    if NUMBER_PATTERN.fullmatch(text):
        return NumberValue(float(text))

    if (
        len(text) >= 2
        and text.startswith(syntax.ARRAY_START)
        and text.endswith(syntax.ARRAY_END)
    ):
        items = (item.strip() for item in text[1:-1].split(syntax.ARRAY_ITEM_SEPARATOR))
        return ArrayValue(tuple(item for item in items if item))

    return TextValue(text)
