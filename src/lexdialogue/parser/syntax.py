"""Dialogue syntax constants.

String literals that identify each syntax element during parsing.
"""

from __future__ import annotations

# Element prefixes
SECTION = "#"
ACTOR = "@"
FUNCTION = "!"
VARIABLE = "$"
RESPONSE = "-"

# Comments and log levels. The longer prefixes must be tried before COMMENT.
COMMENT = "//"
LOG_INFO = "///"
LOG_WARNING = "//?"
LOG_ERROR = "//!"

# Navigation. BOUNCE must be tried before JUMP.
BOUNCE = "=><="
JUMP = "=>"

# Jump keywords, matched case-insensitively
END_KEYWORD = "end"
TERMINATE_KEYWORD = "terminate"

# Delimiters
SEPARATOR = ":"
ASSIGNMENT = "="
ARRAY_START = "["
ARRAY_END = "]"
ARRAY_ITEM_SEPARATOR = ","
ARGS_START = "("
ARGS_END = ")"
ARG_SEPARATOR = ","

# Boolean literals, matched case-sensitively
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

# Any of these starts a new construct and ends a multi-line block
NEW_STEP_PREFIXES = (
    COMMENT,
    ACTOR,
    SECTION,
    FUNCTION,
    VARIABLE,
    JUMP,
)


def is_new_step(line: str) -> bool:
    """Return True if ``line`` is empty or opens a new construct."""
    if not line:
        return True
    return line.startswith(NEW_STEP_PREFIXES)
