"""Serialization-neutral export of parsed dialogues.

Documents become plain dicts, lists and scalars. Variants use an externally
tagged shape: ``{"Text": "hi"}``, ``{"SpeakerText": {...}}``, and unit
variants as bare strings such as ``"EndJump"``.
"""

from __future__ import annotations

import base64
import json
import math
import pickle
from enum import Enum
from typing import Any

import tomli_w
import yaml

from lexdialogue.exceptions import ExportError
from lexdialogue.parser.models import (
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


class ExportFormat(str, Enum):
    """Supported interchange formats."""

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"
    PICKLE = "pickle"


def value_to_dict(value: Value) -> dict[str, Any]:
    if isinstance(value, TextValue):
        return {"Text": value.value}
    if isinstance(value, NumberValue):
        return {"Number": value.value}
    if isinstance(value, BooleanValue):
        return {"Boolean": value.value}
    if isinstance(value, ArrayValue):
        return {"Array": list(value.items)}
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def value_from_dict(data: dict[str, Any]) -> Value:
    ((tag, payload),) = data.items()
    if tag == "Text":
        return TextValue(payload)
    if tag == "Number":
        # JSON output writes non-finite numbers as null
        return NumberValue(math.nan if payload is None else float(payload))
    if tag == "Boolean":
        return BooleanValue(bool(payload))
    if tag == "Array":
        return ArrayValue(tuple(payload))
    raise ValueError(f"Unknown value tag: {tag}")


def line_to_dict(line: Line) -> dict[str, Any]:
    if isinstance(line, TextLine):
        return {"Text": line.text}
    if isinstance(line, SpeakerText):
        return {"SpeakerText": {"speaker": line.speaker, "text": line.text}}
    if isinstance(line, Response):
        return {
            "Response": {
                "text": line.text,
                "pages": [step_to_dict(step) for step in line.pages],
            }
        }
    raise TypeError(f"Unknown line type: {type(line).__name__}")


def line_from_dict(data: dict[str, Any]) -> Line:
    ((tag, payload),) = data.items()
    if tag == "Text":
        return TextLine(payload)
    if tag == "SpeakerText":
        return SpeakerText(speaker=payload["speaker"], text=payload["text"])
    if tag == "Response":
        return Response(
            text=payload["text"],
            pages=[step_from_dict(step) for step in payload.get("pages", [])],
        )
    raise ValueError(f"Unknown line tag: {tag}")


_TEXT_STEPS: dict[str, type[Comment | LogInfo | LogWarning | LogError]] = {
    "Comment": Comment,
    "LogInfo": LogInfo,
    "LogWarning": LogWarning,
    "LogError": LogError,
}


def step_to_dict(step: Step) -> dict[str, Any] | str:
    if isinstance(step, EndJump):
        return "EndJump"
    if isinstance(step, TerminateJump):
        return "TerminateJump"
    if isinstance(step, (Comment, LogInfo, LogWarning, LogError)):
        return {type(step).__name__: step.text}
    if isinstance(step, Page):
        return {"Page": [line_to_dict(line) for line in step.lines]}
    if isinstance(step, VariableAssign):
        return {
            "VariableAssign": {"name": step.name, "value": value_to_dict(step.value)}
        }
    if isinstance(step, SectionBounce):
        return {"SectionBounce": step.target}
    if isinstance(step, SectionJump):
        return {"SectionJump": step.target}
    raise TypeError(f"Unknown step type: {type(step).__name__}")


def step_from_dict(data: dict[str, Any] | str) -> Step:
    if data == "EndJump":
        return EndJump()
    if data == "TerminateJump":
        return TerminateJump()
    if isinstance(data, str):
        raise ValueError(f"Unknown step tag: {data}")

    ((tag, payload),) = data.items()
    if tag in _TEXT_STEPS:
        return _TEXT_STEPS[tag](payload)
    if tag == "Page":
        return Page(lines=[line_from_dict(line) for line in payload])
    if tag == "VariableAssign":
        return VariableAssign(
            name=payload["name"], value=value_from_dict(payload["value"])
        )
    if tag == "SectionBounce":
        return SectionBounce(payload)
    if tag == "SectionJump":
        return SectionJump(payload)
    raise ValueError(f"Unknown step tag: {tag}")


def dialogue_to_dict(dialogue: Dialogue) -> dict[str, Any]:
    """Convert a dialogue into plain mappings, lists and scalars."""
    return {
        "actors": {
            key: {
                "name": actor.name,
                "properties": {
                    name: value_to_dict(value)
                    for name, value in actor.properties.items()
                },
            }
            for key, actor in dialogue.actors.items()
        },
        "variables": {
            name: value_to_dict(value) for name, value in dialogue.variables.items()
        },
        "functions": {
            name: {
                "args": (
                    None
                    if function.args is None
                    else {arg: value_to_dict(v) for arg, v in function.args.items()}
                ),
                "result": (
                    None if function.result is None else value_to_dict(function.result)
                ),
            }
            for name, function in dialogue.functions.items()
        },
        "sections": [
            {
                "name": section.name,
                "steps": [step_to_dict(step) for step in section.steps],
            }
            for section in dialogue.sections
        ],
    }


def dialogue_from_dict(data: dict[str, Any]) -> Dialogue:
    """Rebuild a dialogue from the shape produced by :func:`dialogue_to_dict`."""
    return Dialogue(
        actors={
            key: Actor(
                name=actor["name"],
                properties={
                    name: value_from_dict(value)
                    for name, value in actor.get("properties", {}).items()
                },
            )
            for key, actor in data.get("actors", {}).items()
        },
        variables={
            name: value_from_dict(value)
            for name, value in data.get("variables", {}).items()
        },
        functions={
            name: Function(
                args=(
                    None
                    if function.get("args") is None
                    else {
                        arg: value_from_dict(v) for arg, v in function["args"].items()
                    }
                ),
                result=(
                    None
                    if function.get("result") is None
                    else value_from_dict(function["result"])
                ),
            )
            for name, function in data.get("functions", {}).items()
        },
        sections=[
            Section(
                name=section["name"],
                steps=[step_from_dict(step) for step in section.get("steps", [])],
            )
            for section in data.get("sections", [])
        ],
    )


def export_dialogue(dialogue: Dialogue, fmt: ExportFormat | str) -> str:
    """Encode a dialogue as text in the requested format.

    Args:
        dialogue: Parsed dialogue
        fmt: Format name or ExportFormat member

    Returns:
        Encoded document. Pickle output is base64 text.

    Raises:
        ExportError: If the format is not supported
    """
    try:
        export_format = ExportFormat(str(getattr(fmt, "value", fmt)).lower())
    except ValueError as e:
        supported = [f.value for f in ExportFormat]
        raise ExportError(
            message=f"Unsupported format: {fmt}",
            hint=f"Use one of: {', '.join(supported)}",
            details={"requested_format": str(fmt), "supported_formats": supported},
        ) from e

    data = dialogue_to_dict(dialogue)

    if export_format is ExportFormat.JSON:
        return json.dumps(
            _null_non_finite(data), indent=2, ensure_ascii=False, allow_nan=False
        )
    if export_format is ExportFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if export_format is ExportFormat.TOML:
        return tomli_w.dumps(_drop_none(data))
    return base64.b64encode(pickle.dumps(data)).decode("ascii")


def _null_non_finite(data: Any) -> Any:
    """Replace NaN and infinities, which JSON cannot represent, with None."""
    if isinstance(data, float) and not math.isfinite(data):
        return None
    if isinstance(data, dict):
        return {key: _null_non_finite(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_null_non_finite(item) for item in data]
    return data


def _drop_none(data: Any) -> Any:
    """Remove None-valued keys, which TOML has no way to express."""
    if isinstance(data, dict):
        return {
            key: _drop_none(value) for key, value in data.items() if value is not None
        }
    if isinstance(data, list):
        return [_drop_none(item) for item in data]
    return data
