"""Read and parse a dialogue script for a CLI command."""

from __future__ import annotations

import time
from pathlib import Path

from rich.console import Console

from lexdialogue.config import get_logger
from lexdialogue.exceptions import DialogueFileNotFoundError
from lexdialogue.parser import ParseResult, parse

logger = get_logger(__name__)


def load_dialogue(path: Path, console: Console) -> ParseResult:
    """Read ``path`` and parse it, reporting progress and warnings.

    Status lines go to ``console`` so that stdout stays clean for command
    output.

    Args:
        path: Dialogue script to read
        console: Console for status output

    Returns:
        The parse result

    Raises:
        DialogueFileNotFoundError: If the path is missing, is not a file or
            cannot be read
    """
    script_path = path.expanduser().resolve()
    if not script_path.is_file():
        problem = "is not a file" if script_path.exists() else "not found"
        raise DialogueFileNotFoundError(
            message=f"Dialogue file {problem}: {script_path}",
            hint="Pass the path of a Lex dialogue script",
            details={"path": str(script_path)},
        )
    try:
        raw_dialogue = script_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DialogueFileNotFoundError(
            message=f"Failed to read dialogue file: {script_path}",
            hint="Check that the file path is correct and readable",
            details={"path": str(script_path), "reason": str(e)},
        ) from e

    console.print("Parsing dialogue...")
    start = time.perf_counter()
    result = parse(raw_dialogue)
    duration = time.perf_counter() - start
    console.print(f"Parsing succeeded in: {duration * 1000:.3f}ms")
    logger.info(
        "Parsed dialogue file",
        path=str(script_path),
        duration_ms=round(duration * 1000, 3),
        warnings=len(result.warnings),
    )

    if result.warnings:
        console.print("\nWarnings:", style="yellow")
        for warning in result.warnings:
            console.print(f"  {warning}", style="yellow", markup=False)

    return result
