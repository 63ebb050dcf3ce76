"""Debug command: show the raw parsed document."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from lexdialogue.cli.formatters import DialogueFormatter, OutputFormat
from lexdialogue.cli.utils.cli_handler import cli_command
from lexdialogue.cli.utils.dialogue_loader import load_dialogue

console = Console()
status_console = Console(stderr=True)


@cli_command
def debug_command(
    file: Annotated[Path, typer.Argument(help="Path to the dialogue file")],
    json_output: Annotated[
        bool, typer.Option("--json", help="Print the document as JSON")
    ] = False,
) -> None:
    """Parse the dialogue file and display the raw parsed data."""
    result = load_dialogue(file, status_console)
    DialogueFormatter(console).print(
        result.dialogue, OutputFormat.JSON if json_output else OutputFormat.TEXT
    )
