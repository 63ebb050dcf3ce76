"""Convert command: export a dialogue to an interchange format."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from lexdialogue.cli.utils.cli_handler import cli_command
from lexdialogue.cli.utils.dialogue_loader import load_dialogue
from lexdialogue.config import get_settings
from lexdialogue.export import export_dialogue

status_console = Console(stderr=True)


@cli_command
def convert_command(
    file: Annotated[Path, typer.Argument(help="Path to the dialogue file")],
    output: Annotated[
        Path | None,
        typer.Argument(help="Output file path (default: stdout)"),
    ] = None,
    export_format: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format: json, yaml, toml or pickle (base64)",
        ),
    ] = None,
) -> None:
    """Convert the parsed dialogue to a specific format."""
    settings = get_settings()
    result = load_dialogue(file, status_console)

    encoded = export_dialogue(
        result.dialogue, export_format or settings.default_export_format
    )

    if output is None:
        typer.echo(encoded)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(encoded, encoding="utf-8")
    status_console.print(f"Output written to: {output}", markup=False)
