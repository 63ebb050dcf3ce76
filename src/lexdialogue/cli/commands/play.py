"""Play command: walk a dialogue interactively."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from lexdialogue.cli.utils.cli_handler import cli_command
from lexdialogue.cli.utils.dialogue_loader import load_dialogue
from lexdialogue.config import get_logger, get_settings_for_cli
from lexdialogue.player import ConsoleSink, DialoguePlayer

logger = get_logger(__name__)
status_console = Console(stderr=True)


@cli_command
def play_command(
    file: Annotated[Path, typer.Argument(help="Path to the dialogue file")],
    delay: Annotated[
        float | None,
        typer.Option(
            "--delay",
            "-d",
            min=0.0,
            help="Seconds to pause between steps (default: playback_delay setting)",
        ),
    ] = None,
) -> None:
    """Play the parsed dialogue interactively."""
    settings = get_settings_for_cli(overrides={"playback_delay": delay})
    result = load_dialogue(file, status_console)
    status_console.print()

    logger.debug("Playing dialogue", path=str(file), delay=settings.playback_delay)
    DialoguePlayer(
        result.dialogue, sink=ConsoleSink(), delay=settings.playback_delay
    ).run()
