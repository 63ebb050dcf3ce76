"""Main CLI entry point for lexdialogue."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from lexdialogue import __version__
from lexdialogue.cli.commands import convert_command, debug_command, play_command
from lexdialogue.cli.utils.cli_handler import CLIHandler
from lexdialogue.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="lexdialogue",
    help="Parse, inspect, convert and play Lex dialogue scripts",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command(name="debug")(debug_command)
app.command(name="play")(play_command)
app.command(name="convert")(convert_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show lexdialogue version."""
    version_info = {
        "name": "lexdialogue",
        "version": __version__,
        "description": "Dialogue syntax parser, converter and player",
    }

    if json_output:
        typer.echo(json.dumps(version_info, indent=2))
    else:
        console.print(f"lexdialogue v{version_info['version']}")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Dialogue file to play when no command is given",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="LEXDIALOGUE_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug", help="Enable debug logging", envvar="LEXDIALOGUE_DEBUG"
        ),
    ] = False,
) -> None:
    """Apply global options, then run the command or play ``--file``."""
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = None

    try:
        settings = get_settings_for_cli(
            config_file=config,
            overrides={"log_level": level, "debug": debug or None},
        )
    except Exception as e:
        CLIHandler().handle_error(e)
    set_settings(settings)
    configure_logging(settings)
    logger.debug("Global options applied", config=str(config), file=str(file))

    if ctx.invoked_subcommand is not None:
        return
    if file is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()
    play_command(file=file, delay=None)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
