"""Main CLI application using Typer."""
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..config import CompleteConfig, default_config_path, dump_default_config, load_config
from ..errors import ConfigError
from ..logging_config import setup_logging

# Load environment variables (STREAMCHAT_CONFIG, LOG_MAX_MB, ...)
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="streamchat",
    help="Terminal viewer for live stream chat with inline emote overlays",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _load(config_path: Path | None) -> CompleteConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def run(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config file (default: $STREAMCHAT_CONFIG or ~/.config/streamchat/config.yaml)"
    ),
    demo: bool = typer.Option(
        True,
        "--demo/--no-demo",
        help="Feed the chat panel with generated demo messages"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this rotating file"
    ),
):
    """Launch the chat viewer."""
    config = _load(config_path)
    setup_logging(log_level or "warning", log_file)

    from ..ui import run_tui

    run_tui(config, config_path=config_path, demo=demo, log_level=log_level)


@app.command(name="config")
def show_config(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config file to inspect"
    ),
):
    """Show the effective configuration."""
    config = _load(config_path)
    source = config_path or default_config_path()

    table = Table(title=f"Configuration ({source})", show_header=True)
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")

    for section, values in config.model_dump(mode="json").items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))

    console.print(table)


@app.command(name="default-config")
def default_config():
    """Print a default configuration file."""
    console.print(dump_default_config(), markup=False, highlight=False)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
