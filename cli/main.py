#!/usr/bin/env python3
"""
streambind CLI - developer tooling for stream binding message logs

Main entrypoint for the streambind command-line tool.
"""

import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from cli.commands import classify, encode, replay
from streambind.config import Settings
from streambind.logging_config import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="streambind",
    help="Inspect and produce stream binding messages",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add command groups
app.add_typer(encode.app, name="encode", help="Print outbound wire messages")

# Add standalone commands
app.command("replay")(replay.replay_command)
app.command("classify")(classify.classify_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (default: STREAMBIND_LOG_LEVEL or INFO)"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text (default: STREAMBIND_LOG_FORMAT or text)"),
):
    """Configure logging before any command runs."""
    settings = Settings.from_env()
    setup_logging(level=log_level or settings.log_level, fmt=log_format or settings.log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__ as cli_version
    from streambind import __version__ as lib_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]streambind CLI[/bold]", f"v{cli_version}")
    table.add_row("Library", f"v{lib_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
