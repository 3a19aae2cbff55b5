"""
Classify command: count messages per stream
"""

import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from streambind.core import classify_stream

from ._io import read_messages

console = Console()

UNKNOWN = "<unknown>"


def classify_command(
    log_path: str = typer.Option(
        ...,
        "--log",
        "-l",
        help="File with one raw message per line",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Count messages per stream name.

    Messages without a usable stream name are counted as <unknown>.

    Examples:
        streambind classify --log messages.jsonl
        streambind classify --log messages.jsonl --json
    """
    try:
        messages = read_messages(log_path)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)

    counts = {}
    for raw in messages:
        stream = classify_stream(raw, lambda name: name, UNKNOWN)
        counts[stream] = counts.get(stream, 0) + 1

    if json_output:
        print(json.dumps({"streams": counts, "count": len(messages)}, indent=2, sort_keys=True))
        return

    table = Table(title=f"Streams: {log_path}")
    table.add_column("Stream", style="green")
    table.add_column("Messages", style="cyan", justify="right")

    for stream in sorted(counts.keys()):
        table.add_row(escape(stream), str(counts[stream]))

    console.print(table)
    console.print(f"\n[bold]Total messages:[/bold] {len(messages)}")
