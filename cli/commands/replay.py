"""
Replay command: fold a captured message log into a collection
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from streambind.core import InitialStreamHandler, StreamHandler
from streambind.replay import replay

from ._io import read_messages

console = Console()


def replay_command(
    log_path: str = typer.Option(
        ...,
        "--log",
        "-l",
        help="File with one raw message per line",
    ),
    stream: str = typer.Option(..., "--stream", "-s", help="Binding stream name"),
    initial_stream: Optional[str] = typer.Option(
        None, "--initial-stream", "-i", help="Initial-load stream name"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay a message log and show the resulting collection.

    Values are kept as raw JSON and the default reducers are used.

    Examples:
        streambind replay --log messages.jsonl --stream todo
        streambind replay --log messages.jsonl --stream todo --initial-stream todo_initial
        streambind replay --log messages.jsonl --stream todo --json
    """
    try:
        messages = read_messages(log_path)
        handler = StreamHandler(stream=stream)
        initial_handler = InitialStreamHandler(stream=initial_stream) if initial_stream else None

        errors = []
        result = replay(messages, handler, initial_handler=initial_handler, on_error=errors.append)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)
    except ValueError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        output = {
            "collection": [{"pk": pk, "data": data} for pk, data in result.collection],
            "applied": result.applied,
            "initial_loads": result.initial_loads,
            "skipped": result.skipped,
            "decode_errors": len(errors),
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    console.print(f"[green]✓ Replayed {len(messages)} messages[/green]")
    console.print(f"  Binding events: [cyan]{result.applied}[/cyan]")
    console.print(f"  Initial loads: [cyan]{result.initial_loads}[/cyan]")
    console.print(f"  Skipped: [cyan]{result.skipped}[/cyan]")
    if errors:
        console.print(f"  Decode errors: [yellow]{len(errors)}[/yellow]")
        for e in errors:
            console.print(f"    [dim]{escape(e.field or 'message')}: {escape(str(e))}[/dim]")

    table = Table(title=f"Collection: {stream}")
    table.add_column("PK", style="cyan")
    table.add_column("Data", style="green")

    for pk, data in result.collection:
        table.add_row(escape(json.dumps(pk, ensure_ascii=False)), escape(json.dumps(data, ensure_ascii=False)))

    if result.collection:
        console.print(table)
    else:
        console.print("[yellow]Collection is empty[/yellow]")
