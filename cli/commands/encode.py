"""
Encode commands: create, update, delete
"""

import typer
from rich.console import Console

from streambind.core import (
    StreamHandler,
    build_create_message,
    build_delete_message,
    build_update_message,
)

from ._io import parse_json_option

app = typer.Typer()
console = Console(stderr=True)


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(2)


@app.command()
def create(
    stream: str = typer.Option(..., "--stream", "-s", help="Stream name"),
    data: str = typer.Option(..., "--data", "-d", help="Instance as JSON"),
):
    """
    Print a create message.

    Example:
        streambind encode create --stream todo --data '{"description": "x", "is_done": false}'
    """
    try:
        instance = parse_json_option(data, "data")
        text = build_create_message(StreamHandler(stream=stream), instance)
    except ValueError as e:
        _fail(str(e))
    print(text)


@app.command()
def update(
    stream: str = typer.Option(..., "--stream", "-s", help="Stream name"),
    pk: str = typer.Option(..., "--pk", "-k", help="Primary key as JSON"),
    data: str = typer.Option(..., "--data", "-d", help="Instance as JSON"),
):
    """
    Print an update message.

    Example:
        streambind encode update --stream todo --pk '"1"' --data '{"description": "x", "is_done": true}'
    """
    try:
        key = parse_json_option(pk, "pk")
        instance = parse_json_option(data, "data")
        text = build_update_message(StreamHandler(stream=stream), key, instance)
    except ValueError as e:
        _fail(str(e))
    print(text)


@app.command()
def delete(
    stream: str = typer.Option(..., "--stream", "-s", help="Stream name"),
    pk: str = typer.Option(..., "--pk", "-k", help="Primary key as JSON"),
):
    """
    Print a delete message.

    Example:
        streambind encode delete --stream todo --pk 3
    """
    try:
        key = parse_json_option(pk, "pk")
        text = build_delete_message(StreamHandler(stream=stream), key)
    except ValueError as e:
        _fail(str(e))
    print(text)
