"""
Brainstash CLI - import commands.
"""

from pathlib import Path

import typer
from rich.console import Console

from brainstash.cli.common import open_store
from brainstash.cli.errors import exit_with_error
from brainstash.core.importers.notion import import_notion
from brainstash.core.knowledge.errors import BrainError

console = Console()

app = typer.Typer(
    name="import",
    help="Import existing notes into the inbox",
    no_args_is_help=True,
)


@app.command()
def notion(
    ctx: typer.Context,
    export_dir: Path = typer.Argument(..., help="Unzipped Notion markdown export"),
) -> None:
    """
    Stage every page of a Notion markdown export.

    Examples:
        brainstash import notion ~/Downloads/Export-1234
    """
    store = open_store(ctx)
    try:
        result = import_notion(store, export_dir)
    except BrainError as e:
        exit_with_error(e)

    console.print(
        f"[green]✓[/green] Imported {result.imported} page(s), skipped {result.skipped}"
    )
    if result.imported:
        console.print("Review them with: [bold]brainstash inbox[/bold]")
