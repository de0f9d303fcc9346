"""
Init command implementation.

Creates the brain skeleton: the root directory, ``inbox/``, the
``brain.yaml`` marker and a ``.gitignore``. Safe to run repeatedly.
"""

import typer
from rich.console import Console

from brainstash.cli.common import get_brain_root
from brainstash.cli.errors import exit_with_error
from brainstash.core.knowledge.errors import BrainError
from brainstash.core.store.brain import BrainStore

console = Console()


def main(ctx: typer.Context) -> None:
    """
    Initialize a brain directory.

    Examples:
        brainstash init
        brainstash --brain ~/notes/brain init
    """
    store = BrainStore(get_brain_root(ctx))
    already = store.is_initialized()

    try:
        root = store.init()
    except BrainError as e:
        exit_with_error(e)

    if already:
        console.print(f"[yellow]Brain already initialized at[/yellow] {root}")
    else:
        console.print(f"[green]✓[/green] Initialized brain at {root}")
        console.print('\nCapture your first note with: [bold]brainstash capture "..."[/bold]')
