"""
Brainstash CLI - inbox commands.

Review pending candidates and decide on them:

    brainstash inbox              # list pending items
    brainstash inbox show 2
    brainstash inbox accept 1 3 --domain coding/rust
    brainstash inbox reject 2
"""

import typer
from rich.console import Console
from rich.table import Table

from brainstash.cli.common import open_store
from brainstash.cli.errors import exit_with_error
from brainstash.core.inbox.inbox import Inbox, InboxEntry
from brainstash.core.knowledge.errors import BrainError
from brainstash.core.store.brain import make_preview

console = Console()

app = typer.Typer(
    name="inbox",
    help="Review pending captures",
    no_args_is_help=False,
)

LIST_PREVIEW_LENGTH = 60


@app.callback(invoke_without_command=True)
def inbox_default(ctx: typer.Context) -> None:
    """
    List pending items when no subcommand is given.
    """
    if ctx.invoked_subcommand is not None:
        return
    list_items(ctx)


@app.command(name="list")
def list_items(ctx: typer.Context) -> None:
    """
    List pending items, oldest first, with their 1-based index.
    """
    inbox = Inbox(open_store(ctx))
    entries = inbox.list()

    if not entries:
        console.print("[yellow]Inbox is empty.[/yellow]")
        return

    _display_entries(entries)


def _display_entries(entries: list[InboxEntry]) -> None:
    table = Table(
        title=f"Inbox ({len(entries)} pending)",
        show_header=True,
        header_style="bold",
    )
    table.add_column("#", justify="right", width=3)
    table.add_column("Captured", width=16)
    table.add_column("Type", width=8)
    table.add_column("Domain", overflow="fold")
    table.add_column("Preview", overflow="fold")

    for index, entry in enumerate(entries, start=1):
        item = entry.item
        table.add_row(
            str(index),
            item.captured_at.strftime("%Y-%m-%d %H:%M"),
            item.kind.value,
            item.suggested_domain,
            make_preview(item.body, LIST_PREVIEW_LENGTH),
        )

    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="1-based index from 'inbox list'"),
) -> None:
    """
    Show one pending item in full.
    """
    inbox = Inbox(open_store(ctx))
    try:
        entry = inbox.get(index)
    except BrainError as e:
        exit_with_error(e)

    item = entry.item
    console.print(f"[bold]{item.kind.value}[/bold] [dim]{item.id}[/dim]")
    console.print(f"Suggested domain: {item.suggested_domain}")
    console.print(f"Captured: {item.captured_at.isoformat()} via {item.capture_method.value}")
    if item.source:
        console.print(f"Source: {item.source}")
    if item.tags:
        console.print(f"Tags: {', '.join(item.tags)}")
    if item.capture_context:
        console.print(f"Context: {item.capture_context}")
    console.print()
    console.print(item.body, markup=False, highlight=False)


@app.command()
def accept(
    ctx: typer.Context,
    indices: list[int] = typer.Argument(..., help="1-based indices from 'inbox list'"),
    domain: str | None = typer.Option(
        None,
        "--domain",
        "-d",
        help="File into this domain instead of each item's suggestion",
    ),
) -> None:
    """
    Accept pending items and file them into a domain.

    Examples:
        brainstash inbox accept 1
        brainstash inbox accept 1 3 -d coding/rust
    """
    inbox = Inbox(open_store(ctx))
    try:
        paths = inbox.accept_by_indices(indices, domain)
    except BrainError as e:
        exit_with_error(e)

    for path in paths:
        console.print(f"[green]✓[/green] Filed {path.relative_to(inbox.store.root).as_posix()}")


@app.command()
def reject(
    ctx: typer.Context,
    indices: list[int] = typer.Argument(..., help="1-based indices from 'inbox list'"),
) -> None:
    """
    Discard pending items.

    Examples:
        brainstash inbox reject 2
        brainstash inbox reject 1 2 5
    """
    inbox = Inbox(open_store(ctx))
    try:
        removed = inbox.reject_by_indices(indices)
    except BrainError as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Rejected {len(removed)} item(s)")
