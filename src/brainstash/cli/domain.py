"""
Brainstash CLI - domain commands.
"""

import typer
from rich.console import Console
from rich.table import Table

from brainstash.cli.common import open_store
from brainstash.cli.errors import exit_with_error
from brainstash.core.knowledge.errors import BrainError

console = Console()

app = typer.Typer(
    name="domain",
    help="Create and browse knowledge domains",
    no_args_is_help=True,
)


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Slash-delimited domain path, e.g. coding/rust"),
    description: str | None = typer.Option(
        None,
        "--description",
        "-D",
        help="Short human description",
    ),
) -> None:
    """
    Create a domain.
    """
    store = open_store(ctx)
    try:
        path = store.add_domain(name, description)
    except BrainError as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Created domain {name} at {path}")


@app.command(name="list")
def list_domains(ctx: typer.Context) -> None:
    """
    List domains with their item counts.
    """
    store = open_store(ctx)
    domains = store.list_domains()
    if not domains:
        console.print("[yellow]No domains yet.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Domain", overflow="fold")
    table.add_column("Items", justify="right", width=6)
    table.add_column("Description", overflow="fold")

    for name in domains:
        table.add_row(
            name,
            str(store.count_knowledge(name)),
            store.domain_description(name) or "",
        )

    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Domain path"),
) -> None:
    """
    List the knowledge filed under a domain.
    """
    store = open_store(ctx)
    try:
        summaries = store.list_knowledge(name)
    except BrainError as e:
        exit_with_error(e)

    if not summaries:
        console.print(f"[yellow]No knowledge filed under {name}.[/yellow]")
        return

    table = Table(title=f"{name} ({len(summaries)})", show_header=True, header_style="bold")
    table.add_column("Path", overflow="fold")
    table.add_column("Type", width=8)
    table.add_column("Tags", width=20)
    table.add_column("Preview", overflow="fold")

    for summary in summaries:
        table.add_row(
            summary.path,
            summary.kind.value,
            ", ".join(summary.tags),
            summary.preview,
        )

    console.print(table)
