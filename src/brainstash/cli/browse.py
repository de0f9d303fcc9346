"""
Brainstash CLI - read and summary commands.

Both accept ``--json`` and then print the same dicts the tool facade
returns.
"""

import json

import typer
from rich.console import Console

from brainstash.cli.common import open_store
from brainstash.cli.errors import ExitCode, exit_with_error, print_error
from brainstash.core.knowledge.errors import BrainError
from brainstash.core.tools import BrainTools

console = Console()


def read(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Path relative to the brain root"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Print a filed knowledge unit.

    Examples:
        brainstash read coding/rust/arc-t-is-cheap-to-clone.md
    """
    store = open_store(ctx)
    try:
        unit = store.read_relative(path)
    except BrainError as e:
        exit_with_error(e)

    if json_output:
        console.print_json(json.dumps(BrainTools(store).read_knowledge(path)))
        return

    console.print(f"[bold]{unit.kind.value}[/bold] [dim]{unit.id}[/dim]")
    console.print(f"Domain: {unit.domain}  Confidence: {unit.confidence:.2f}")
    if unit.source:
        console.print(f"Source: {unit.source}")
    if unit.tags:
        console.print(f"Tags: {', '.join(unit.tags)}")
    console.print()
    console.print(unit.body, markup=False, highlight=False)


def summary(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show a quick overview of the brain.
    """
    result = BrainTools(open_store(ctx)).brain_summary()
    if "error" in result:
        print_error(result["error"])
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if json_output:
        console.print_json(json.dumps(result))
        return

    console.print(f"Domains: [bold]{result['total_domains']}[/bold]")
    for name in result["domains"]:
        console.print(f"  {name}")
    console.print(f"Knowledge units: [bold]{result['total_units']}[/bold]")
    console.print(f"Inbox: [bold]{result['inbox_count']}[/bold] pending")
