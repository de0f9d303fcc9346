"""
Brainstash CLI - capture commands.

Stage text or a web page in the inbox for later review.
"""

import sys

import typer
from rich.console import Console

from brainstash.cli.common import open_store
from brainstash.cli.errors import ExitCode, exit_with_error, print_error
from brainstash.core.capture.producers import capture_from_text, capture_from_url
from brainstash.core.knowledge.errors import BrainError
from brainstash.core.knowledge.models import KnowledgeKind

console = Console()


def capture(
    ctx: typer.Context,
    content: str | None = typer.Argument(
        None,
        help="Text to capture (or read from stdin if not provided)",
    ),
    tag: list[str] = typer.Option(
        [],
        "--tag",
        "-t",
        help="Add tag to the item (repeatable)",
    ),
    domain: str | None = typer.Option(
        None,
        "--domain",
        "-d",
        help="Suggested domain (default: general)",
    ),
    source: str | None = typer.Option(
        None,
        "--source",
        "-s",
        help="Where the knowledge came from",
    ),
    kind: KnowledgeKind = typer.Option(
        KnowledgeKind.CONCEPT,
        "--type",
        help="Knowledge type",
    ),
) -> None:
    """
    Capture a note into the inbox.

    Examples:
        brainstash capture "Arc<T> is cheap to clone" -d coding/rust
        echo "Meeting notes..." | brainstash capture --tag meeting
    """
    if content is None:
        if sys.stdin.isatty():
            print_error(
                "No content provided",
                solution='brainstash capture "Your note"  # or pipe text via stdin',
            )
            raise typer.Exit(ExitCode.USER_ERROR)
        content = sys.stdin.read().strip()

    if not content:
        print_error("Content cannot be empty")
        raise typer.Exit(ExitCode.USER_ERROR)

    store = open_store(ctx)
    try:
        path = capture_from_text(store, content, source, domain, list(tag), kind)
    except BrainError as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Captured to inbox: {path.name}")


def capture_url(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the page"),
    title: str = typer.Option(..., "--title", help="Page title"),
    summary: str = typer.Option("", "--summary", help="Short summary of the page"),
    tag: list[str] = typer.Option(
        [],
        "--tag",
        "-t",
        help="Add tag to the item (repeatable)",
    ),
    domain: str | None = typer.Option(
        None,
        "--domain",
        "-d",
        help="Suggested domain (default: general)",
    ),
) -> None:
    """
    Capture a web page into the inbox.

    Examples:
        brainstash capture-url https://example.com/post --title "A post"
    """
    store = open_store(ctx)
    try:
        path = capture_from_url(store, url, title, summary, list(tag), domain)
    except BrainError as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Captured {url} to inbox: {path.name}")
