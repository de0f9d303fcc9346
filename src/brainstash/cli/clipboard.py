"""
Brainstash CLI - clipboard command.

Runs the clipboard monitor in the foreground until Ctrl+C.
"""

import threading

import typer
from rich.console import Console

from brainstash.cli.common import open_store
from brainstash.cli.errors import ExitCode
from brainstash.core.capture.clipboard import ClipboardMonitor
from brainstash.core.config.loader import load_config

console = Console()

app = typer.Typer(
    name="clipboard",
    help="Capture URLs from the clipboard",
    no_args_is_help=True,
)


@app.command()
def watch(ctx: typer.Context) -> None:
    """
    Watch the clipboard and stage interesting URLs in the inbox.

    Stop with Ctrl+C.
    """
    store = open_store(ctx)
    config = load_config(store.root)

    if not config.clipboard.enabled:
        console.print("[yellow]Clipboard capture is disabled in brain.yaml.[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)

    stop = threading.Event()
    monitor = ClipboardMonitor(config.clipboard, store, stop_event=stop)
    console.print(
        f"Watching clipboard every {config.clipboard.poll_interval_ms} ms "
        "[dim](Ctrl+C to stop)[/dim]"
    )

    thread = monitor.start()
    try:
        while thread.is_alive():
            thread.join(timeout=0.5)
    except KeyboardInterrupt:
        stop.set()
        thread.join()
        console.print("\n[dim]Stopped.[/dim]")
        raise typer.Exit(ExitCode.SIGINT)
