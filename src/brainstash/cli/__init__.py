"""
Brainstash CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys
from pathlib import Path

import typer

from brainstash import __version__
from brainstash.cli import browse, capture, clipboard, domain, importer, inbox, init_cmd
from brainstash.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_CAPTURE = "Capture Knowledge"
PANEL_REVIEW = "Review the Inbox"
PANEL_BROWSE = "Browse Your Brain"

app = typer.Typer(
    name="brainstash",
    help="Personal knowledge store: capture, review, and file what you learn",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"brainstash {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    brain: Path | None = typer.Option(
        None,
        "--brain",
        "-b",
        help="Brain directory (default: $BRAINSTASH_HOME or ~/.local/share/brainstash)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Brainstash - personal knowledge store.

    Captured notes land in an inbox; accepted ones are filed as Markdown
    under a domain directory.

    Quick Start:
        1. brainstash init                       # Create the brain
        2. brainstash capture "Some insight"     # Stage a note
        3. brainstash inbox                      # Review pending notes
        4. brainstash inbox accept 1 -d coding   # File it
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    setup_logging(debug)

    ctx.obj = {"debug": debug, "brain": brain}


# =============================================================================
# Capture Knowledge
# =============================================================================

app.command(name="init", rich_help_panel=PANEL_CAPTURE)(init_cmd.main)
app.command(name="capture", rich_help_panel=PANEL_CAPTURE)(capture.capture)
app.command(name="capture-url", rich_help_panel=PANEL_CAPTURE)(capture.capture_url)
app.add_typer(importer.app, name="import", rich_help_panel=PANEL_CAPTURE)
app.add_typer(clipboard.app, name="clipboard", rich_help_panel=PANEL_CAPTURE)


# =============================================================================
# Review the Inbox
# =============================================================================

app.add_typer(inbox.app, name="inbox", rich_help_panel=PANEL_REVIEW)


# =============================================================================
# Browse Your Brain
# =============================================================================

app.add_typer(domain.app, name="domain", rich_help_panel=PANEL_BROWSE)
app.command(name="read", rich_help_panel=PANEL_BROWSE)(browse.read)
app.command(name="summary", rich_help_panel=PANEL_BROWSE)(browse.summary)


def cli_main() -> None:
    """Entry point for the console script."""
    app()


__all__ = ["app", "cli_main"]
