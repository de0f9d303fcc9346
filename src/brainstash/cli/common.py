"""
Helpers shared by CLI commands.
"""

from pathlib import Path

import typer

from brainstash.cli.errors import exit_with_error
from brainstash.core.config.loader import resolve_brain_root
from brainstash.core.knowledge.errors import BrainError
from brainstash.core.store.brain import BrainStore


def get_brain_root(ctx: typer.Context) -> Path:
    """Brain root chosen by --brain, BRAINSTASH_HOME or the XDG default."""
    obj = ctx.obj or {}
    return resolve_brain_root(obj.get("brain"))


def open_store(ctx: typer.Context) -> BrainStore:
    """
    Open the brain for a command, exiting if it was never initialized.
    """
    store = BrainStore(get_brain_root(ctx))
    try:
        store.require_initialized()
    except BrainError as e:
        exit_with_error(e)
    return store
