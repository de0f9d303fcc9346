"""
Standardized error handling and exit codes for the brainstash CLI.

Commands call ``exit_with_error`` on a BrainError; it prints a consistent
message with a hint and raises ``typer.Exit`` with the matching code.
"""

from enum import IntEnum
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from brainstash.core.knowledge.errors import (
    BrainError,
    BrainNotInitializedError,
    DuplicateIndexError,
    IndexOutOfRangeError,
    InvalidDomainError,
    PathTraversalError,
)

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for brainstash CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Storage or data error."""

    USER_ERROR = 2
    """Bad input from the user (index, domain, path)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


USER_ERRORS = (
    BrainNotInitializedError,
    DuplicateIndexError,
    IndexOutOfRangeError,
    InvalidDomainError,
    PathTraversalError,
)


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "No brain found",
        ...     solution="brainstash init",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def _solution_for(error: BrainError) -> str | None:
    if isinstance(error, BrainNotInitializedError):
        return "brainstash init  # or pass --brain <path>"
    if isinstance(error, (IndexOutOfRangeError, DuplicateIndexError)):
        return "brainstash inbox list  # to see current indices"
    if isinstance(error, InvalidDomainError):
        return "brainstash domain list  # to see existing domains"
    return None


def exit_with_error(error: BrainError) -> NoReturn:
    """
    Report a BrainError and exit.

    Bad user input exits with USER_ERROR, everything else with
    GENERAL_ERROR.
    """
    print_error(escape(str(error)), solution=_solution_for(error))
    code = ExitCode.USER_ERROR if isinstance(error, USER_ERRORS) else ExitCode.GENERAL_ERROR
    raise typer.Exit(code)
