"""
Layered ``.env`` loading for brainstash.

Two optional files can preset variables such as ``BRAINSTASH_HOME`` or
``BRAINSTASH_POLL_INTERVAL_MS``:

    $XDG_CONFIG_HOME/brainstash/.env   personal defaults
    ./.env                             per-directory overrides

Precedence: process environment > ./.env > user .env
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values


def default_user_env_paths() -> list[Path]:
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return [Path(config_home) / "brainstash" / ".env"]


def read_env_file(path: Path) -> dict[str, str]:
    """Variables defined in a .env file; keys without a value are dropped."""
    if not path.is_file():
        return {}
    return {
        str(key): str(value)
        for key, value in dotenv_values(path).items()
        if key is not None and value is not None
    }


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> None:
    """
    Export variables from the user and project .env files.

    Variables already set in the process are never replaced.

    Args:
        project_dir: Directory holding the project .env (defaults to cwd)
        user_env_paths: User-level files, replacing the XDG default
        project_env_paths: Project-level files, replacing ``<project_dir>/.env``
    """
    if user_env_paths is None:
        user_env_paths = default_user_env_paths()
    if project_env_paths is None:
        project_env_paths = [(project_dir or Path.cwd()) / ".env"]

    layered: dict[str, str] = {}
    for path in [*user_env_paths, *project_env_paths]:
        layered.update(read_env_file(Path(path)))

    for key, value in layered.items():
        os.environ.setdefault(key, value)
