"""
Configuration loading for brainstash.

Resolves which brain directory to use and reads its ``brain.yaml``.

Brain root precedence:
    --brain option > BRAINSTASH_HOME > $XDG_DATA_HOME/brainstash

Configuration precedence:
    defaults < brain.yaml < env vars
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import BrainConfig, ClipboardConfig

logger = logging.getLogger(__name__)

BRAIN_YAML = "brain.yaml"
HOME_ENV_VAR = "BRAINSTASH_HOME"
POLL_INTERVAL_ENV_VAR = "BRAINSTASH_POLL_INTERVAL_MS"


def get_xdg_data_home() -> Path:
    """
    Get XDG data home directory.

    Returns:
        Path to data directory (defaults to ~/.local/share)
    """
    if xdg_home := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg_home)
    return Path.home() / ".local" / "share"


def resolve_brain_root(explicit: Path | None = None) -> Path:
    """
    Decide which brain directory commands operate on.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        Brain root path (not required to exist)
    """
    if explicit is not None:
        return Path(explicit).expanduser()
    if env_home := os.environ.get(HOME_ENV_VAR):
        return Path(env_home).expanduser()
    return get_xdg_data_home() / "brainstash"


def load_yaml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a YAML mapping, returning None if missing, empty or invalid.

    Args:
        path: Path to YAML file

    Returns:
        Parsed mapping, or None when there is nothing usable
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None

    # Empty and comment-only files load as None
    if isinstance(data, dict):
        return data
    if data is not None:
        logger.warning("Ignoring config at %s: top level is not a mapping", path)
    return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        BRAINSTASH_POLL_INTERVAL_MS - overrides clipboard.poll_interval_ms

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if interval_str := os.environ.get(POLL_INTERVAL_ENV_VAR):
        try:
            interval = ClipboardConfig(poll_interval_ms=interval_str).poll_interval_ms
        except ValidationError:
            logger.warning(
                "Invalid %s value '%s', ignoring", POLL_INTERVAL_ENV_VAR, interval_str
            )
        else:
            clipboard = dict(result.get("clipboard") or {})
            clipboard["poll_interval_ms"] = interval
            result["clipboard"] = clipboard

    return result


def load_config(brain_root: Path) -> BrainConfig:
    """
    Load the configuration of a brain.

    A missing, empty or malformed ``brain.yaml`` yields the defaults; a
    section that fails validation is logged and replaced by its defaults.

    Args:
        brain_root: Brain root directory

    Returns:
        Validated BrainConfig instance

    Example:
        >>> config = load_config(Path("~/brain").expanduser())
        >>> config.clipboard.poll_interval_ms
        500
    """
    raw = load_yaml_file(Path(brain_root) / BRAIN_YAML) or {}
    merged = apply_env_overrides(raw)

    try:
        return BrainConfig.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid configuration in %s: %s", brain_root, e)

    # Keep every section that validates on its own
    valid: dict[str, Any] = {}
    for key, value in merged.items():
        try:
            BrainConfig.model_validate({key: value})
        except ValidationError:
            logger.warning("Using defaults for '%s' section of %s", key, BRAIN_YAML)
            continue
        valid[key] = value
    return BrainConfig.model_validate(valid)
