"""
Configuration models and loading.

This module provides Pydantic models for brain configuration, the loader
for ``brain.yaml`` and brain root resolution.
"""

from .env import load_layered_env
from .loader import (
    BRAIN_YAML,
    HOME_ENV_VAR,
    get_xdg_data_home,
    load_config,
    resolve_brain_root,
)
from .models import BrainConfig, ClipboardConfig

__all__ = [
    "BRAIN_YAML",
    "HOME_ENV_VAR",
    "BrainConfig",
    "ClipboardConfig",
    "get_xdg_data_home",
    "load_config",
    "load_layered_env",
    "resolve_brain_root",
]
