"""
Configuration data models for brainstash.

These models define the structure of ``<brain>/brain.yaml``, with
validation and defaults via Pydantic.
"""

from pydantic import BaseModel, Field


def _default_ignore_domains() -> list[str]:
    return ["localhost", "mail.google.com", "accounts.google.com"]


class ClipboardConfig(BaseModel):
    """
    Clipboard monitor settings.

    Controls what the clipboard poll loop captures and which hosts the
    filter pipeline drops.
    """
    enabled: bool = Field(
        default=True,
        description="Allow the clipboard monitor to run"
    )
    capture_urls: bool = Field(
        default=True,
        description="Stage URLs found in clipboard text"
    )
    capture_text: bool = Field(
        default=False,
        description="Stage plain clipboard text that passes the text filters"
    )
    poll_interval_ms: int = Field(
        default=500,
        ge=10,
        description="Milliseconds between clipboard polls"
    )
    ignore_domains: list[str] = Field(
        default_factory=_default_ignore_domains,
        description="Hosts (and their subdomains) never captured"
    )


class BrainConfig(BaseModel):
    """
    Top-level brain configuration.

    Example:
        >>> config = BrainConfig(clipboard=ClipboardConfig(poll_interval_ms=1000))
        >>> config.clipboard.capture_urls
        True
    """
    version: int = Field(
        default=1,
        ge=1,
        description="Brain layout version"
    )
    clipboard: ClipboardConfig = Field(
        default_factory=ClipboardConfig,
        description="Clipboard monitor settings"
    )
