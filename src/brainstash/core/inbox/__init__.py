"""
Brainstash inbox module.

Staging layer where captured candidates wait for an accept or reject
decision before being filed into a domain.
"""

from brainstash.core.inbox.inbox import (
    DEDUP_WINDOW,
    Inbox,
    InboxEntry,
    inbox_filename,
    slug_from_body,
)

__all__ = [
    "DEDUP_WINDOW",
    "Inbox",
    "InboxEntry",
    "inbox_filename",
    "slug_from_body",
]
