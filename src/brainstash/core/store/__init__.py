"""
Brainstash store module.

File-system adapter for a brain directory: initialization, domains, and
reading/writing filed knowledge units through the frontmatter codec.
"""

from brainstash.core.store.brain import (
    DOMAIN_YAML,
    INBOX_DIR,
    BrainStore,
    make_preview,
    read_text,
    remove_file,
    write_text,
)

__all__ = [
    "DOMAIN_YAML",
    "INBOX_DIR",
    "BrainStore",
    "make_preview",
    "read_text",
    "remove_file",
    "write_text",
]
