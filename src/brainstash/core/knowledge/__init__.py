"""
Brainstash knowledge module.

Data models, the exception taxonomy and the frontmatter codec shared by
the store, the inbox and the capture producers. Knowledge records are
Markdown files with a YAML header.
"""

from brainstash.core.knowledge.errors import (
    BrainError,
    BrainNotInitializedError,
    DuplicateIndexError,
    IndexOutOfRangeError,
    InvalidDomainError,
    InvalidFrontmatterError,
    MissingFrontmatterError,
    PathTraversalError,
    StoreIOError,
)
from brainstash.core.knowledge.models import (
    DEFAULT_FILED_CONFIDENCE,
    DEFAULT_INBOX_CONFIDENCE,
    CaptureMethod,
    DomainMeta,
    InboxItem,
    KnowledgeKind,
    KnowledgeSummary,
    KnowledgeUnit,
    Relation,
    RelationKind,
)

__all__ = [
    "DEFAULT_FILED_CONFIDENCE",
    "DEFAULT_INBOX_CONFIDENCE",
    "BrainError",
    "BrainNotInitializedError",
    "CaptureMethod",
    "DomainMeta",
    "DuplicateIndexError",
    "InboxItem",
    "IndexOutOfRangeError",
    "InvalidDomainError",
    "InvalidFrontmatterError",
    "KnowledgeKind",
    "KnowledgeSummary",
    "KnowledgeUnit",
    "MissingFrontmatterError",
    "PathTraversalError",
    "Relation",
    "RelationKind",
    "StoreIOError",
]
