"""
Brainstash - personal knowledge store.

Captures small knowledge units from conversations, web pages, the
clipboard and note exports, stages them in an inbox for review, and files
accepted units into a domain-organized Markdown tree.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from brainstash.core.config.models import BrainConfig
from brainstash.core.knowledge.models import InboxItem, KnowledgeKind, KnowledgeUnit

__all__ = ["BrainConfig", "InboxItem", "KnowledgeKind", "KnowledgeUnit", "__version__"]
