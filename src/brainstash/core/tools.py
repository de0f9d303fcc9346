"""
Tool facade over a brain.

BrainTools exposes capture and browsing as plain methods returning
JSON-serializable dicts, the shape an external tool-calling server would
hand back to a model. Failures never raise: a BrainError or OSError is
returned as ``{"error": "<message>"}``.
"""

import functools
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from brainstash.core.capture.producers import (
    capture_from_conversation,
    capture_from_text,
    capture_from_url,
)
from brainstash.core.inbox.inbox import Inbox
from brainstash.core.knowledge.errors import BrainError
from brainstash.core.store.brain import BrainStore, make_preview

logger = logging.getLogger(__name__)

RECENT_ITEMS_LIMIT = 10
RECENT_PREVIEW_LENGTH = 80

F = TypeVar("F", bound=Callable[..., dict[str, Any]])


def structured_errors(func: F) -> F:
    """Turn BrainError/OSError raised by a tool into an error dict."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> dict[str, Any]:
        try:
            return func(*args, **kwargs)
        except (BrainError, OSError) as e:
            logger.warning("Tool %s failed: %s", func.__name__, e)
            return {"error": str(e)}

    return wrapper  # type: ignore[return-value]


class BrainTools:
    """
    Capture and browsing tools bound to one brain.

    Example:
        tools = BrainTools(BrainStore(root))
        tools.capture_text("Prefer composition over inheritance")
        tools.inbox_status()["pending_count"]
    """

    def __init__(self, store: BrainStore):
        self.store = store

    @structured_errors
    def capture_learnings(
        self,
        summary: str,
        learnings: list[str],
        decisions: list[str],
        context: str | None = None,
    ) -> dict[str, Any]:
        """Capture learnings and decisions from an AI conversation session."""
        paths = capture_from_conversation(self.store, summary, learnings, decisions, context)
        return {"captured": len(paths)}

    @structured_errors
    def capture_url(
        self,
        url: str,
        title: str,
        summary: str,
        tags: list[str] | None = None,
        domain: str | None = None,
    ) -> dict[str, Any]:
        """Capture a knowledge item from a URL."""
        path = capture_from_url(self.store, url, title, summary, tags, domain)
        return self._staged_result(path)

    @structured_errors
    def capture_text(
        self,
        text: str,
        source: str | None = None,
        domain: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        """Capture a plain text knowledge item."""
        path = capture_from_text(self.store, text, source, domain, tags)
        return self._staged_result(path)

    def _staged_result(self, path: Path) -> dict[str, Any]:
        entry = Inbox(self.store).read_entry(path)
        return {"item_id": entry.item.id, "path": str(path)}

    @structured_errors
    def inbox_status(self) -> dict[str, Any]:
        """Pending count plus the most recent items, newest first."""
        entries = Inbox(self.store).list()
        recent = [
            {
                "id": entry.item.id,
                "type": entry.item.kind.value,
                "captured_at": entry.item.captured_at.isoformat(),
                "preview": make_preview(entry.item.body, RECENT_PREVIEW_LENGTH),
            }
            for entry in reversed(entries[-RECENT_ITEMS_LIMIT:])
        ]
        return {"pending_count": len(entries), "recent_items": recent}

    @structured_errors
    def brain_summary(self) -> dict[str, Any]:
        """Total domains, total filed units and inbox count."""
        domains = self.store.list_domains()
        return {
            "total_domains": len(domains),
            "domains": domains,
            "total_units": len(self.store.walk_knowledge_files()),
            "inbox_count": len(Inbox(self.store).list()),
        }

    @structured_errors
    def list_domains(self) -> dict[str, Any]:
        """Every domain with its item count and description."""
        return {
            "domains": [
                {
                    "name": name,
                    "item_count": self.store.count_knowledge(name),
                    "description": self.store.domain_description(name),
                }
                for name in self.store.list_domains()
            ]
        }

    @structured_errors
    def list_knowledge(self, domain: str) -> dict[str, Any]:
        """Summaries (id, type, tags, preview, path) for one domain."""
        summaries = self.store.list_knowledge(domain)
        return {
            "domain": domain,
            "count": len(summaries),
            "items": [s.to_dict() for s in summaries],
        }

    @structured_errors
    def read_knowledge(self, path: str) -> dict[str, Any]:
        """Full content of one unit, addressed relative to the brain root."""
        unit = self.store.read_relative(path)
        return {
            "id": unit.id,
            "type": unit.kind.value,
            "domain": unit.domain,
            "tags": unit.tags,
            "confidence": unit.confidence,
            "source": unit.source,
            "body": unit.body,
        }
