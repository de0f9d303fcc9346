"""
Capture producers.

Each producer builds candidate InboxItems from one kind of input and
stages them in the inbox. Producers never file knowledge directly; the
operator decides later through accept/reject.
"""

from pathlib import Path

from brainstash.core.inbox.inbox import Inbox
from brainstash.core.knowledge.models import CaptureMethod, InboxItem, KnowledgeKind
from brainstash.core.store.brain import BrainStore

DEFAULT_DOMAIN = "general"


def suggest_domain(context: str | None) -> str:
    """
    Suggest a domain based on keywords found in a context string.

    Performs simple case-insensitive keyword matching, first match wins.

    Example:
        >>> suggest_domain("rust programming session")
        'coding/rust'
        >>> suggest_domain(None)
        'general'
    """
    if not context:
        return DEFAULT_DOMAIN

    ctx = context.lower()
    if "rust" in ctx:
        return "coding/rust"
    if "python" in ctx:
        return "coding/python"
    if "javascript" in ctx or "typescript" in ctx or "react" in ctx:
        return "coding/javascript"
    if "golang" in ctx or " go " in ctx or ctx.startswith("go ") or ctx.endswith(" go"):
        return "coding/go"
    return DEFAULT_DOMAIN


def capture_from_conversation(
    store: BrainStore,
    summary: str,
    learnings: list[str],
    decisions: list[str],
    context: str | None = None,
) -> list[Path]:
    """
    Capture learnings and decisions from an AI conversation session.

    Learnings become ``pattern`` items and decisions become ``decision``
    items. Every item keeps the session summary as its capture context.

    Args:
        store: Brain to stage into
        summary: Summary of the session
        learnings: Learnings discovered
        decisions: Decisions made
        context: Optional context string, used for domain suggestion and
            recorded as the source

    Returns:
        Paths of the pending files, learnings first
    """
    inbox = Inbox(store)
    domain = suggest_domain(context)
    paths: list[Path] = []

    batches = ((KnowledgeKind.PATTERN, learnings), (KnowledgeKind.DECISION, decisions))
    for kind, texts in batches:
        for text in texts:
            item = InboxItem.create(kind, domain, CaptureMethod.AI_SESSION, text)
            item.capture_context = summary
            item.source = context
            paths.append(inbox.add(item))

    return paths


def capture_from_url(
    store: BrainStore,
    url: str,
    title: str,
    summary: str,
    tags: list[str] | None = None,
    domain: str | None = None,
) -> Path:
    """
    Capture a web page as a concept candidate.

    The body is ``# <title>`` followed by the summary; the URL becomes the
    source.

    Returns:
        Path of the pending file
    """
    body = f"# {title}\n\n{summary}"
    item = InboxItem.create(
        KnowledgeKind.CONCEPT,
        domain or DEFAULT_DOMAIN,
        CaptureMethod.WEB_CAPTURE,
        body,
    )
    item.source = url
    item.tags = list(tags or [])
    return Inbox(store).add(item)


def capture_from_text(
    store: BrainStore,
    text: str,
    source: str | None = None,
    domain: str | None = None,
    tags: list[str] | None = None,
    kind: KnowledgeKind = KnowledgeKind.CONCEPT,
) -> Path:
    """
    Capture a plain text candidate typed or piped in by the user.

    Returns:
        Path of the pending file
    """
    item = InboxItem.create(kind, domain or DEFAULT_DOMAIN, CaptureMethod.MANUAL, text)
    item.source = source
    item.tags = list(tags or [])
    return Inbox(store).add(item)
