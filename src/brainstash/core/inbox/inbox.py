"""
Inbox staging for captured candidates.

Every candidate lives as one Markdown file in ``<brain>/inbox/`` until an
operator decides on it:

    pending  --accept-->  filed unit in <brain>/<domain>/<slug>.md
    pending  --reject-->  gone (no trace kept)

Accept writes the filed unit first and deletes the pending file second.
There is no transaction around the pair: a crash in between leaves the
item in both places, and the pending file shows up again on the next
listing. Accepting it again derives the same slug and overwrites the
filed copy, so a retry is harmless.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

from brainstash.core.knowledge.errors import (
    BrainError,
    DuplicateIndexError,
    IndexOutOfRangeError,
)
from brainstash.core.knowledge.frontmatter import parse, serialize
from brainstash.core.knowledge.models import DEFAULT_INBOX_CONFIDENCE, InboxItem
from brainstash.core.store.brain import BrainStore, read_text, remove_file, write_text

logger = logging.getLogger(__name__)

SLUG_SOURCE_CHARS = 60
DEDUP_WINDOW = timedelta(hours=24)


@dataclass
class InboxEntry:
    """A pending item together with the file that holds it."""

    item: InboxItem
    path: Path


def inbox_filename(item: InboxItem) -> str:
    """
    Name a pending file so that names sort chronologically.

    Returns:
        ``<YYYYMMDD-HHMMSS>-<first 8 chars of id>.md``
    """
    stamp = item.captured_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return f"{stamp}-{item.id[:8]}.md"


def slug_from_body(body: str, now: datetime | None = None) -> str:
    """
    Derive a filesystem slug from the first line of a body.

    The first 60 characters are lowercased, every run of non-alphanumeric
    characters becomes one hyphen, and leading/trailing hyphens are
    trimmed. A blank or symbols-only line falls back to a timestamp.

    Example:
        >>> slug_from_body("Hello World!")
        'hello-world'
    """
    lines = body.splitlines()
    first_line = lines[0] if lines else ""

    chars = [c.lower() if c.isalnum() else "-" for c in first_line[:SLUG_SOURCE_CHARS]]
    slug = re.sub(r"-+", "-", "".join(chars)).strip("-")
    if slug:
        return slug

    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d-%H%M%S")
    return f"item-{stamp}"


class Inbox:
    """
    Staging area for candidates awaiting review.

    Index-based operations address items by their 1-based position in a
    fresh ``list()``, which is ordered oldest first.

    Example:
        inbox = Inbox(BrainStore(root))
        inbox.add(InboxItem.create(KnowledgeKind.CONCEPT, "general",
                                   CaptureMethod.MANUAL, "Some note"))
        entries = inbox.list()
        inbox.accept(entries[0])
    """

    def __init__(self, store: BrainStore):
        self.store = store

    @property
    def inbox_dir(self) -> Path:
        return self.store.inbox_path()

    def add(self, item: InboxItem) -> Path:
        """
        Write a new pending item.

        Args:
            item: Candidate to stage

        Returns:
            Path to the pending file

        Raises:
            StoreIOError: If the file cannot be written
        """
        path = self.inbox_dir / inbox_filename(item)
        write_text(path, serialize(item))
        logger.debug("Staged %s (%s) at %s", item.id, item.capture_method.value, path)
        return path

    def read_entry(self, path: Path) -> InboxEntry:
        """
        Read one pending file.

        Raises:
            StoreIOError: If the file cannot be read
            MissingFrontmatterError: If the file has no header
            InvalidFrontmatterError: If the header does not decode
        """
        content = read_text(path)
        item = parse(content, str(path), InboxItem, DEFAULT_INBOX_CONFIDENCE)
        return InboxEntry(item=item, path=path)

    def list(self) -> list[InboxEntry]:
        """
        List pending items, oldest first.

        Files that fail to decode are skipped with a warning instead of
        failing the whole listing.

        Returns:
            Entries sorted ascending by captured_at (file name breaks ties)
        """
        if not self.inbox_dir.is_dir():
            return []

        entries: list[InboxEntry] = []
        for path in self.inbox_dir.glob("*.md"):
            try:
                entries.append(self.read_entry(path))
            except BrainError as e:
                logger.warning("Skipping malformed inbox item %s: %s", path, e)

        entries.sort(key=lambda e: (e.item.captured_at, e.path.name))
        return entries

    def get(self, index: int) -> InboxEntry:
        """
        Look up one pending item by its 1-based position.

        Raises:
            IndexOutOfRangeError: If index is outside 1..count
        """
        entries = self.list()
        _check_index(index, len(entries))
        return entries[index - 1]

    def accept(self, entry: InboxEntry, domain: str | None = None) -> Path:
        """
        File a pending item into a domain and remove it from the inbox.

        Args:
            entry: Pending entry from list()
            domain: Target domain (defaults to the item's suggested domain)

        Returns:
            Path to the filed unit

        Raises:
            StoreIOError: If writing the unit or deleting the pending file fails
        """
        unit = entry.item.to_knowledge_unit(domain)
        filename = f"{slug_from_body(entry.item.body)}.md"

        dest = self.store.write_knowledge(unit, filename)
        remove_file(entry.path)

        logger.info("Accepted %s into %s", entry.item.id, dest)
        return dest

    def reject(self, entry: InboxEntry) -> None:
        """
        Discard a pending item.

        Raises:
            StoreIOError: If the pending file cannot be deleted
        """
        remove_file(entry.path)
        logger.info("Rejected %s", entry.item.id)

    def accept_by_indices(self, indices: list[int], domain: str | None = None) -> list[Path]:
        """
        Accept several items addressed by 1-based index.

        All indices are checked against one fresh listing before anything
        is written; a bad batch leaves the inbox untouched. Items are
        processed in the order given.

        Raises:
            IndexOutOfRangeError: If any index is 0 or exceeds the count
            DuplicateIndexError: If an index appears more than once
        """
        entries = self.list()
        seen: set[int] = set()
        for index in indices:
            _check_index(index, len(entries))
            if index in seen:
                raise DuplicateIndexError(index)
            seen.add(index)

        return [self.accept(entries[index - 1], domain) for index in indices]

    def reject_by_indices(self, indices: list[int]) -> list[Path]:
        """
        Reject several items addressed by 1-based index.

        Indices are de-duplicated and processed highest first, so earlier
        deletions never shift the positions still to be processed. Never
        mix accepts into the same batch.

        Returns:
            Paths of the deleted pending files

        Raises:
            IndexOutOfRangeError: If any index is 0 or exceeds the count
        """
        entries = self.list()
        for index in indices:
            _check_index(index, len(entries))

        removed: list[Path] = []
        for index in sorted(set(indices), reverse=True):
            entry = entries[index - 1]
            self.reject(entry)
            removed.append(entry.path)
        return removed

    def has_recent_source(
        self,
        url: str,
        now: datetime | None = None,
        window: timedelta = DEDUP_WINDOW,
    ) -> bool:
        """
        Check whether a pending item already carries this source recently.

        Args:
            url: Exact source string to look for
            now: Reference time (defaults to the current UTC time)
            window: How far back a capture still counts (inclusive)

        Returns:
            True if a pending item has this source and was captured in
            ``[now - window, now]``
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - window
        return any(
            entry.item.source == url and cutoff <= entry.item.captured_at <= now
            for entry in self.list()
        )


def _check_index(index: int, count: int) -> None:
    if index < 1 or index > count:
        raise IndexOutOfRangeError(index, count)
