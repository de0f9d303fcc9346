"""
Notion markdown export importer.

Turns every page of an unzipped Notion "Markdown & CSV" export into an
inbox candidate. Only normalization happens here: titles and folder
names lose Notion's 32-hex id suffix, and the folder structure becomes a
suggested domain under ``imported/``.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from brainstash.core.inbox.inbox import Inbox
from brainstash.core.knowledge.errors import StoreIOError
from brainstash.core.knowledge.models import CaptureMethod, InboxItem, KnowledgeKind
from brainstash.core.store.brain import BrainStore

logger = logging.getLogger(__name__)

IMPORTED_DOMAIN = "imported"
MIN_CONTENT_LENGTH = 10
NOTION_ID_SUFFIX = re.compile(r"\s+[a-f0-9]{32}$")


@dataclass
class ImportSummary:
    """Counts from one import run."""

    imported: int = 0
    skipped: int = 0


def clean_notion_title(name: str) -> str:
    """
    Strip the id suffix Notion appends to page and folder names.

    Example:
        >>> clean_notion_title("My Page a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4")
        'My Page'
    """
    return NOTION_ID_SUFFIX.sub("", name)


def suggest_domain_from_path(path: Path, root: Path) -> str:
    """
    Derive a domain from the folders between the export root and a page.

    Example:
        >>> suggest_domain_from_path(Path("/export/Work/page.md"), Path("/export"))
        'imported/work'
    """
    try:
        relative = path.parent.relative_to(root)
    except ValueError:
        return IMPORTED_DOMAIN

    parts = [clean_notion_title(part).lower().replace(" ", "-") for part in relative.parts]
    if not parts:
        return IMPORTED_DOMAIN
    return "/".join([IMPORTED_DOMAIN, *parts])


def extract_title(content: str, filename: str) -> str:
    """Return the first non-empty ``# `` heading, else the cleaned file name."""
    for line in content.splitlines():
        trimmed = line.strip()
        if trimmed.startswith("# "):
            title = trimmed[2:].strip()
            if title:
                return title
    return clean_notion_title(filename)


def import_notion(store: BrainStore, export_dir: Path) -> ImportSummary:
    """
    Stage every page of a Notion export in the inbox.

    Unreadable files and pages with fewer than 10 characters of content
    (after trimming whitespace) are counted as skipped.

    Args:
        store: Brain to stage into
        export_dir: Root of the unzipped export

    Returns:
        ImportSummary with imported/skipped counts

    Raises:
        StoreIOError: If the export directory does not exist or an inbox
            write fails
    """
    export_root = Path(export_dir).expanduser()
    if not export_root.is_dir():
        raise StoreIOError(export_root, "export directory not found")
    export_root = export_root.resolve()

    inbox = Inbox(store)
    summary = ImportSummary()

    for path in sorted(export_root.rglob("*.md")):
        if not path.is_file():
            continue

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable export file %s: %s", path, e)
            summary.skipped += 1
            continue

        if len(content.strip()) < MIN_CONTENT_LENGTH:
            logger.debug("Skipping near-empty page %s", path)
            summary.skipped += 1
            continue

        title = extract_title(content, path.stem)
        item = InboxItem.create(
            KnowledgeKind.CONCEPT,
            suggest_domain_from_path(path, export_root),
            CaptureMethod.IMPORT,
            f"# {title}\n\n{content}",
        )
        item.source = f"notion:{path.relative_to(export_root).as_posix()}"

        inbox.add(item)
        summary.imported += 1

    logger.info(
        "Notion import finished: %d imported, %d skipped", summary.imported, summary.skipped
    )
    return summary
