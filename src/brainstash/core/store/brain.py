"""
Brain storage layer for reading/writing knowledge from the filesystem.

Layout of a brain directory:

    <root>/brain.yaml                 # marker file; presence => initialized
    <root>/inbox/<stamp>-<id8>.md     # pending candidates (see core.inbox)
    <root>/<domain>/domain.yaml       # { name, description? }
    <root>/<domain>/<slug>.md         # filed knowledge unit

Domains are slash-delimited paths (``coding/rust``) mapped directly onto
nested directories. The filesystem is the only database: there are no
locks or transactions, and a single writer is assumed.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import yaml

from brainstash.core.config.loader import BRAIN_YAML
from brainstash.core.knowledge.errors import (
    BrainError,
    BrainNotInitializedError,
    InvalidDomainError,
    PathTraversalError,
    StoreIOError,
)
from brainstash.core.knowledge.frontmatter import dump_yaml, parse, serialize
from brainstash.core.knowledge.models import (
    DEFAULT_FILED_CONFIDENCE,
    DomainMeta,
    KnowledgeSummary,
    KnowledgeUnit,
)

logger = logging.getLogger(__name__)

INBOX_DIR = "inbox"
DOMAIN_YAML = "domain.yaml"
BRAIN_YAML_CONTENT = "version: 1\n"
GITIGNORE_CONTENT = ".brainstash/\n"
PREVIEW_LENGTH = 100


def read_text(path: Path) -> str:
    """Read a UTF-8 file, wrapping failures in StoreIOError."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise StoreIOError(path, f"cannot read file ({e.strerror or e})") from e


def write_text(path: Path, content: str) -> None:
    """Write a UTF-8 file, creating parent directories first."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise StoreIOError(path, f"cannot write file ({e.strerror or e})") from e


def remove_file(path: Path) -> None:
    """Delete a file, wrapping failures in StoreIOError."""
    try:
        path.unlink()
    except OSError as e:
        raise StoreIOError(path, f"cannot remove file ({e.strerror or e})") from e


def make_preview(body: str, max_length: int = PREVIEW_LENGTH) -> str:
    """
    Build a single-line preview from the first line of a body.

    Args:
        body: Markdown body
        max_length: Maximum preview length, ellipsis included

    Returns:
        First body line, cut to max_length with a trailing ``...``
    """
    lines = body.splitlines()
    first_line = lines[0] if lines else ""
    if len(first_line) > max_length:
        return first_line[: max_length - 3] + "..."
    return first_line


class BrainStore:
    """
    File-system adapter for a brain.

    Locates domain directories, reads and writes knowledge files through
    the frontmatter codec, and lists/counts what each domain holds.

    Example:
        store = BrainStore(Path("~/brain").expanduser())
        store.init()
        store.add_domain("coding/rust", "Rust notes")
        for summary in store.list_knowledge("coding/rust"):
            print(summary.path, summary.preview)
    """

    def __init__(self, root: Path):
        """
        Initialize store with a brain root directory.

        Args:
            root: Directory holding brain.yaml
        """
        self.root = Path(root)

    # ------------------------------------------------------------------
    # Brain lifecycle
    # ------------------------------------------------------------------

    def init(self) -> Path:
        """
        Create the brain skeleton. Idempotent: existing files are kept.

        Returns:
            The brain root path

        Raises:
            StoreIOError: If directories or files cannot be created
        """
        for directory in (self.root, self.inbox_path()):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreIOError(directory, "cannot create directory") from e

        brain_yaml = self.root / BRAIN_YAML
        if not brain_yaml.exists():
            write_text(brain_yaml, BRAIN_YAML_CONTENT)

        gitignore = self.root / ".gitignore"
        if not gitignore.exists():
            write_text(gitignore, GITIGNORE_CONTENT)

        return self.root

    def is_initialized(self) -> bool:
        """Check whether brain.yaml exists under the root."""
        return (self.root / BRAIN_YAML).exists()

    def require_initialized(self) -> None:
        """
        Raises:
            BrainNotInitializedError: If the brain has not been initialized
        """
        if not self.is_initialized():
            raise BrainNotInitializedError(self.root)

    def inbox_path(self) -> Path:
        return self.root / INBOX_DIR

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    def domain_path(self, domain: str) -> Path:
        """
        Map a domain name onto its directory.

        Args:
            domain: Slash-delimited domain path (e.g. 'coding/rust')

        Returns:
            Directory for the domain

        Raises:
            InvalidDomainError: If the name is empty or reserved
            PathTraversalError: If the name would leave the brain root
        """
        parts = [p for p in domain.strip().strip("/").split("/") if p]
        if not parts:
            raise InvalidDomainError(domain, "domain name cannot be empty")
        if domain.strip().startswith("/") or any(p in (".", "..") for p in parts):
            raise PathTraversalError(domain)
        if parts[0] == INBOX_DIR:
            raise InvalidDomainError(domain, f"'{INBOX_DIR}' is reserved for pending items")
        return self.root.joinpath(*parts)

    def add_domain(self, name: str, description: str | None = None) -> Path:
        """
        Create a domain directory and write its domain.yaml.

        Args:
            name: Domain path
            description: Optional human description

        Returns:
            Path to the domain directory
        """
        domain_dir = self.domain_path(name)
        meta = DomainMeta(name=name.strip("/"), description=description)
        write_text(domain_dir / DOMAIN_YAML, dump_yaml(meta.to_yaml_dict()) + "\n")
        logger.info("Created domain %s at %s", meta.name, domain_dir)
        return domain_dir

    def list_domains(self) -> list[str]:
        """
        List every domain in the brain.

        A domain is any directory below the root (outside the inbox and
        hidden directories) that holds a domain.yaml or at least one
        Markdown file. Directories created implicitly by an accept count.

        Returns:
            Sorted POSIX paths relative to the root
        """
        domains = [
            current.relative_to(self.root).as_posix()
            for current, filenames in self._walk_domain_dirs()
            if DOMAIN_YAML in filenames or any(f.endswith(".md") for f in filenames)
        ]
        domains.sort()
        return domains

    def _walk_domain_dirs(self) -> Iterator[tuple[Path, list[str]]]:
        """Yield every directory below the root with its file names."""
        for dirpath, dirnames, filenames in os.walk(self.root):
            current = Path(dirpath)
            # Prune hidden directories and the inbox in place
            dirnames[:] = [
                d
                for d in dirnames
                if not d.startswith(".") and not (current == self.root and d == INBOX_DIR)
            ]
            if current != self.root:
                yield current, filenames

    def read_domain_meta(self, domain: str) -> DomainMeta:
        """
        Read the domain.yaml metadata for a domain.

        Raises:
            StoreIOError: If domain.yaml is missing or unreadable
            InvalidDomainError: If domain.yaml does not hold a valid record
        """
        meta_path = self.domain_path(domain) / DOMAIN_YAML
        content = read_text(meta_path)
        try:
            data = yaml.safe_load(content)
            if not isinstance(data, dict):
                raise ValueError("domain.yaml is not a mapping")
            return DomainMeta(**data)
        except (yaml.YAMLError, ValueError, TypeError) as e:
            raise InvalidDomainError(domain, str(e)) from e

    def domain_description(self, domain: str) -> str | None:
        """Description from domain.yaml, or None when absent or unreadable."""
        if not (self.domain_path(domain) / DOMAIN_YAML).exists():
            return None
        try:
            return self.read_domain_meta(domain).description
        except BrainError as e:
            logger.warning("Skipping metadata for domain %s: %s", domain, e)
            return None

    # ------------------------------------------------------------------
    # Knowledge units
    # ------------------------------------------------------------------

    def write_knowledge(self, unit: KnowledgeUnit, filename: str) -> Path:
        """
        Write a filed unit into its domain directory.

        The domain directory is created when missing. An existing file with
        the same name is overwritten.

        Args:
            unit: Unit to write (its domain picks the directory)
            filename: File name including the .md extension

        Returns:
            Path to the written file
        """
        file_path = self.domain_path(unit.domain) / filename
        write_text(file_path, serialize(unit))
        return file_path

    def read_knowledge(self, path: Path) -> KnowledgeUnit:
        """
        Read and decode a filed unit.

        Raises:
            StoreIOError: If the file cannot be read
            MissingFrontmatterError: If the file has no header
            InvalidFrontmatterError: If the header does not decode
        """
        content = read_text(path)
        return parse(content, str(path), KnowledgeUnit, DEFAULT_FILED_CONFIDENCE)

    def resolve_within_root(self, relative: str) -> Path:
        """
        Resolve a caller-supplied path, refusing anything outside the root.

        Both sides are canonicalized, so ``..`` segments and symlinks that
        point out of the brain are rejected.

        Raises:
            PathTraversalError: If the resolved path escapes the root
        """
        root_canonical = self.root.resolve()
        canonical = (self.root / relative).resolve()
        if not canonical.is_relative_to(root_canonical):
            raise PathTraversalError(relative)
        return canonical

    def read_relative(self, relative: str) -> KnowledgeUnit:
        """Read a unit by its path relative to the brain root."""
        return self.read_knowledge(self.resolve_within_root(relative))

    def _domain_files(self, domain: str) -> list[Path]:
        domain_dir = self.domain_path(domain)
        if not domain_dir.is_dir():
            return []
        return sorted(p for p in domain_dir.rglob("*.md") if p.is_file())

    def count_knowledge(self, domain: str) -> int:
        """Count Markdown files in a domain directory, recursively."""
        return len(self._domain_files(domain))

    def list_knowledge(self, domain: str) -> list[KnowledgeSummary]:
        """
        Summarize every unit filed under a domain.

        Malformed files are skipped with a warning so one corrupt record
        does not hide the others.

        Returns:
            Summaries sorted by relative path
        """
        summaries: list[KnowledgeSummary] = []
        for path in self._domain_files(domain):
            try:
                unit = self.read_knowledge(path)
            except BrainError as e:
                logger.warning("Skipping %s: %s", path, e)
                continue

            summaries.append(
                KnowledgeSummary(
                    id=unit.id,
                    kind=unit.kind,
                    tags=unit.tags,
                    preview=make_preview(unit.body),
                    path=path.relative_to(self.root).as_posix(),
                )
            )

        return summaries

    def walk_knowledge_files(self) -> list[Path]:
        """
        Every filed Markdown file in the brain, each listed once.

        Nested domains share files with their parents, so totals must
        come from this walk rather than from summing per-domain counts.
        """
        return sorted(
            current / name
            for current, filenames in self._walk_domain_dirs()
            for name in filenames
            if name.endswith(".md")
        )
