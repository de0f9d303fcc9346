"""
Exception taxonomy for brainstash.

Codec and store errors propagate to the caller unchanged; nothing in the
core retries. The CLI turns them into an error message and a non-zero
exit code, the tool facade into a structured failure.
"""

from pathlib import Path


class BrainError(Exception):
    """Base exception for all brainstash errors."""

    pass


class StoreIOError(BrainError):
    """Raised when a file or directory cannot be read, written or removed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class MissingFrontmatterError(BrainError):
    """Raised when no opening or closing ``---`` fence is found."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"missing frontmatter in {label}")


class InvalidFrontmatterError(BrainError):
    """Raised when the fences are present but the YAML fields do not decode."""

    def __init__(self, label: str, reason: str) -> None:
        self.label = label
        self.reason = reason
        super().__init__(f"invalid frontmatter in {label}: {reason}")


class IndexOutOfRangeError(BrainError, IndexError):
    """Raised when an inbox index falls outside ``1..=count``."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        if count:
            super().__init__(f"index {index} out of range (1-{count})")
        else:
            super().__init__(f"index {index} out of range (inbox is empty)")


class DuplicateIndexError(BrainError, ValueError):
    """Raised when a batch accept names the same inbox index twice."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"index {index} given more than once")


class PathTraversalError(BrainError):
    """Raised when a requested path resolves outside the brain root."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"path traversal denied: {path} is outside the brain")


class BrainNotInitializedError(BrainError):
    """Raised when the brain root has no ``brain.yaml`` marker."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"no brain found at {root} (missing brain.yaml)")


class InvalidDomainError(BrainError, ValueError):
    """Raised for an unusable domain name or an unreadable ``domain.yaml``."""

    def __init__(self, domain: str, reason: str) -> None:
        self.domain = domain
        self.reason = reason
        super().__init__(f"invalid domain '{domain}': {reason}")
