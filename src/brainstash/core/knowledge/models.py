"""
Knowledge data models for brainstash.

Defines the records stored as Markdown files with YAML frontmatter:
filed knowledge units, inbox candidates awaiting review, and the
per-domain metadata record. Serialization to and from the frontmatter
mapping lives here; the text encoding lives in the frontmatter codec.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Confidence assumed when a file omits the field. Candidates captured
# automatically are trusted less than reviewed, filed units.
DEFAULT_FILED_CONFIDENCE = 0.8
DEFAULT_INBOX_CONFIDENCE = 0.7


class KnowledgeKind(str, Enum):
    """What kind of knowledge a unit records."""

    CONCEPT = "concept"
    PATTERN = "pattern"
    DECISION = "decision"
    BUG = "bug"
    BELIEF = "belief"


class RelationKind(str, Enum):
    """How one knowledge unit relates to another."""

    USES = "uses"
    IMPLEMENTS = "implements"
    REQUIRES_UNDERSTANDING_OF = "requires_understanding_of"
    INFORMED_BY = "informed_by"
    OFTEN_COMBINED_WITH = "often_combined_with"


class CaptureMethod(str, Enum):
    """How an inbox candidate was captured."""

    CLIPBOARD_URL = "clipboard-url"
    CLIPBOARD_TEXT = "clipboard-text"
    AI_SESSION = "ai-session"
    WEB_CAPTURE = "web-capture"
    MANUAL = "manual"
    IMPORT = "import"


class Relation(BaseModel):
    """A directed link to another knowledge unit."""

    target_id: str = Field(..., min_length=1, description="ID of the related unit")
    kind: RelationKind = Field(..., description="Relation type")

    def to_frontmatter_dict(self) -> dict[str, str]:
        return {"target_id": self.target_id, "kind": self.kind.value}


def _clamp_confidence(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _ensure_aware(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _parse_tags(data: dict[str, Any]) -> list[str]:
    tags_raw = data.get("tags")
    if tags_raw is None:
        return []
    if isinstance(tags_raw, str):
        return [tags_raw]
    if isinstance(tags_raw, list):
        return [str(t) for t in tags_raw]
    raise ValueError(f"Invalid 'tags' value: {tags_raw!r}")


def _parse_related(data: dict[str, Any]) -> list[Relation]:
    related_raw = data.get("related")
    if related_raw is None:
        return []
    if not isinstance(related_raw, list):
        raise ValueError(f"Invalid 'related' value: {related_raw!r}")
    return [Relation.model_validate(r) for r in related_raw]


class KnowledgeUnit(BaseModel):
    """
    A filed, accepted piece of knowledge.

    Each unit is owned by exactly one Markdown file inside its domain
    directory. It is created when an inbox item is accepted and only ever
    changes by rewriting the whole file.

    Example:
        >>> unit = KnowledgeUnit(
        ...     id="pattern-error-handling",
        ...     kind=KnowledgeKind.PATTERN,
        ...     domain="coding/rust",
        ...     tags=["errors"],
        ...     body="# Error handling\\n",
        ... )
        >>> unit.confidence
        0.8
    """

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    kind: KnowledgeKind = Field(..., description="Knowledge type")
    domain: str = Field(..., min_length=1, description="Slash-delimited domain path")
    tags: list[str] = Field(default_factory=list, description="Ordered short labels")
    confidence: float = Field(
        default=DEFAULT_FILED_CONFIDENCE,
        description="Confidence clamped to [0.0, 1.0]",
    )
    source: str | None = Field(default=None, description="Free-text provenance")
    related: list[Relation] = Field(default_factory=list)
    body: str = Field(default="", description="Markdown body, preserved verbatim")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("confidence")
    @classmethod
    def clamp_confidence(cls, v: float) -> float:
        return _clamp_confidence(v)

    def to_frontmatter_dict(self) -> dict[str, Any]:
        """
        Convert the unit to an ordered frontmatter mapping.

        Returns:
            Dictionary suitable for YAML frontmatter (body excluded)
        """
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "domain": self.domain,
            "tags": list(self.tags),
            "confidence": self.confidence,
        }
        if self.source is not None:
            data["source"] = self.source
        data["related"] = [r.to_frontmatter_dict() for r in self.related]
        return data

    @classmethod
    def from_frontmatter_dict(cls, data: dict[str, Any], body: str = "") -> "KnowledgeUnit":
        """
        Create a KnowledgeUnit from a parsed frontmatter mapping.

        Args:
            data: Mapping decoded from the YAML header
            body: Markdown body text

        Returns:
            KnowledgeUnit instance

        Raises:
            ValueError: If required fields are missing or invalid
        """
        if "type" not in data:
            raise ValueError("'type' field is required")

        return cls(
            id=data.get("id"),
            kind=data["type"],
            domain=data.get("domain"),
            tags=_parse_tags(data),
            confidence=data.get("confidence", DEFAULT_FILED_CONFIDENCE),
            source=data.get("source"),
            related=_parse_related(data),
            body=body,
        )


class InboxItem(BaseModel):
    """
    A candidate awaiting review in the inbox.

    Items are created by a capture producer, live as one file in the inbox
    directory, and leave it exactly once: either accepted (becoming a
    KnowledgeUnit) or rejected (deleted).
    """

    id: str = Field(..., min_length=8, description="Unique identifier (UUID)")
    kind: KnowledgeKind = Field(..., description="Knowledge type")
    tags: list[str] = Field(default_factory=list)
    confidence: float = Field(default=DEFAULT_INBOX_CONFIDENCE)
    source: str | None = Field(default=None)
    related: list[Relation] = Field(default_factory=list)
    suggested_domain: str = Field(..., min_length=1)
    suggested_path: str | None = Field(default=None)
    captured_at: datetime = Field(..., description="Capture timestamp (UTC)")
    capture_method: CaptureMethod = Field(...)
    capture_context: str | None = Field(default=None)
    body: str = Field(default="")

    @field_validator("confidence")
    @classmethod
    def clamp_confidence(cls, v: float) -> float:
        return _clamp_confidence(v)

    @field_validator("captured_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        return _ensure_aware(v)

    @classmethod
    def create(
        cls,
        kind: KnowledgeKind,
        suggested_domain: str,
        capture_method: CaptureMethod,
        body: str,
    ) -> "InboxItem":
        """Build a fresh candidate with a new UUID, captured now."""
        return cls(
            id=str(uuid.uuid4()),
            kind=kind,
            suggested_domain=suggested_domain,
            captured_at=datetime.now(timezone.utc),
            capture_method=capture_method,
            body=body,
        )

    def to_knowledge_unit(self, domain: str | None = None) -> KnowledgeUnit:
        """
        Convert this candidate into a filed unit.

        Args:
            domain: Target domain (defaults to the suggested domain)

        Returns:
            KnowledgeUnit carrying this item's id, metadata and body
        """
        return KnowledgeUnit(
            id=self.id,
            kind=self.kind,
            domain=domain or self.suggested_domain,
            tags=list(self.tags),
            confidence=self.confidence,
            source=self.source,
            related=[r.model_copy() for r in self.related],
            body=self.body,
        )

    def to_frontmatter_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "tags": list(self.tags),
            "confidence": self.confidence,
        }
        if self.source is not None:
            data["source"] = self.source
        data["related"] = [r.to_frontmatter_dict() for r in self.related]
        data["suggested_domain"] = self.suggested_domain
        if self.suggested_path is not None:
            data["suggested_path"] = self.suggested_path
        data["captured_at"] = self.captured_at.isoformat()
        data["capture_method"] = self.capture_method.value
        if self.capture_context is not None:
            data["capture_context"] = self.capture_context
        return data

    @classmethod
    def from_frontmatter_dict(cls, data: dict[str, Any], body: str = "") -> "InboxItem":
        """
        Create an InboxItem from a parsed frontmatter mapping.

        Raises:
            ValueError: If required fields are missing or invalid
        """
        for required in ("type", "captured_at", "capture_method"):
            if required not in data:
                raise ValueError(f"'{required}' field is required")

        captured_raw = data["captured_at"]
        if isinstance(captured_raw, str):
            try:
                captured_at = datetime.fromisoformat(captured_raw)
            except ValueError as e:
                raise ValueError(f"Invalid 'captured_at' timestamp: {captured_raw}") from e
        elif isinstance(captured_raw, datetime):
            captured_at = captured_raw
        else:
            raise ValueError(f"Invalid 'captured_at' type: {type(captured_raw)}")

        return cls(
            id=data.get("id"),
            kind=data["type"],
            tags=_parse_tags(data),
            confidence=data.get("confidence", DEFAULT_INBOX_CONFIDENCE),
            source=data.get("source"),
            related=_parse_related(data),
            suggested_domain=data.get("suggested_domain"),
            suggested_path=data.get("suggested_path"),
            captured_at=captured_at,
            capture_method=data["capture_method"],
            capture_context=data.get("capture_context"),
            body=body,
        )


class DomainMeta(BaseModel):
    """Descriptive metadata stored in ``<domain>/domain.yaml``."""

    name: str = Field(..., min_length=1)
    description: str | None = Field(default=None)

    def to_yaml_dict(self) -> dict[str, str]:
        data = {"name": self.name}
        if self.description is not None:
            data["description"] = self.description
        return data


class KnowledgeSummary(BaseModel):
    """One-line listing entry for a filed unit."""

    id: str
    kind: KnowledgeKind
    tags: list[str] = Field(default_factory=list)
    preview: str = ""
    path: str = Field(..., description="POSIX path relative to the brain root")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "tags": list(self.tags),
            "preview": self.preview,
            "path": self.path,
        }
