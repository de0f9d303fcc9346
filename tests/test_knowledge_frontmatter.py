"""
Tests for the frontmatter codec.

Covers serialization layout, round trips, horizontal rules in bodies,
confidence defaults and the two error kinds.
"""

from datetime import datetime, timezone

import pytest

from brainstash.core.knowledge.errors import InvalidFrontmatterError, MissingFrontmatterError
from brainstash.core.knowledge.frontmatter import parse, serialize, split_frontmatter
from brainstash.core.knowledge.models import (
    CaptureMethod,
    InboxItem,
    KnowledgeKind,
    KnowledgeUnit,
    Relation,
    RelationKind,
)


class TestSerialize:
    """Test the text layout produced by serialize()."""

    def test_layout(self, sample_unit: KnowledgeUnit) -> None:
        text = serialize(sample_unit)

        assert text.startswith("---\nid: pattern-error-handling\ntype: pattern\n")
        assert "\n---\n\n# Error handling\n" in text
        assert text.endswith("Prefer Result over panics.\n")

    def test_field_order(self, sample_unit: KnowledgeUnit) -> None:
        yaml_text, _ = split_frontmatter(serialize(sample_unit), "test")
        keys = [line.split(":")[0] for line in yaml_text.splitlines() if not line.startswith(" ")]
        keys = [k for k in keys if not k.startswith("-")]

        assert keys == ["id", "type", "domain", "tags", "confidence", "source", "related"]

    def test_source_omitted_when_absent(self) -> None:
        unit = KnowledgeUnit(id="x", kind=KnowledgeKind.BUG, domain="general", body="b\n")

        assert "source:" not in serialize(unit)

    def test_missing_trailing_newline_added(self) -> None:
        unit = KnowledgeUnit(id="x", kind=KnowledgeKind.CONCEPT, domain="general", body="no newline")

        assert serialize(unit).endswith("no newline\n")

    def test_empty_body_emits_header_only(self) -> None:
        unit = KnowledgeUnit(id="x", kind=KnowledgeKind.CONCEPT, domain="general")

        assert serialize(unit).endswith("\n---\n")


class TestRoundTrip:
    """Test parse(serialize(r)) == r."""

    def test_unit_round_trip(self, sample_unit: KnowledgeUnit) -> None:
        sample_unit.related = [Relation(target_id="concept-ownership", kind=RelationKind.USES)]

        parsed = parse(serialize(sample_unit), "test", KnowledgeUnit)

        assert parsed == sample_unit

    def test_body_without_newline_gains_one(self) -> None:
        unit = KnowledgeUnit(id="x", kind=KnowledgeKind.CONCEPT, domain="general", body="hello")

        parsed = parse(serialize(unit), "test", KnowledgeUnit)

        assert parsed.body == "hello\n"

    def test_inbox_item_round_trip(self) -> None:
        item = InboxItem(
            id="0b0f8c5e-1111-4222-8333-944455556666",
            kind=KnowledgeKind.DECISION,
            tags=["arch"],
            confidence=0.6,
            source="chat",
            suggested_domain="coding/python",
            suggested_path="coding/python/async.md",
            captured_at=datetime(2026, 3, 1, 9, 30, 15, tzinfo=timezone.utc),
            capture_method=CaptureMethod.AI_SESSION,
            capture_context="Refactoring session",
            body="Use asyncio.TaskGroup\n",
        )

        parsed = parse(serialize(item), "test", InboxItem)

        assert parsed == item
        assert parsed.captured_at.tzinfo is not None

    def test_horizontal_rule_in_body_is_preserved(self) -> None:
        body = "Intro\n\n---\n\nAfter the rule\n---\n"
        unit = KnowledgeUnit(id="x", kind=KnowledgeKind.CONCEPT, domain="general", body=body)

        parsed = parse(serialize(unit), "test", KnowledgeUnit)

        assert parsed.body == body
        assert parsed.domain == "general"

    def test_unicode_survives(self) -> None:
        unit = KnowledgeUnit(
            id="x",
            kind=KnowledgeKind.BELIEF,
            domain="general",
            tags=["café"],
            body="Ünïcödé body ✓\n",
        )

        assert parse(serialize(unit), "test", KnowledgeUnit) == unit


class TestParse:
    """Test decoding details and defaults."""

    def test_leading_whitespace_ignored(self) -> None:
        text = "\n\n  ---\nid: a\ntype: concept\ndomain: general\n---\nbody\n"

        unit = parse(text, "test", KnowledgeUnit)

        assert unit.body == "body\n"

    def test_blank_lines_after_fence_skipped(self) -> None:
        text = "---\nid: a\ntype: concept\ndomain: general\n---\n\n\n\nbody\n"

        assert parse(text, "test", KnowledgeUnit).body == "body\n"

    def test_defaults_for_missing_fields(self) -> None:
        text = "---\nid: a\ntype: concept\ndomain: general\n---\n"

        unit = parse(text, "test", KnowledgeUnit, default_confidence=0.8)

        assert unit.tags == []
        assert unit.related == []
        assert unit.source is None
        assert unit.confidence == 0.8
        assert unit.body == ""

    def test_default_confidence_is_callers_choice(self) -> None:
        text = (
            "---\nid: 12345678-abcd\ntype: concept\nsuggested_domain: general\n"
            "captured_at: '2026-01-01T00:00:00+00:00'\ncapture_method: manual\n---\n"
        )

        assert parse(text, "test", InboxItem, default_confidence=0.7).confidence == 0.7

    def test_confidence_clamped(self) -> None:
        text = "---\nid: a\ntype: concept\ndomain: general\nconfidence: 1.7\n---\n"

        assert parse(text, "test", KnowledgeUnit).confidence == 1.0

    def test_single_string_tag(self) -> None:
        text = "---\nid: a\ntype: concept\ndomain: general\ntags: solo\n---\n"

        assert parse(text, "test", KnowledgeUnit).tags == ["solo"]

    def test_unquoted_timestamp_accepted(self) -> None:
        text = (
            "---\nid: 12345678-abcd\ntype: concept\nsuggested_domain: general\n"
            "captured_at: 2026-01-01 10:00:00\ncapture_method: manual\n---\n"
        )

        item = parse(text, "test", InboxItem)

        assert item.captured_at == datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)


class TestParseErrors:
    """Test MissingFrontmatterError and InvalidFrontmatterError."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "no frontmatter at all",
            "# Title\n---\nid: a\n---\n",
            "---",
            "---\nid: a\ntype: concept\n",
        ],
    )
    def test_missing_frontmatter(self, text: str) -> None:
        with pytest.raises(MissingFrontmatterError) as exc_info:
            parse(text, "notes/a.md", KnowledgeUnit)

        assert "notes/a.md" in str(exc_info.value)

    def test_yaml_syntax_error(self) -> None:
        text = "---\nid: [unclosed\ntype: concept\n---\n"

        with pytest.raises(InvalidFrontmatterError):
            parse(text, "test", KnowledgeUnit)

    def test_header_not_a_mapping(self) -> None:
        with pytest.raises(InvalidFrontmatterError, match="not a mapping"):
            parse("---\n- a\n- b\n---\n", "test", KnowledgeUnit)

    def test_unknown_type(self) -> None:
        text = "---\nid: a\ntype: rumor\ndomain: general\n---\n"

        with pytest.raises(InvalidFrontmatterError):
            parse(text, "test", KnowledgeUnit)

    def test_missing_type(self) -> None:
        text = "---\nid: a\ndomain: general\n---\n"

        with pytest.raises(InvalidFrontmatterError, match="'type'"):
            parse(text, "test", KnowledgeUnit)

    def test_inbox_item_requires_capture_method(self) -> None:
        text = (
            "---\nid: 12345678-abcd\ntype: concept\nsuggested_domain: general\n"
            "captured_at: '2026-01-01T00:00:00+00:00'\n---\n"
        )

        with pytest.raises(InvalidFrontmatterError, match="capture_method"):
            parse(text, "test", InboxItem)
