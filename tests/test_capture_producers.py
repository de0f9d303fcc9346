"""
Tests for capture producers.
"""

import pytest

from brainstash.core.capture.producers import (
    capture_from_conversation,
    capture_from_text,
    capture_from_url,
    suggest_domain,
)
from brainstash.core.inbox.inbox import Inbox
from brainstash.core.knowledge.models import CaptureMethod, KnowledgeKind
from brainstash.core.store.brain import BrainStore


class TestSuggestDomain:
    @pytest.mark.parametrize(
        ("context", "expected"),
        [
            ("Rust programming session", "coding/rust"),
            ("debugging a Python script", "coding/python"),
            ("React hooks", "coding/javascript"),
            ("typescript generics", "coding/javascript"),
            ("Golang channels", "coding/go"),
            ("writing go code", "coding/go"),
            ("gardening tips", "general"),
            ("", "general"),
            (None, "general"),
        ],
    )
    def test_keywords(self, context: str | None, expected: str) -> None:
        assert suggest_domain(context) == expected

    def test_go_requires_word_boundary(self) -> None:
        assert suggest_domain("a good algorithm") == "general"


class TestConversation:
    def test_learnings_and_decisions(self, store: BrainStore) -> None:
        paths = capture_from_conversation(
            store,
            summary="Session about error handling",
            learnings=["Use thiserror for libraries", "Use anyhow for binaries"],
            decisions=["Adopt thiserror"],
            context="rust refactoring",
        )

        assert len(paths) == 3
        entries = Inbox(store).list()
        by_body = {e.item.body.strip(): e.item for e in entries}

        learning = by_body["Use thiserror for libraries"]
        assert learning.kind == KnowledgeKind.PATTERN
        assert learning.capture_method == CaptureMethod.AI_SESSION
        assert learning.capture_context == "Session about error handling"
        assert learning.source == "rust refactoring"
        assert learning.suggested_domain == "coding/rust"

        assert by_body["Adopt thiserror"].kind == KnowledgeKind.DECISION

    def test_nothing_to_capture(self, store: BrainStore) -> None:
        assert capture_from_conversation(store, "empty", [], []) == []
        assert Inbox(store).list() == []


class TestUrlAndText:
    def test_capture_url(self, store: BrainStore) -> None:
        path = capture_from_url(
            store,
            "https://doc.rust-lang.org/book/",
            "The Rust Book",
            "Official guide",
            tags=["rust", "docs"],
        )

        entry = Inbox(store).read_entry(path)
        assert entry.item.kind == KnowledgeKind.CONCEPT
        assert entry.item.body == "# The Rust Book\n\nOfficial guide\n"
        assert entry.item.source == "https://doc.rust-lang.org/book/"
        assert entry.item.tags == ["rust", "docs"]
        assert entry.item.suggested_domain == "general"
        assert entry.item.capture_method == CaptureMethod.WEB_CAPTURE

    def test_capture_url_with_domain(self, store: BrainStore) -> None:
        path = capture_from_url(store, "https://x.io", "X", "", domain="reading")

        assert Inbox(store).read_entry(path).item.suggested_domain == "reading"

    def test_capture_text(self, store: BrainStore) -> None:
        path = capture_from_text(
            store, "Prefer small PRs", source="team retro", tags=["process"], kind=KnowledgeKind.BELIEF
        )

        item = Inbox(store).read_entry(path).item
        assert item.kind == KnowledgeKind.BELIEF
        assert item.capture_method == CaptureMethod.MANUAL
        assert item.source == "team retro"
        assert item.tags == ["process"]
        assert item.confidence == 0.7
