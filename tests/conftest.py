"""
Pytest configuration and shared fixtures.

Provides an isolated environment, an initialized brain, and factories
for inbox items and filed units used across the test suite.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

import pytest

from brainstash.core.inbox.inbox import Inbox
from brainstash.core.knowledge.models import (
    CaptureMethod,
    InboxItem,
    KnowledgeKind,
    KnowledgeUnit,
)
from brainstash.core.store.brain import BrainStore

# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Keep every test away from the real home directory and .env files.

    Returns:
        Working directory the test runs in
    """
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("BRAINSTASH_HOME", raising=False)
    monkeypatch.delenv("BRAINSTASH_POLL_INTERVAL_MS", raising=False)
    return work_dir


# ==============================================================================
# Brain Fixtures
# ==============================================================================


@pytest.fixture
def brain_root(tmp_path: Path) -> Path:
    return tmp_path / "brain"


@pytest.fixture
def store(brain_root: Path) -> BrainStore:
    """Provide an initialized brain."""
    brain = BrainStore(brain_root)
    brain.init()
    return brain


@pytest.fixture
def inbox(store: BrainStore) -> Inbox:
    return Inbox(store)


# ==============================================================================
# Sample Data Fixtures
# ==============================================================================


@pytest.fixture
def make_item() -> Callable[..., InboxItem]:
    """
    Factory for inbox items with a controllable capture time.

    Example:
        item = make_item("Some note", minutes_ago=5, source="https://x.io")
    """
    counter = {"n": 0}

    def _make(
        body: str = "A captured note",
        *,
        minutes_ago: float = 0,
        source: str | None = None,
        kind: KnowledgeKind = KnowledgeKind.CONCEPT,
        suggested_domain: str = "general",
        capture_method: CaptureMethod = CaptureMethod.MANUAL,
    ) -> InboxItem:
        counter["n"] += 1
        return InboxItem(
            id=f"{counter['n']:08d}-0000-4000-8000-000000000000",
            kind=kind,
            suggested_domain=suggested_domain,
            captured_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
            capture_method=capture_method,
            source=source,
            body=body,
        )

    return _make


@pytest.fixture
def sample_unit() -> KnowledgeUnit:
    return KnowledgeUnit(
        id="pattern-error-handling",
        kind=KnowledgeKind.PATTERN,
        domain="coding/rust",
        tags=["errors", "result"],
        confidence=0.9,
        source="The Rust Book",
        body="# Error handling\n\nPrefer Result over panics.\n",
    )
