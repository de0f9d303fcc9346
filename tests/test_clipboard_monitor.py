"""
Tests for the clipboard monitor.

The system clipboard is replaced by an injected reader, and the poll
loop is stopped through the caller-owned threading.Event.
"""

import threading
from collections.abc import Iterator

import pytest

from brainstash.core.capture.clipboard import ClipboardMonitor
from brainstash.core.config.models import ClipboardConfig
from brainstash.core.inbox.inbox import Inbox
from brainstash.core.knowledge.models import CaptureMethod
from brainstash.core.store.brain import BrainStore

LINK_TEXT = "Check out this link: https://example.com/article/123"


class FakeClipboard:
    """Clipboard returning queued values, then repeating the last one."""

    def __init__(self, *values: str):
        self.values = list(values)
        self.reads = 0

    def __call__(self) -> str:
        self.reads += 1
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0] if self.values else ""


@pytest.fixture
def config() -> ClipboardConfig:
    return ClipboardConfig(poll_interval_ms=10)


class TestCheckOnce:
    def test_url_captured(self, store: BrainStore, config: ClipboardConfig) -> None:
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(LINK_TEXT))

        path = monitor.check_once()

        assert path is not None
        item = Inbox(store).read_entry(path).item
        assert item.source == "https://example.com/article/123"
        assert item.suggested_domain == "unsorted"
        assert item.confidence == 0.5
        assert item.capture_method == CaptureMethod.CLIPBOARD_URL
        assert item.body == f"https://example.com/article/123\n\n{LINK_TEXT}\n"

    def test_bare_url_body(self, store: BrainStore, config: ClipboardConfig) -> None:
        url = "https://docs.rs/serde/latest/serde"
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(url))

        path = monitor.check_once()

        assert path is not None
        assert Inbox(store).read_entry(path).item.body == url + "\n"

    def test_accepted_url_named_after_link(self, store: BrainStore, config: ClipboardConfig) -> None:
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(LINK_TEXT))
        monitor.check_once()
        inbox = Inbox(store)

        dest = inbox.accept(inbox.list()[0])

        assert dest.name == "https-example-com-article-123.md"
        assert dest.parent == store.root / "unsorted"

    def test_unchanged_clipboard_ignored(self, store: BrainStore, config: ClipboardConfig) -> None:
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(LINK_TEXT))

        assert monitor.check_once() is not None
        assert monitor.check_once() is None
        assert len(Inbox(store).list()) == 1

    def test_duplicate_url_not_staged_twice(self, store: BrainStore, config: ClipboardConfig) -> None:
        other = "Same link again: https://example.com/article/123"
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(LINK_TEXT, other))

        monitor.check_once()
        assert monitor.check_once() is None
        assert len(Inbox(store).list()) == 1

    def test_plain_text_ignored_by_default(self, store: BrainStore, config: ClipboardConfig) -> None:
        text = "Remember to rotate the API keys every quarter"
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(text))

        assert monitor.check_once() is None

    def test_plain_text_captured_when_enabled(self, store: BrainStore) -> None:
        config = ClipboardConfig(capture_text=True, poll_interval_ms=10)
        text = "Remember to rotate the API keys every quarter"
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(text))

        path = monitor.check_once()

        assert path is not None
        item = Inbox(store).read_entry(path).item
        assert item.capture_method == CaptureMethod.CLIPBOARD_TEXT
        assert item.source is None
        assert item.confidence == 0.5

    def test_urls_disabled(self, store: BrainStore) -> None:
        config = ClipboardConfig(capture_urls=False, capture_text=True, poll_interval_ms=10)
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(LINK_TEXT))

        assert monitor.check_once() is None

    def test_empty_clipboard(self, store: BrainStore, config: ClipboardConfig) -> None:
        monitor = ClipboardMonitor(config, store, read_clipboard=FakeClipboard(""))

        assert monitor.check_once() is None


class TestRunLoop:
    def test_stop_event_before_start(self, store: BrainStore, config: ClipboardConfig) -> None:
        stop = threading.Event()
        stop.set()
        clipboard = FakeClipboard(LINK_TEXT)

        ClipboardMonitor(config, store, read_clipboard=clipboard, stop_event=stop).run()

        assert clipboard.reads == 0

    def test_thread_stops_on_event(self, store: BrainStore, config: ClipboardConfig) -> None:
        stop = threading.Event()
        captured = threading.Event()

        def reader() -> str:
            captured.set()
            return LINK_TEXT

        monitor = ClipboardMonitor(config, store, read_clipboard=reader, stop_event=stop)
        thread = monitor.start()

        assert captured.wait(timeout=5)
        stop.set()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert len(Inbox(store).list()) == 1

    def test_errors_do_not_stop_loop(
        self, store: BrainStore, config: ClipboardConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        stop = threading.Event()
        calls: Iterator[int] = iter(range(1000))

        def flaky_reader() -> str:
            n = next(calls)
            if n >= 2:
                stop.set()
            raise RuntimeError(f"clipboard unavailable ({n})")

        ClipboardMonitor(config, store, read_clipboard=flaky_reader, stop_event=stop).run()

        assert "clipboard unavailable (0)" in caplog.text
        assert "clipboard unavailable (2)" in caplog.text
