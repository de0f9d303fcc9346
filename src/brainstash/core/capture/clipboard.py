"""
Ambient clipboard capture.

ClipboardMonitor polls the system clipboard and stages anything that
survives the filter pipeline as an inbox candidate. The loop is
cancelled through a threading.Event owned by the caller; the monitor
never installs signal handlers itself.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from brainstash.core.capture.filters import extract_url, passes_text_filters, run_filter_pipeline
from brainstash.core.config.models import ClipboardConfig
from brainstash.core.inbox.inbox import Inbox
from brainstash.core.knowledge.models import CaptureMethod, InboxItem, KnowledgeKind
from brainstash.core.store.brain import BrainStore

logger = logging.getLogger(__name__)

UNSORTED_DOMAIN = "unsorted"
CLIPBOARD_CONFIDENCE = 0.5


def _read_system_clipboard() -> str:
    import pyperclip

    return pyperclip.paste()


class ClipboardMonitor:
    """
    Poll the clipboard and stage interesting content.

    Example:
        stop = threading.Event()
        monitor = ClipboardMonitor(config, store, stop_event=stop)
        thread = monitor.start()
        ...
        stop.set()
        thread.join()
    """

    def __init__(
        self,
        config: ClipboardConfig,
        store: BrainStore,
        read_clipboard: Callable[[], str] | None = None,
        stop_event: threading.Event | None = None,
    ):
        self.config = config
        self.store = store
        self.inbox = Inbox(store)
        self.read_clipboard = read_clipboard or _read_system_clipboard
        self.stop_event = stop_event or threading.Event()
        self.last_seen: str | None = None

    @property
    def interval(self) -> float:
        return self.config.poll_interval_ms / 1000

    def check_once(self) -> Path | None:
        """
        Read the clipboard once and stage its content if it qualifies.

        Content identical to the previous read is ignored.

        Returns:
            Path of the staged item, or None if nothing was captured
        """
        text = self.read_clipboard()
        if not text or text == self.last_seen:
            return None
        self.last_seen = text

        if self.config.capture_urls:
            url = run_filter_pipeline(text, self.config, self.inbox.has_recent_source)
            if url is not None:
                return self._stage_url(url, text)

        if self.config.capture_text and extract_url(text) is None and passes_text_filters(text):
            return self._stage_text(text)

        return None

    def _stage_url(self, url: str, text: str) -> Path:
        # URL first so the filed slug names the link, prose kept below it
        body = url if text.strip() == url else f"{url}\n\n{text.strip()}"
        item = InboxItem.create(
            KnowledgeKind.CONCEPT, UNSORTED_DOMAIN, CaptureMethod.CLIPBOARD_URL, body
        )
        item.source = url
        item.confidence = CLIPBOARD_CONFIDENCE
        path = self.inbox.add(item)
        logger.info("Captured URL from clipboard: %s", url)
        return path

    def _stage_text(self, text: str) -> Path:
        item = InboxItem.create(
            KnowledgeKind.CONCEPT, UNSORTED_DOMAIN, CaptureMethod.CLIPBOARD_TEXT, text
        )
        item.confidence = CLIPBOARD_CONFIDENCE
        path = self.inbox.add(item)
        logger.info("Captured text from clipboard (%d chars)", len(text))
        return path

    def run(self) -> None:
        """
        Poll until the stop event is set.

        Errors from a single poll are logged and the loop keeps going.
        """
        logger.info("Clipboard monitor started (every %d ms)", self.config.poll_interval_ms)
        while not self.stop_event.is_set():
            try:
                self.check_once()
            except Exception as e:
                logger.error("Clipboard poll failed: %s", e)
            self.stop_event.wait(self.interval)
        logger.info("Clipboard monitor stopped")

    def start(self) -> threading.Thread:
        """Run the monitor on a daemon thread and return the thread."""
        thread = threading.Thread(target=self.run, name="brainstash-clipboard", daemon=True)
        thread.start()
        return thread
