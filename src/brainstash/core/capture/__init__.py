"""
Brainstash capture module.

Producers that turn conversations, web pages, plain text and clipboard
contents into inbox candidates, plus the filter pipeline used for
ambient capture.
"""

from brainstash.core.capture.clipboard import ClipboardMonitor
from brainstash.core.capture.filters import (
    domain_check,
    extract_host,
    extract_url,
    passes_text_filters,
    run_filter_pipeline,
    shannon_entropy,
)
from brainstash.core.capture.producers import (
    capture_from_conversation,
    capture_from_text,
    capture_from_url,
    suggest_domain,
)

__all__ = [
    "ClipboardMonitor",
    "capture_from_conversation",
    "capture_from_text",
    "capture_from_url",
    "domain_check",
    "extract_host",
    "extract_url",
    "passes_text_filters",
    "run_filter_pipeline",
    "shannon_entropy",
    "suggest_domain",
]
