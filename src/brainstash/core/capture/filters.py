"""
Capture filter pipeline for ambient input.

Decides whether a piece of clipboard text is worth staging. The pipeline
is a fixed chain of independent heuristics, run in this order and
stopping at the first rejection:

    1. length      - at least 20 characters
    2. entropy     - no-whitespace text must not look like a token/secret
    3. code        - no code-introducer lines, low bracket density
    4. url         - must contain an http(s) URL (the first one is used)
    5. domain      - URL host must not be on the ignore list
    6. dedup       - URL must not already be pending from the last 24h

Stages are pure except the dedup stage, which asks an oracle supplied by
the caller (normally ``Inbox.has_recent_source``). Nothing is cached
between calls.
"""

import logging
import math
import re
from collections import Counter
from collections.abc import Callable

from brainstash.core.config.models import ClipboardConfig

logger = logging.getLogger(__name__)

MIN_LENGTH = 20
MAX_ENTROPY = 4.5
MAX_BRACKET_RATIO = 0.1

CODE_PREFIXES = (
    "fn ",
    "def ",
    "class ",
    "import ",
    "const ",
    "let ",
    "var ",
    "function ",
)
BRACKETS = frozenset("{}[]()")

URL_PATTERN = re.compile(r"https?://[^\s<>\"{}|\\^\[\]`]+")


def shannon_entropy(text: str) -> float:
    """
    Compute the Shannon entropy of a string over character frequencies.

    Example:
        >>> shannon_entropy("aabb")
        1.0
    """
    if not text:
        return 0.0

    total = len(text)
    entropy = 0.0
    for count in Counter(text).values():
        p = count / total
        entropy -= p * math.log2(p)
    # -0.0 for single-symbol strings
    return abs(entropy)


def length_check(text: str) -> bool:
    return len(text) >= MIN_LENGTH


def entropy_check(text: str) -> bool:
    """Pass text with whitespace; otherwise require entropy <= 4.5."""
    if any(c.isspace() for c in text):
        return True
    return shannon_entropy(text) <= MAX_ENTROPY


def code_check(text: str) -> bool:
    """Pass text that does not look like source code."""
    for line in text.splitlines():
        if line.lstrip().startswith(CODE_PREFIXES):
            return False

    if not text:
        return True
    brackets = sum(1 for c in text if c in BRACKETS)
    return brackets / len(text) <= MAX_BRACKET_RATIO


def extract_url(text: str) -> str | None:
    """Return the first http(s) URL in the text, or None."""
    match = URL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_host(url: str) -> str | None:
    """
    Extract the host from a URL without a full URL parser.

    The host is the text between the scheme and the first ``/`` or ``:``.

    Example:
        >>> extract_host("http://localhost:8080/api")
        'localhost'
    """
    for scheme in ("https://", "http://"):
        if url.startswith(scheme):
            rest = url[len(scheme) :]
            break
    else:
        return None

    host = re.split(r"[/:]", rest, maxsplit=1)[0]
    return host or None


def domain_check(url: str, ignore_domains: list[str]) -> bool:
    """Pass URLs whose host is neither an ignored domain nor its subdomain."""
    host = extract_host(url)
    if host is None:
        return True
    host = host.lower()
    for domain in ignore_domains:
        domain = domain.lower()
        if host == domain or host.endswith("." + domain):
            return False
    return True


def passes_text_filters(text: str) -> bool:
    """Run the text-only stages (length, entropy, code)."""
    if not length_check(text):
        logger.debug("filter pipeline: dropped by length check")
        return False
    if not entropy_check(text):
        logger.debug("filter pipeline: dropped by entropy check")
        return False
    if not code_check(text):
        logger.debug("filter pipeline: dropped by code detection")
        return False
    return True


def run_filter_pipeline(
    text: str,
    config: ClipboardConfig,
    is_duplicate: Callable[[str], bool],
) -> str | None:
    """
    Run the full filter pipeline on a piece of captured text.

    Args:
        text: Raw input (e.g. clipboard contents)
        config: Clipboard configuration holding the ignore list
        is_duplicate: Oracle answering whether a URL is already pending

    Returns:
        The extracted URL if every stage passes, otherwise None
    """
    if not passes_text_filters(text):
        return None

    url = extract_url(text)
    if url is None:
        logger.debug("filter pipeline: no url found")
        return None

    if not domain_check(url, config.ignore_domains):
        logger.debug("filter pipeline: dropped by domain filter (%s)", url)
        return None

    if is_duplicate(url):
        logger.debug("filter pipeline: dropped by dedup check (%s)", url)
        return None

    return url
