"""
Frontmatter codec for knowledge files.

Converts between a structured record and its Markdown text form:

    ---
    <YAML fields>
    ---

    <body>

The header is located by direct line scanning rather than a regex over the
whole document, so horizontal rules (``---``) inside the body never move
the closing fence. YAML encoding and decoding go through python-frontmatter's
YAML handler (PyYAML safe loader/dumper). This module performs no I/O.
"""

from typing import Any, TypeVar

import yaml
from frontmatter import YAMLHandler  # type: ignore[import-untyped]

from brainstash.core.knowledge.errors import InvalidFrontmatterError, MissingFrontmatterError
from brainstash.core.knowledge.models import InboxItem, KnowledgeUnit

FENCE = "---"

RecordT = TypeVar("RecordT", KnowledgeUnit, InboxItem)

_handler = YAMLHandler()


def split_frontmatter(text: str, label: str) -> tuple[str, str]:
    """
    Split a document into its YAML header and body.

    Args:
        text: Full document text
        label: Identifying label (usually the file path) for diagnostics

    Returns:
        Tuple of (yaml_text, body)

    Raises:
        MissingFrontmatterError: If the opening or closing fence is missing
    """
    document = text.lstrip()
    opening, newline, after_opening = document.partition("\n")
    if opening.rstrip() != FENCE or not newline:
        raise MissingFrontmatterError(label)

    # The first line starting with the fence closes the header; anything
    # past it belongs to the body, fences included.
    offset = 0
    closing: int | None = None
    for line in after_opening.split("\n"):
        if line.startswith(FENCE):
            closing = offset
            break
        offset += len(line) + 1

    if closing is None:
        raise MissingFrontmatterError(label)

    yaml_text = after_opening[:closing]
    after_closing = after_opening[closing:]
    line_end = after_closing.find("\n")
    if line_end == -1:
        return yaml_text, ""
    return yaml_text, after_closing[line_end + 1 :].lstrip("\n")


def parse(
    text: str,
    label: str,
    model: type[RecordT],
    default_confidence: float | None = None,
) -> RecordT:
    """
    Parse a Markdown document into a record.

    Args:
        text: Full document text
        label: Identifying label (usually the file path) for diagnostics
        model: Record class to build (KnowledgeUnit or InboxItem)
        default_confidence: Confidence to use when the header omits it.
            Callers choose this; filed units and inbox items differ.

    Returns:
        Parsed record with the body preserved verbatim

    Raises:
        MissingFrontmatterError: If the fences are not found
        InvalidFrontmatterError: If the header does not decode into the model
    """
    yaml_text, body = split_frontmatter(text, label)

    try:
        metadata = _handler.load(yaml_text)
    except yaml.YAMLError as e:
        raise InvalidFrontmatterError(label, str(e)) from e

    if not isinstance(metadata, dict):
        raise InvalidFrontmatterError(label, "frontmatter is not a mapping")

    if default_confidence is not None and metadata.get("confidence") is None:
        metadata["confidence"] = default_confidence

    try:
        return model.from_frontmatter_dict(metadata, body=body)
    except (ValueError, TypeError) as e:
        raise InvalidFrontmatterError(label, str(e)) from e


def dump_yaml(data: dict[str, Any]) -> str:
    """Encode a mapping as block-style YAML, keeping key order."""
    return str(_handler.export(data, sort_keys=False))


def serialize(record: KnowledgeUnit | InboxItem) -> str:
    """
    Serialize a record into Markdown with a YAML header.

    A non-empty body is separated from the header by one blank line and
    always ends with a newline. An empty body emits the header only.
    """
    output = f"{FENCE}\n{dump_yaml(record.to_frontmatter_dict())}\n{FENCE}\n"

    body = record.body
    if body:
        output += "\n" + body
        if not body.endswith("\n"):
            output += "\n"

    return output
