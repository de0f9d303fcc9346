"""
Brainstash importers.

Bulk importers that stage existing notes as inbox candidates.
"""

from brainstash.core.importers.notion import (
    ImportSummary,
    clean_notion_title,
    extract_title,
    import_notion,
    suggest_domain_from_path,
)

__all__ = [
    "ImportSummary",
    "clean_notion_title",
    "extract_title",
    "import_notion",
    "suggest_domain_from_path",
]
