"""
Table extraction for jobtables.

Provides:
- Format detection (HTML, Markdown, mixed, unknown)
- Markdown pipe-table and HTML table parsing
- Inline ``[[LINK:url]]`` marker helpers
"""

from jobtables.extract.detect import detect_format
from jobtables.extract.markers import extract_links, strip_links, has_fire_marker
from jobtables.extract.tables import parse_tables

__all__ = [
    "detect_format",
    "parse_tables",
    "extract_links",
    "strip_links",
    "has_fire_marker",
]
