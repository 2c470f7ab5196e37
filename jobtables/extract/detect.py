"""
Table format detection.
"""

from __future__ import annotations

import re
from typing import Optional

from jobtables.models import TableFormat


HTML_TABLE_PATTERN = re.compile(r"<table\b[^>]*>", re.IGNORECASE)

# Pipe-delimited rows need at least two pipes with some content between them
PIPE_ROW_PATTERN = re.compile(r"\|[^|\n]*[^|\s][^|\n]*\|")

# |---|:---:| ... cells made only of dashes, colons and spaces
SEPARATOR_LINE_PATTERN = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")


def is_separator_line(line: str) -> bool:
    """Check if a line is a Markdown table separator row."""
    return "-" in line and "|" in line and bool(SEPARATOR_LINE_PATTERN.match(line))


def has_markdown_table(text: str) -> bool:
    """True when a pipe row is immediately followed by a separator row."""
    lines = text.splitlines()
    for current, following in zip(lines, lines[1:]):
        if PIPE_ROW_PATTERN.search(current) and is_separator_line(following):
            return True
    return False


def detect_format(text: Optional[str]) -> TableFormat:
    """
    Classify a document as HTML-table, Markdown-table, mixed or unknown.

    Pure function of its input; always returns a value.
    """
    if not text:
        return TableFormat.UNKNOWN

    has_html = HTML_TABLE_PATTERN.search(text) is not None
    has_markdown = has_markdown_table(text)

    if has_html and has_markdown:
        return TableFormat.MIXED
    if has_html:
        return TableFormat.HTML
    if has_markdown:
        return TableFormat.MARKDOWN
    return TableFormat.UNKNOWN
