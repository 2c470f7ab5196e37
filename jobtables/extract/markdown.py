"""
Markdown pipe-table parsing.

A table starts at a pipe row whose next line is a separator row and runs
until the first blank or non-pipe line. The nearest preceding ``#`` heading
becomes the table's category.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from jobtables.extract.detect import is_separator_line
from jobtables.extract.markers import link_marker, render_fire_markers, strip_html
from jobtables.models import DEFAULT_CATEGORY, ParsedTable, TableFormat, normalize_text

logger = logging.getLogger(__name__)


# [text](url), but not ![alt](src). URLs may hold one level of parentheses
MD_LINK_PATTERN = re.compile(
    r"(?<!!)\[([^\]]*)\]\(((?:[^()\s]|\([^()\s]*\))+)(?:\s+\"[^\"]*\")?\)"
)
MD_IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
MD_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")

# Inline <a href="...">text</a> inside Markdown cells
HTML_LINK_PATTERN = re.compile(
    r"<a\b[^>]*\bhref\s*=\s*[\"']([^\"']*)[\"'][^>]*>([\s\S]*?)</a>",
    re.IGNORECASE,
)

HEADING_PATTERN = re.compile(r"^\s{0,3}(#{1,6})\s*(.*?)\s*#*\s*$")

# Split on pipes not preceded by a backslash
CELL_SPLIT_PATTERN = re.compile(r"(?<!\\)\|")

FILLER_PATTERN = re.compile(
    r"\b(positions?|roles?|jobs?|opportunities|openings|new grad|entry level|full[- ]time|\d{4})\b",
    re.IGNORECASE,
)


# ----------------------------- Headings -----------------------------

def parse_heading(line: str) -> Optional[str]:
    """Return the text of a Markdown heading line, or None."""
    m = HEADING_PATTERN.match(line)
    if not m:
        return None
    text = m.group(2)
    # Anchor links like [Software Engineering](#software) keep only their text
    text = MD_LINK_PATTERN.sub(lambda lm: lm.group(1), text)
    text = strip_html(text)
    return text or None


def is_category_heading(text: Optional[str]) -> bool:
    """Closed-listing sections never become a category."""
    return bool(text) and "inactive" not in text.lower()


def shorten_heading(heading: str) -> str:
    """
    Shorten a section heading to a compact category label.

    Drops filler words like "Positions" or "New Grad" and keeps the first
    three words. Falls back to the first three words of the original.
    """
    shortened = normalize_text(FILLER_PATTERN.sub(" ", heading or ""))
    shortened = " ".join(shortened.split(" ")[:3]).strip()
    if not shortened:
        shortened = " ".join(normalize_text(heading).split(" ")[:3]).strip()
    return shortened or DEFAULT_CATEGORY


# ----------------------------- Cells -----------------------------

def _bold_text(m: "re.Match[str]") -> str:
    return m.group(1) if m.group(1) is not None else m.group(2)


def clean_markdown_cell(cell: str) -> str:
    """
    Convert one raw Markdown cell into display text with link markers.

    ``[text](url)`` becomes ``text [[LINK:url]]``, images collapse to their
    alt text, bold markers and leftover inline HTML are stripped.
    """
    text = cell.replace("\\|", "|")
    text = render_fire_markers(text)
    text = HTML_LINK_PATTERN.sub(lambda m: f"{m.group(2)} {link_marker(m.group(1))}", text)
    text = MD_IMAGE_PATTERN.sub(lambda m: m.group(1), text)
    text = MD_LINK_PATTERN.sub(lambda m: f"{m.group(1)} {link_marker(m.group(2))}", text)
    text = MD_BOLD_PATTERN.sub(_bold_text, text)
    return strip_html(text)


def split_row(line: str) -> List[str]:
    """Split a pipe row into trimmed raw cells."""
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    return [part.strip() for part in CELL_SPLIT_PATTERN.split(stripped)]


def is_pipe_row(line: str) -> bool:
    return line.count("|") - line.count("\\|") >= 1 and bool(line.strip())


# ----------------------------- Tables -----------------------------

def _collect_table(lines: List[str], start: int) -> Tuple[List[List[str]], int]:
    """Collect data rows after the separator; returns (rows, next index)."""
    rows: List[List[str]] = []
    i = start
    while i < len(lines):
        line = lines[i]
        if not line.strip() or not is_pipe_row(line):
            break
        cells = [clean_markdown_cell(c) for c in split_row(line)]
        if any(cells):
            rows.append(cells)
        i += 1
    return rows, i


def parse_markdown_tables(text: str) -> List[ParsedTable]:
    """Extract every Markdown pipe table from a document, in order."""
    tables: List[ParsedTable] = []
    lines = text.splitlines()
    category = DEFAULT_CATEGORY
    i = 0

    while i < len(lines):
        line = lines[i]

        heading = parse_heading(line)
        if heading is not None:
            if is_category_heading(heading):
                category = shorten_heading(heading)
            i += 1
            continue

        next_line = lines[i + 1] if i + 1 < len(lines) else ""
        if is_pipe_row(line) and not is_separator_line(line) and is_separator_line(next_line):
            headers = [clean_markdown_cell(c) for c in split_row(line)]
            rows, i = _collect_table(lines, i + 2)
            logger.debug(
                "Markdown table under %r: %d columns, %d rows", category, len(headers), len(rows)
            )
            tables.append(ParsedTable(
                headers=headers,
                rows=rows,
                format=TableFormat.MARKDOWN,
                category=category,
            ))
            continue

        i += 1

    return tables
