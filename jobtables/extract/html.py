"""
HTML table extraction.

Each ``<table>`` block is parsed with BeautifulSoup; the nearest heading
before it (``<h1>``-``<h4>`` or a Markdown ``#`` line)
becomes the table's category.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag

from jobtables.extract.markdown import is_category_heading, parse_heading, shorten_heading
from jobtables.extract.markers import FIRE_GLYPH, link_marker, render_fire_markers, strip_html
from jobtables.models import DEFAULT_CATEGORY, ParsedTable, TableFormat, normalize_text

logger = logging.getLogger(__name__)


TABLE_BLOCK_PATTERN = re.compile(r"<table\b[^>]*>[\s\S]*?</table\s*>", re.IGNORECASE)
HTML_HEADING_PATTERN = re.compile(r"<h([1-4])\b[^>]*>([\s\S]*?)</h\1\s*>", re.IGNORECASE)

PLACEHOLDER_CELLS = {"", "-", "---"}


# ----------------------------- Headings -----------------------------

def extract_headings(text: str) -> List[Tuple[int, str]]:
    """
    Find section headings with their character offsets, sorted by position.

    Both HTML ``<h1>``-``<h4>`` elements and Markdown ``#`` lines count, since
    README files often mix Markdown headings with HTML tables.
    """
    headings: List[Tuple[int, str]] = []

    for m in HTML_HEADING_PATTERN.finditer(text):
        heading = strip_html(m.group(2))
        if is_category_heading(heading):
            headings.append((m.start(), heading))

    position = 0
    for line in text.splitlines(keepends=True):
        heading = parse_heading(line)
        if heading is not None and is_category_heading(heading):
            headings.append((position, heading))
        position += len(line)

    headings.sort(key=lambda h: h[0])
    return headings


def find_category(position: int, headings: List[Tuple[int, str]]) -> str:
    """Return the shortened text of the last heading before ``position``."""
    category: Optional[str] = None
    for heading_pos, heading in headings:
        if heading_pos >= position:
            break
        category = heading
    if category is None:
        return DEFAULT_CATEGORY
    return shorten_heading(category)


# ----------------------------- Cells -----------------------------

def cell_text(cell: Tag) -> str:
    """
    Whitespace-collapsed inner text of a cell with one ``[[LINK:url]]``
    marker appended per hyperlink.
    """
    for img in cell.find_all("img"):
        alt = (img.get("alt") or "").strip().lower()
        if alt == "fire" or alt == FIRE_GLYPH:
            img.replace_with(NavigableString(FIRE_GLYPH))

    links = []
    for a in cell.find_all("a", href=True):
        href = (a.get("href") or "").strip()
        if href:
            links.append(link_marker(href))

    text = render_fire_markers(cell.get_text(" ", strip=True))
    parts = [normalize_text(text)] + links
    return normalize_text(" ".join(p for p in parts if p))


def _row_cells(tr: Tag) -> List[str]:
    return [cell_text(c) for c in tr.find_all(["td", "th"])]


def _is_placeholder_row(cells: List[str]) -> bool:
    return not cells or all(c.strip() in PLACEHOLDER_CELLS for c in cells)


# ----------------------------- Tables -----------------------------

def parse_html_table(block: str, category: str = DEFAULT_CATEGORY) -> Optional[ParsedTable]:
    """Parse a single ``<table>...</table>`` block; None when it has no header row."""
    soup = BeautifulSoup(block, "lxml")
    table = soup.find("table")
    if table is None:
        return None

    trs = table.find_all("tr")
    if not trs:
        return None

    header_tr = next((tr for tr in trs if tr.find("th") is not None), trs[0])
    headers = _row_cells(header_tr)
    if not headers:
        return None

    rows: List[List[str]] = []
    for tr in trs:
        if tr is header_tr:
            continue
        cells = _row_cells(tr)
        if _is_placeholder_row(cells):
            continue
        rows.append(cells)

    return ParsedTable(headers=headers, rows=rows, format=TableFormat.HTML, category=category)


def parse_html_tables(text: str) -> List[ParsedTable]:
    """Extract every HTML table from a document, in order."""
    headings = extract_headings(text)
    tables: List[ParsedTable] = []

    for m in TABLE_BLOCK_PATTERN.finditer(text):
        category = find_category(m.start(), headings)
        table = parse_html_table(m.group(0), category=category)
        if table is None:
            logger.debug("Skipping HTML table at offset %d: no header row", m.start())
            continue
        logger.debug(
            "HTML table under %r: %d columns, %d rows", category, table.column_count, table.row_count
        )
        tables.append(table)

    return tables
