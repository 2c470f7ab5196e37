"""
Inline link markers.

Cells keep their visible text while every hyperlink is appended as a
``[[LINK:url]]`` marker, so link extraction stays independent of text
cleaning.
"""

from __future__ import annotations

import html
import re
from typing import List

from jobtables.models import normalize_text


LINK_MARKER_PATTERN = re.compile(r"\[\[LINK:([^\]]+)\]\]")

FIRE_GLYPH = "\U0001F525"

# <img ... alt="fire" ...> as used by several job boards for notable employers
FIRE_IMG_PATTERN = re.compile(r"<img\b[^>]*\balt\s*=\s*[\"']fire[\"'][^>]*>", re.IGNORECASE)
FIRE_SHORTCODE = ":fire:"

HTML_TAG_PATTERN = re.compile(r"<[^>]+>")


def link_marker(url: str) -> str:
    """Encode a URL as an inline marker."""
    return f"[[LINK:{url.strip()}]]"


def extract_links(cell: str) -> List[str]:
    """Return every marker URL in a cell, in order."""
    if not cell:
        return []
    return [m.strip() for m in LINK_MARKER_PATTERN.findall(cell) if m.strip()]


def strip_links(cell: str) -> str:
    """Remove link markers from a cell for display."""
    return normalize_text(LINK_MARKER_PATTERN.sub("", cell or ""))


def has_fire_marker(cell: str) -> bool:
    """Check for the flagged-employer glyph or its textual spellings."""
    if not cell:
        return False
    lowered = cell.lower()
    return (
        FIRE_GLYPH in cell
        or 'alt="fire"' in lowered
        or "alt='fire'" in lowered
        or FIRE_SHORTCODE in lowered
    )


def render_fire_markers(text: str) -> str:
    """Replace fire images and shortcodes with the glyph so they survive tag stripping."""
    if not text:
        return ""
    text = FIRE_IMG_PATTERN.sub(FIRE_GLYPH, text)
    return re.sub(re.escape(FIRE_SHORTCODE), FIRE_GLYPH, text, flags=re.IGNORECASE)


def strip_fire_markers(text: str) -> str:
    return normalize_text(render_fire_markers(text).replace(FIRE_GLYPH, ""))


def strip_html(text: str) -> str:
    """Drop tags, decode entities and collapse whitespace."""
    if not text:
        return ""
    text = HTML_TAG_PATTERN.sub("", text)
    return normalize_text(html.unescape(text))
