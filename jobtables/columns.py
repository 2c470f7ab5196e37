"""
Fuzzy mapping of table headers onto job-posting fields.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from jobtables.extract.markers import strip_links
from jobtables.models import ColumnMapping


# Evaluation order matters: a header can be claimed by one field only,
# and earlier fields win.
FIELD_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("employer", ["company", "employer", "organization", "org"]),
    ("role", ["role", "position", "title", "job"]),
    ("location", ["location", "city", "office", "where", "place"]),
    ("link", ["apply", "link", "application", "url"]),
    ("date_posted", ["date", "posted", "added", "age", "when"]),
    ("notes", ["note", "info", "requirement", "sponsor", "status"]),
]


def _find_index(headers: Sequence[str], keywords: List[str], claimed: Set[int]) -> Optional[int]:
    for index, header in enumerate(headers):
        if index in claimed:
            continue
        if any(kw in header for kw in keywords):
            return index
    return None


def map_columns(headers: Sequence[str]) -> ColumnMapping:
    """
    Build a ColumnMapping from a header row.

    Each field takes the first unclaimed header containing one of its
    keywords (case-insensitive substring match). Never raises; unmatched
    fields stay None.
    """
    lowered = [strip_links(h or "").lower() for h in headers or []]
    claimed: Set[int] = set()
    found: Dict[str, Optional[int]] = {}

    for field_name, keywords in FIELD_KEYWORDS:
        index = _find_index(lowered, keywords, claimed)
        if index is not None:
            claimed.add(index)
        found[field_name] = index

    return ColumnMapping(**found)
