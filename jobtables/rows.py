"""
Row extraction: turns table rows into candidate job postings.

Handles:
- Continuation rows (``↳``) that inherit the previous row's employer
- Flagged-employer markers (🔥, ``alt="fire"``, ``:fire:``)
- Link discovery from the link column, falling back to the employer cell
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from jobtables.columns import map_columns
from jobtables.extract.markers import extract_links, has_fire_marker, strip_fire_markers, strip_links
from jobtables.harmonize.links import is_aggregator, is_simplify_link
from jobtables.models import (
    DEFAULT_CATEGORY,
    CanonicalJobPosting,
    ColumnMapping,
    ParsedTable,
)

logger = logging.getLogger(__name__)


CONTINUATION_MARKER = "↳"

# Header rows repeated inside the body of long tables
HEADER_EMPLOYER = "company"
HEADER_ROLE = "role"


@dataclass(frozen=True)
class RowResult:
    """A candidate posting plus the employer state carried to the next row."""
    posting: CanonicalJobPosting
    employer: str
    is_flagged: bool


@dataclass
class ExtractionResult:
    """Result of extracting postings from a set of tables."""
    postings: List[CanonicalJobPosting]
    rows_seen: int = 0
    rows_rejected: int = 0
    rows_without_link: int = 0
    tables_skipped: int = 0


def _cell(row: Sequence[str], index: Optional[int]) -> str:
    if index is None or index < 0 or index >= len(row):
        return ""
    return row[index] or ""


def _clean(cell: str) -> str:
    return strip_fire_markers(strip_links(cell))


def _find_links(link_cell: str, employer_cell: str):
    """Return (company_link, aggregator_link, aggregator_name) for a row."""
    company_link: Optional[str] = None
    aggregator_link: Optional[str] = None

    for url in extract_links(link_cell):
        if is_simplify_link(url):
            if aggregator_link is None:
                aggregator_link = url
        elif company_link is None:
            company_link = url

    if company_link is None:
        # Some boards link the employer name to its careers page
        company_link = next(
            (url for url in extract_links(employer_cell) if not is_aggregator(url)),
            None,
        )

    aggregator_name = "Simplify" if aggregator_link else None
    return company_link, aggregator_link, aggregator_name


def extract_row(
    row: Sequence[str],
    mapping: ColumnMapping,
    category: str = DEFAULT_CATEGORY,
    previous: Optional[RowResult] = None,
) -> Optional[RowResult]:
    """
    Extract a candidate posting from one table row.

    ``previous`` is the last successfully extracted row of the same table,
    used to resolve continuation rows. Returns None for rows that cannot
    yield a posting; never raises on malformed cells.
    """
    if mapping.employer is None or mapping.role is None:
        return None
    if mapping.employer >= len(row) or mapping.role >= len(row):
        return None

    role = strip_links(_cell(row, mapping.role))
    raw_employer = _cell(row, mapping.employer)
    is_flagged = has_fire_marker(raw_employer)
    employer = _clean(raw_employer)

    if employer.startswith(CONTINUATION_MARKER):
        if previous is None:
            logger.debug("Continuation row without a previous row: %r", row)
            return None
        employer = previous.employer
        is_flagged = previous.is_flagged

    if not employer or not role:
        return None
    if employer.lower() == HEADER_EMPLOYER or role.lower() == HEADER_ROLE:
        return None

    company_link, aggregator_link, aggregator_name = _find_links(
        _cell(row, mapping.link), raw_employer
    )

    posting = CanonicalJobPosting(
        employer=employer,
        role=role,
        location=_clean(_cell(row, mapping.location)),
        category=category,
        company_link=company_link,
        aggregator_link=aggregator_link,
        aggregator_name=aggregator_name,
        date_posted=_clean(_cell(row, mapping.date_posted)),
        notes=_clean(_cell(row, mapping.notes)),
        is_flagged_employer=is_flagged,
    )
    return RowResult(posting=posting, employer=employer, is_flagged=is_flagged)


def extract_jobs(tables: Iterable[ParsedTable], require_link: bool = True) -> ExtractionResult:
    """
    Extract candidate postings from tables in document order.

    Continuation state never crosses table boundaries. Tables whose headers
    map neither an employer nor a role column are skipped.
    """
    result = ExtractionResult(postings=[])

    for table in tables:
        mapping = map_columns(table.headers)
        if not mapping.is_job_table:
            logger.debug("Skipping non-job table with headers %r", table.headers)
            result.tables_skipped += 1
            continue

        previous: Optional[RowResult] = None
        for row in table.rows:
            result.rows_seen += 1
            extracted = extract_row(row, mapping, table.category, previous)
            if extracted is None:
                result.rows_rejected += 1
                continue
            previous = extracted

            if not extracted.posting.has_link:
                result.rows_without_link += 1
                if require_link:
                    continue
            result.postings.append(extracted.posting)

    logger.debug(
        "Extracted %d postings from %d rows (%d rejected, %d without link)",
        len(result.postings),
        result.rows_seen,
        result.rows_rejected,
        result.rows_without_link,
    )
    return result
