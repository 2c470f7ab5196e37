"""
End-to-end harvesting of a job-listing document.

Ties together format detection, table parsing, row extraction,
deduplication and harmonization into a single harvest() function.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from jobtables.config import Settings, get_settings
from jobtables.dedupe import DedupeEngine
from jobtables.extract.detect import detect_format
from jobtables.extract.tables import parse_tables
from jobtables.harmonize.harmonizer import Harmonizer
from jobtables.models import CanonicalJobPosting, TableFormat
from jobtables.rows import extract_jobs

logger = logging.getLogger(__name__)


@dataclass
class HarvestStats:
    """Row counters for a harvest run."""
    rows_seen: int = 0
    rows_rejected: int = 0
    rows_without_link: int = 0
    duplicates_removed: int = 0
    tables_skipped: int = 0


@dataclass
class HarvestResult:
    """Postings and diagnostics from one document."""
    postings: List[CanonicalJobPosting]
    warnings: List[str] = field(default_factory=list)
    format: TableFormat = TableFormat.UNKNOWN
    tables: int = 0
    stats: HarvestStats = field(default_factory=HarvestStats)
    page_category: str = ""


def harvest(
    document: str,
    page_title: str = "",
    page_url: str = "",
    *,
    reference_date: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> HarvestResult:
    """
    Run the full pipeline over one document.

    Args:
        document: Raw Markdown/HTML text
        page_title: Title of the source page, used for category fallback
        page_url: Source URL, recorded in logs
        reference_date: "Today" for relative dates; overrides settings
        settings: Pipeline settings (defaults to get_settings())

    Returns:
        HarvestResult with harmonized postings, warnings and counters

    Raises:
        TypeError: if document is None or not a string
    """
    if document is None:
        raise TypeError("harvest() requires a document, got None")
    if not isinstance(document, str):
        raise TypeError(f"harvest() requires a str document, got {type(document).__name__}")

    settings = settings or get_settings()
    reference_date = reference_date or settings.reference_date

    fmt = detect_format(document)
    tables = parse_tables(document, fmt)
    stats = HarvestStats()
    warnings: List[str] = []

    logger.info("Detected %s document with %d tables", fmt.value, len(tables))

    if not tables:
        warnings.append("No tables found in document")
        return HarvestResult(postings=[], warnings=warnings, format=fmt, tables=0, stats=stats)

    extraction = extract_jobs(tables, require_link=settings.require_link)
    stats.rows_seen = extraction.rows_seen
    stats.rows_rejected = extraction.rows_rejected
    stats.rows_without_link = extraction.rows_without_link
    stats.tables_skipped = extraction.tables_skipped

    if extraction.rows_without_link and settings.require_link:
        warnings.append(f"{extraction.rows_without_link} rows skipped - no identifying link")

    postings = extraction.postings
    if settings.dedupe:
        deduped = DedupeEngine().dedupe(postings)
        stats.duplicates_removed = deduped.duplicates_removed
        postings = deduped.unique_postings
        if deduped.duplicates_removed:
            logger.debug("Removed %d duplicate postings", deduped.duplicates_removed)

    harmonizer = Harmonizer(
        reference_date=reference_date,
        default_country=settings.default_country,
        default_category=settings.default_category,
    )
    harmonized = harmonizer.harmonize(postings, page_title=page_title, page_url=page_url)
    warnings.extend(harmonized.warnings)

    logger.info(
        "Harvested %d postings (%d rows seen, %d rejected, %d without link, %d duplicates)",
        len(harmonized.postings),
        stats.rows_seen,
        stats.rows_rejected,
        stats.rows_without_link,
        stats.duplicates_removed,
    )

    return HarvestResult(
        postings=harmonized.postings,
        warnings=warnings,
        format=fmt,
        tables=len(tables),
        stats=stats,
        page_category=harmonized.page_category,
    )
