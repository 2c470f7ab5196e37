"""
Harmonization pass over extracted postings.

Per posting:
1. Normalize ``date_posted`` to ISO, keeping the original text on failure
2. Move aggregator URLs out of the company-link slot
3. Re-infer the country from the location
4. Replace generic section categories with one inferred from the role
5. Derive ``company_website`` from the company link
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, List, Optional

from jobtables.harmonize.dates import DateNormalizer
from jobtables.harmonize.links import classify, company_homepage
from jobtables.models import (
    DEFAULT_CATEGORY,
    DEFAULT_COUNTRY,
    CanonicalJobPosting,
    JobCategory,
    infer_country,
)

logger = logging.getLogger(__name__)


GENERIC_EXACT = {
    "daily list",
    "new jobs",
    "jobs",
    "listings",
    "opportunities",
    "positions",
    "all jobs",
    "other",
    "see full",
    "see more",
    "view all",
}

# Category contains any of these
GENERIC_PARTIAL = [
    "daily",
    "list",
    "new grad",
    "newgrad",
    "intern",
    "2024",
    "2025",
    "fall",
    "spring",
    "summer",
    "winter",
]


@dataclass
class HarmonizationResult:
    """Harmonized postings plus non-fatal warnings."""
    postings: List[CanonicalJobPosting]
    warnings: List[str] = field(default_factory=list)
    page_category: str = DEFAULT_CATEGORY


def normalize_category(category: Optional[str]) -> str:
    """Strip emoji and symbols, collapse whitespace; empty results become "Other"."""
    kept = "".join(
        ch for ch in (category or "")
        if ch.isspace() or unicodedata.category(ch)[0] in ("L", "N", "P")
    )
    cleaned = re.sub(r"\s+", " ", kept).strip()
    return cleaned or DEFAULT_CATEGORY


def is_generic_category(category: Optional[str]) -> bool:
    """Structural labels like "Daily List" or "Summer 2025" carry no job category."""
    lowered = (category or "").strip().lower()
    if not lowered:
        return True
    if lowered in GENERIC_EXACT:
        return True
    return any(pattern in lowered for pattern in GENERIC_PARTIAL)


class Harmonizer:
    """
    Reconciles dates, links, countries and categories of a posting batch.

    Harmonizing an already harmonized batch returns equal postings.
    """

    def __init__(
        self,
        reference_date: Optional[date] = None,
        default_country: str = DEFAULT_COUNTRY,
        default_category: str = DEFAULT_CATEGORY,
    ):
        self.date_normalizer = DateNormalizer(reference_date) if reference_date else DateNormalizer()
        self.default_country = default_country
        self.default_category = default_category

    @property
    def reference_date(self) -> date:
        return self.date_normalizer.reference_date

    def harmonize(
        self,
        postings: Iterable[CanonicalJobPosting],
        page_title: str = "",
        page_url: str = "",
    ) -> HarmonizationResult:
        """
        Harmonize a batch of postings.

        Args:
            postings: Candidates from row extraction, in document order
            page_title: Title of the source page, used for category fallback
            page_url: Source URL, used for logging only

        Returns:
            HarmonizationResult with harmonized postings and warnings
        """
        page_category = JobCategory.infer(page_title).value
        if page_category == JobCategory.OTHER.value:
            page_category = self.default_category
        harmonized: List[CanonicalJobPosting] = []
        unparsed_dates = 0
        without_link = 0

        for posting in postings:
            result = self.harmonize_posting(posting, page_category)
            if result.date_posted and result.date_posted == posting.date_posted:
                if self.date_normalizer.parse(result.date_posted) is None:
                    unparsed_dates += 1
            if not result.has_link:
                without_link += 1
            harmonized.append(result)

        warnings: List[str] = []
        if unparsed_dates:
            warnings.append(f"{unparsed_dates} dates could not be normalized")
        if without_link:
            warnings.append(f"{without_link} postings have no identifying link")

        logger.info(
            "Harmonized %d postings from %s (page category %s, %d warnings)",
            len(harmonized),
            page_url or "<document>",
            page_category,
            len(warnings),
        )
        return HarmonizationResult(postings=harmonized, warnings=warnings, page_category=page_category)

    def harmonize_posting(
        self,
        posting: CanonicalJobPosting,
        page_category: str = DEFAULT_CATEGORY,
    ) -> CanonicalJobPosting:
        """Harmonize a single posting; see the module docstring for the steps."""
        # Dates
        date_posted = posting.date_posted
        if date_posted:
            date_posted = self.date_normalizer.normalize(date_posted) or date_posted

        # Links
        company_link = posting.company_link
        aggregator_link = posting.aggregator_link
        aggregator_name = posting.aggregator_name

        if company_link:
            classification = classify(company_link)
            if classification.is_aggregator:
                logger.debug("Reclassified %s as %s link", company_link, classification.name)
                if aggregator_link is None:
                    aggregator_link = company_link
                    aggregator_name = classification.name
                company_link = None

        if aggregator_link and not aggregator_name:
            aggregator_name = classify(aggregator_link).name

        company_website = posting.company_website
        if company_website is None and company_link:
            company_website = company_homepage(company_link)

        # Category
        category = normalize_category(posting.category)
        if is_generic_category(category):
            inferred = JobCategory.infer(posting.role)
            if inferred == JobCategory.OTHER:
                category = normalize_category(page_category)
            else:
                category = inferred.value

        return replace(
            posting,
            date_posted=date_posted,
            company_link=company_link,
            aggregator_link=aggregator_link,
            aggregator_name=aggregator_name,
            company_website=company_website,
            country=infer_country(posting.location, self.default_country),
            category=category,
        )


def harmonize(
    postings: Iterable[CanonicalJobPosting],
    page_title: str = "",
    page_url: str = "",
    reference_date: Optional[date] = None,
) -> HarmonizationResult:
    """Convenience function to harmonize with default settings."""
    return Harmonizer(reference_date=reference_date).harmonize(postings, page_title, page_url)
