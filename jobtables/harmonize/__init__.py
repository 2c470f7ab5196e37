"""
Harmonization of extracted postings.

Provides:
- Link classification (company vs. aggregator)
- Date normalization to ISO format
- The Harmonizer pass that reconciles dates, links, countries and categories
"""

from jobtables.harmonize.dates import DateNormalizer, normalize_date
from jobtables.harmonize.harmonizer import HarmonizationResult, Harmonizer, harmonize
from jobtables.harmonize.links import classify, domain_name, is_aggregator, separate_links

__all__ = [
    "DateNormalizer",
    "normalize_date",
    "Harmonizer",
    "HarmonizationResult",
    "harmonize",
    "classify",
    "domain_name",
    "is_aggregator",
    "separate_links",
]
