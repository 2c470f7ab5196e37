"""
jobtables: Harvests job postings from community job-board tables.

Parses Markdown and HTML tables from README-style documents, maps their
columns onto a canonical posting record and harmonizes dates, links,
countries and categories.
"""

__version__ = "1.0.0"

from jobtables.models import CanonicalJobPosting, JobCategory, ParsedTable, TableFormat
from jobtables.pipeline import HarvestResult, harvest

__all__ = [
    "CanonicalJobPosting",
    "JobCategory",
    "ParsedTable",
    "TableFormat",
    "HarvestResult",
    "harvest",
]
