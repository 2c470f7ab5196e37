"""
Link classification: employer career pages vs. third-party aggregators.

Aggregators include job boards and Applicant-Tracking-System vendors; a
URL is matched by substring against a static, ordered domain table.
"""

from __future__ import annotations

import urllib.parse
from typing import Iterable, List, Optional, Tuple

from jobtables.models import LinkClassification, company_homepage


SIMPLIFY_DOMAIN = "simplify.jobs"

# Ordered: first match wins, so more specific hosts come first
AGGREGATOR_DOMAINS: List[Tuple[str, str]] = [
    # Major aggregators
    (SIMPLIFY_DOMAIN, "Simplify"),
    ("simplify.co", "Simplify"),
    ("jobright.ai", "Jobright"),
    ("linkedin.com", "LinkedIn"),
    ("indeed.com", "Indeed"),
    ("glassdoor.com", "Glassdoor"),
    ("ziprecruiter.com", "ZipRecruiter"),
    ("monster.com", "Monster"),
    ("dice.com", "Dice"),
    ("careerbuilder.com", "CareerBuilder"),
    # Tech-focused
    ("wellfound.com", "Wellfound"),
    ("angel.co", "Wellfound"),
    ("builtin.com", "BuiltIn"),
    ("hired.com", "Hired"),
    ("otta.com", "Otta"),
    ("levels.fyi", "Levels.fyi"),
    ("triplebyte.com", "Triplebyte"),
    ("turing.com", "Turing"),
    # ATS platforms
    ("jobs.lever.co", "Lever"),
    ("lever.co", "Lever"),
    ("boards.greenhouse.io", "Greenhouse"),
    ("greenhouse.io", "Greenhouse"),
    ("myworkdayjobs.com", "Workday"),
    ("myworkday.com", "Workday"),
    ("workday.com", "Workday"),
    ("smartrecruiters.com", "SmartRecruiters"),
    ("icims.com", "iCIMS"),
    ("taleo.net", "Taleo"),
    ("successfactors.com", "SAP SuccessFactors"),
    ("jobvite.com", "Jobvite"),
    ("ashbyhq.com", "Ashby"),
    # International
    ("seek.com.au", "Seek"),
    ("reed.co.uk", "Reed"),
    ("totaljobs.com", "TotalJobs"),
    ("cv-library.co.uk", "CV-Library"),
    ("xing.com", "Xing"),
    ("stepstone.de", "StepStone"),
]


def classify(url: Optional[str]) -> LinkClassification:
    """
    Classify a URL as company or aggregator.

    Total over any input: empty or malformed values are company links.
    """
    lowered = (url or "").lower() if isinstance(url, str) else ""
    for domain, name in AGGREGATOR_DOMAINS:
        if domain in lowered:
            return LinkClassification.aggregator(name)
    return LinkClassification.company()


def is_aggregator(url: Optional[str]) -> bool:
    return classify(url).is_aggregator


def aggregator_name(url: Optional[str]) -> Optional[str]:
    """Display name of the aggregator behind a URL, or None for company links."""
    return classify(url).name


def is_simplify_link(url: Optional[str]) -> bool:
    return SIMPLIFY_DOMAIN in (url or "").lower()


def _host(url: str) -> str:
    candidate = url.strip()
    if "://" not in candidate and not candidate.startswith("//"):
        candidate = "//" + candidate
    try:
        return (urllib.parse.urlsplit(candidate).hostname or "").lower()
    except ValueError:
        return ""


def domain_name(url: Optional[str]) -> Optional[str]:
    """
    Human-readable name from a URL host, e.g. "Apple" for apple.com or
    "Microsoft" for careers.microsoft.com. None when no host is present.
    """
    if not url or not isinstance(url, str):
        return None
    parts = [p for p in _host(url).split(".") if p]
    if len(parts) < 2:
        return None
    return parts[-2].title()


def separate_links(links: Iterable[str]) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Split links into (company_link, aggregator_link, aggregator_name); first of each wins."""
    company_link: Optional[str] = None
    aggregator_link: Optional[str] = None
    agg_name: Optional[str] = None

    for link in links:
        if not link:
            continue
        result = classify(link)
        if result.is_aggregator:
            if aggregator_link is None:
                aggregator_link = link
                agg_name = result.name
        elif company_link is None:
            company_link = link

    return company_link, aggregator_link, agg_name


__all__ = [
    "AGGREGATOR_DOMAINS",
    "SIMPLIFY_DOMAIN",
    "classify",
    "is_aggregator",
    "aggregator_name",
    "is_simplify_link",
    "domain_name",
    "separate_links",
    "company_homepage",
]
