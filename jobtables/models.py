"""
Core data models for jobtables.

Provides:
- TableFormat: detected shape of a source document
- JobCategory: fixed category taxonomy with keyword inference
- LinkKind / LinkClassification: company vs. aggregator links
- ParsedTable / ColumnMapping: raw tables and their header mapping
- CanonicalJobPosting: the pipeline's output record
"""

from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


DEFAULT_CATEGORY = "Other"
DEFAULT_COUNTRY = "USA"
INITIAL_ANALYSIS_STATUS = "pending"


# ----------------------------- Enums -----------------------------

class TableFormat(str, Enum):
    """Detected table format of a source document."""
    HTML = "html"
    MARKDOWN = "markdown"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class JobCategory(str, Enum):
    """Fixed taxonomy of job categories."""
    SOFTWARE_ENGINEERING = "Software Engineering"
    DATA_SCIENCE = "Data Science"
    MACHINE_LEARNING = "Machine Learning"
    PRODUCT_MANAGEMENT = "Product Management"
    DESIGN = "Design"
    DEVOPS = "DevOps"
    SECURITY = "Security"
    MOBILE = "Mobile Development"
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    FULL_STACK = "Full Stack"
    EMBEDDED = "Embedded Systems"
    GAMEDEV = "Game Development"
    OTHER = "Other"

    @classmethod
    def infer(cls, role: str) -> "JobCategory":
        """Infer a category from free-form role text."""
        t = (role or "").lower()
        # Order matters: specific categories before broad ones
        for category, keywords in _CATEGORY_RULES:
            if any(kw in t for kw in keywords):
                return category
        if any(x in t for x in ["software", "engineer", "developer", "programmer"]):
            return cls.SOFTWARE_ENGINEERING
        return cls.OTHER


_CATEGORY_RULES: List[Tuple[JobCategory, List[str]]] = [
    (JobCategory.MACHINE_LEARNING, ["machine learning", "ml engineer", "ai engineer"]),
    (JobCategory.DATA_SCIENCE, ["data scien", "data analyst"]),
    (JobCategory.PRODUCT_MANAGEMENT, ["product manager", "product management"]),
    (JobCategory.DEVOPS, ["devops", "site reliability", "sre", "platform engineer"]),
    (JobCategory.SECURITY, ["security", "cybersecurity", "infosec"]),
    (JobCategory.MOBILE, ["ios", "android", "mobile"]),
    (JobCategory.FRONTEND, ["frontend", "front-end", "front end", "ui engineer"]),
    (JobCategory.BACKEND, ["backend", "back-end", "back end"]),
    (JobCategory.FULL_STACK, ["full stack", "fullstack", "full-stack"]),
    (JobCategory.EMBEDDED, ["embedded", "firmware", "hardware"]),
    (JobCategory.GAMEDEV, ["game", "unity", "unreal"]),
    (JobCategory.DESIGN, ["design", "ux", "ui/ux"]),
]


class LinkKind(str, Enum):
    """Whether a URL points at the employer or at an intermediary."""
    COMPANY = "company"
    AGGREGATOR = "aggregator"


@dataclass(frozen=True)
class LinkClassification:
    """Result of classifying a single URL."""
    kind: LinkKind
    name: Optional[str] = None  # Display name, aggregators only

    @classmethod
    def company(cls) -> "LinkClassification":
        return cls(LinkKind.COMPANY)

    @classmethod
    def aggregator(cls, name: str) -> "LinkClassification":
        return cls(LinkKind.AGGREGATOR, name)

    @property
    def is_aggregator(self) -> bool:
        return self.kind == LinkKind.AGGREGATOR


# ----------------------------- Utilities -----------------------------

def normalize_text(s: Optional[str]) -> str:
    """Collapse whitespace and strip."""
    return re.sub(r"\s+", " ", (s or "")).strip()


def clean_optional(s: Optional[str]) -> Optional[str]:
    """Trim a value, mapping empty strings to None."""
    if s is None:
        return None
    s = s.strip()
    return s or None


def company_homepage(url: Optional[str]) -> Optional[str]:
    """Return scheme://host for a URL, or None when it has no host."""
    if not url:
        return None
    try:
        u = urllib.parse.urlsplit(url.strip())
    except ValueError:
        return None
    if not u.netloc:
        return None
    scheme = (u.scheme or "https").lower()
    return f"{scheme}://{u.netloc.lower()}"


_COUNTRY_RULES: List[Tuple[str, List[str]]] = [
    ("Canada", ["canada"]),
    ("UK", ["uk", "united kingdom", "england"]),
    ("Germany", ["germany"]),
    ("India", ["india"]),
    ("Ireland", ["ireland"]),
    ("Australia", ["australia"]),
    ("Singapore", ["singapore"]),
    ("Japan", ["japan"]),
    ("Netherlands", ["netherlands"]),
    ("France", ["france"]),
    ("Israel", ["israel"]),
    ("China", ["china"]),
    ("Mexico", ["mexico"]),
    ("Brazil", ["brazil"]),
    ("Spain", ["spain"]),
    ("Italy", ["italy"]),
    ("Poland", ["poland"]),
    ("Sweden", ["sweden"]),
    ("Switzerland", ["switzerland"]),
]

# Only consulted after US state signals, so "Dublin, CA" stays in the US
_CITY_RULES: List[Tuple[str, List[str]]] = [
    ("UK", ["london"]),
    ("Germany", ["berlin", "munich"]),
    ("India", ["bangalore", "hyderabad", "mumbai"]),
    ("Ireland", ["dublin"]),
    ("Australia", ["sydney", "melbourne"]),
    ("Japan", ["tokyo"]),
    ("Netherlands", ["amsterdam"]),
    ("France", ["paris"]),
    ("Israel", ["tel aviv"]),
    ("China", ["beijing", "shanghai"]),
    ("Brazil", ["são paulo", "sao paulo"]),
    ("Spain", ["madrid", "barcelona"]),
    ("Italy", ["milan", "rome"]),
    ("Poland", ["warsaw", "krakow"]),
    ("Sweden", ["stockholm"]),
    ("Switzerland", ["zurich"]),
]

# Full state names that contain a foreign country name
US_STATE_NAMES = ["new mexico"]

# US state abbreviation after a comma, e.g. "Austin, TX"
US_STATE_PATTERN = re.compile(
    r",\s*(al|ak|az|ar|ca|co|ct|de|fl|ga|hi|id|il|in|ia|ks|ky|la|me|md|ma|mi|mn|ms|mo|mt|ne|nv|nh"
    r"|nj|nm|ny|nc|nd|oh|ok|or|pa|ri|sc|sd|tn|tx|ut|vt|va|wa|wv|wi|wy|dc)\b"
)

US_CITIES = [
    "new york", "san francisco", "seattle", "austin", "boston", "chicago",
    "los angeles", "denver", "atlanta", "miami", "dallas", "houston",
    "phoenix", "philadelphia", "san diego", "san jose", "palo alto",
    "mountain view", "menlo park", "cupertino", "redmond", "pittsburgh",
]


def _has_word(text: str, word: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", text) is not None


def _match_rules(loc: str, rules: List[Tuple[str, List[str]]]) -> Optional[str]:
    for country, keywords in rules:
        if any(_has_word(loc, kw) for kw in keywords):
            return country
    return None


def infer_country(location: str, default: str = DEFAULT_COUNTRY) -> str:
    """
    Infer a country from free-form location text.

    Signals are checked in order: US state names, foreign country names,
    explicit US markers and state abbreviations, foreign cities, then US
    cities. Anything unrecognised falls back to ``default``.
    """
    loc = (location or "").lower()
    if not loc:
        return default

    if any(_has_word(loc, name) for name in US_STATE_NAMES):
        return "USA"

    country = _match_rules(loc, _COUNTRY_RULES)
    if country:
        return country

    if _has_word(loc, "usa") or "united states" in loc:
        return "USA"
    if US_STATE_PATTERN.search(loc):
        return "USA"

    country = _match_rules(loc, _CITY_RULES)
    if country:
        return country

    if any(city in loc for city in US_CITIES):
        return "USA"
    return default


# ----------------------------- Tables -----------------------------

@dataclass(frozen=True)
class ParsedTable:
    """A logical table pulled out of a source document."""
    headers: List[str]
    rows: List[List[str]]
    format: TableFormat
    category: str = DEFAULT_CATEGORY  # Section heading the table sits under

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)


@dataclass(frozen=True)
class ColumnMapping:
    """Column index for each semantic field of a job table."""
    employer: Optional[int] = None
    role: Optional[int] = None
    location: Optional[int] = None
    link: Optional[int] = None
    date_posted: Optional[int] = None
    notes: Optional[int] = None

    @property
    def is_job_table(self) -> bool:
        """Tables without an employer or role column are not job listings."""
        return self.employer is not None or self.role is not None


# ----------------------------- CanonicalJobPosting -----------------------------

@dataclass(frozen=True)
class CanonicalJobPosting:
    """
    Canonical job posting produced by the pipeline.

    Instances are immutable; use ``dataclasses.replace`` to derive a
    modified copy. Text fields are trimmed on construction and empty
    optional values become None.
    """

    employer: str
    role: str
    location: str = ""
    country: str = ""
    category: str = DEFAULT_CATEGORY

    # URLs
    company_link: Optional[str] = None
    aggregator_link: Optional[str] = None
    aggregator_name: Optional[str] = None
    company_website: Optional[str] = None

    date_posted: Optional[str] = None
    notes: Optional[str] = None

    # Flags
    is_flagged_employer: bool = False
    is_internship: bool = False

    def __post_init__(self):
        set_ = object.__setattr__
        set_(self, "employer", normalize_text(self.employer))
        set_(self, "role", normalize_text(self.role))
        set_(self, "location", normalize_text(self.location))
        set_(self, "category", normalize_text(self.category) or DEFAULT_CATEGORY)
        set_(self, "company_link", clean_optional(self.company_link))
        set_(self, "aggregator_link", clean_optional(self.aggregator_link))
        set_(self, "aggregator_name", clean_optional(self.aggregator_name))
        set_(self, "company_website", clean_optional(self.company_website))
        set_(self, "date_posted", clean_optional(self.date_posted))
        set_(self, "notes", clean_optional(self.notes))
        if not self.country.strip():
            set_(self, "country", infer_country(self.location))
        else:
            set_(self, "country", self.country.strip())
        if "intern" in self.role.lower():
            set_(self, "is_internship", True)

    @property
    def identity(self) -> Tuple[str, str, str, str, str]:
        """Identity tuple used for in-batch deduplication."""
        return (
            self.employer,
            self.role,
            self.location,
            self.company_link or "",
            self.date_posted or "",
        )

    @property
    def unique_link(self) -> Optional[str]:
        """Persistence key: company link, falling back to the aggregator link."""
        return self.company_link or self.aggregator_link

    @property
    def has_link(self) -> bool:
        return self.unique_link is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for export."""
        d = asdict(self)
        d["unique_link"] = self.unique_link or ""
        d["analysis_status"] = INITIAL_ANALYSIS_STATUS
        return d

    @classmethod
    def get_export_columns(cls) -> List[str]:
        """Column order for CSV/Excel export."""
        return [
            "employer", "role", "location", "country", "category",
            "date_posted", "company_link", "aggregator_link", "aggregator_name",
            "company_website", "notes",
            "is_flagged_employer", "is_internship",
            "unique_link", "analysis_status",
        ]

    def __str__(self) -> str:
        desc = f"{self.employer} - {self.role} ({self.location})"
        if self.date_posted:
            desc += f" [Posted: {self.date_posted}]"
        if self.notes:
            desc += f" - {self.notes}"
        return desc
