"""
Date normalization to ISO ``YYYY-MM-DD``.

Handles relative expressions ("2 days ago", "yesterday"), job-board
shorthand ("15d", "2mo", "1yr") and a fixed set of calendar formats.
All arithmetic is relative to an explicit reference date.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta


ISO_FORMAT = "%Y-%m-%d"

# Year-less dates further than this past the reference date roll back a year
ROLLOVER_WINDOW = timedelta(days=30)

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

# Relative keywords
TODAY_WORDS = {"today", "now", "just now"}

# Shorthand codes, anchored
SHORT_DAYS = re.compile(r"^(\d+)d$")
SHORT_WEEKS = re.compile(r"^(\d+)w$")
SHORT_MONTHS = re.compile(r"^(\d+)mo$")
SHORT_MONTHS_M = re.compile(r"^(\d+)m$")
SHORT_YEARS = re.compile(r"^(\d+)y(?:r)?$")
SHORT_HOURS = re.compile(r"^(\d+)h$")

DAYS_AGO = re.compile(r"(\d+)\s*days?\s*ago")
WEEKS_AGO = re.compile(r"(\d+)\s*weeks?\s*ago")
MONTHS_AGO = re.compile(r"(\d+)\s*months?\s*ago")

# Fixed formats
MONTH_DAY = re.compile(r"^([a-z]+)\.?\s+(\d{1,2})(?:,\s*(\d{4}))?$")  # MMM d[, yyyy], MMMM d[, yyyy]
SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{4}|\d{2}))?$")  # MM/dd[/yy|/yyyy]
ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})-([a-z]+)-(\d{4})$")  # dd-MMM-yyyy


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DateNormalizer:
    """
    Normalizes free-form date text relative to ``reference_date``.

    Immutable and safe to share; a ``datetime`` reference is reduced to
    its calendar date.
    """

    reference_date: date = field(default_factory=date.today)

    def __post_init__(self):
        object.__setattr__(self, "reference_date", _as_date(self.reference_date))

    def normalize(self, text: Optional[str]) -> Optional[str]:
        """Return the ISO date for ``text``, or None when it cannot be parsed."""
        parsed = self.parse(text)
        return parsed.strftime(ISO_FORMAT) if parsed else None

    def parse(self, text: Optional[str]) -> Optional[date]:
        if not text or not isinstance(text, str):
            return None
        value = text.strip().lower()
        if not value:
            return None
        return self._parse_relative(value) or self._parse_fixed(value)

    # ----------------------------- Relative -----------------------------

    def _parse_relative(self, value: str) -> Optional[date]:
        ref = self.reference_date

        if value in TODAY_WORDS:
            return ref
        if value == "yesterday":
            return ref - timedelta(days=1)

        shorthand: List[Tuple[re.Pattern, Callable[[int], relativedelta]]] = [
            (SHORT_DAYS, lambda n: relativedelta(days=n)),
            (SHORT_WEEKS, lambda n: relativedelta(weeks=n)),
            (SHORT_MONTHS, lambda n: relativedelta(months=n)),
        ]
        for pattern, delta in shorthand:
            m = pattern.match(value)
            if m:
                return ref - delta(int(m.group(1)))

        # "0m" reads as minutes, so only positive counts are months
        m = SHORT_MONTHS_M.match(value)
        if m and int(m.group(1)) > 0:
            return ref - relativedelta(months=int(m.group(1)))

        m = SHORT_YEARS.match(value)
        if m:
            return ref - relativedelta(years=int(m.group(1)))

        m = DAYS_AGO.search(value)
        if m:
            return ref - relativedelta(days=int(m.group(1)))
        m = WEEKS_AGO.search(value)
        if m:
            return ref - relativedelta(weeks=int(m.group(1)))
        m = MONTHS_AGO.search(value)
        if m:
            return ref - relativedelta(months=int(m.group(1)))

        if "ago" in value and ("hour" in value or "minute" in value):
            return ref
        if SHORT_HOURS.match(value):
            return ref

        if value == "last week":
            return ref - relativedelta(weeks=1)
        if value == "last month":
            return ref - relativedelta(months=1)

        return None

    # ----------------------------- Fixed formats -----------------------------

    def _parse_fixed(self, value: str) -> Optional[date]:
        m = MONTH_DAY.match(value)
        if m:
            month = MONTHS.get(m.group(1))
            if month is None:
                return None
            if m.group(3):
                return _safe_date(int(m.group(3)), month, int(m.group(2)))
            return self._without_year(month, int(m.group(2)))

        m = SLASH_DATE.match(value)
        if m:
            month, day, year = int(m.group(1)), int(m.group(2)), m.group(3)
            if year is None:
                return self._without_year(month, day)
            full_year = int(year) + 2000 if len(year) == 2 else int(year)
            return _safe_date(full_year, month, day)

        m = ISO_DATE.match(value)
        if m:
            return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))

        m = DAY_MONTH_YEAR.match(value)
        if m:
            month = MONTHS.get(m.group(2))
            if month is None:
                return None
            return _safe_date(int(m.group(3)), month, int(m.group(1)))

        return None

    def _without_year(self, month: int, day: int) -> Optional[date]:
        """Assume the reference year, rolling back one year for far-future results."""
        ref = self.reference_date
        candidate = _safe_date(ref.year, month, day)
        if candidate is None:
            return None
        if candidate > ref + ROLLOVER_WINDOW:
            return _safe_date(ref.year - 1, month, day)
        return candidate


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def normalize_date(text: Optional[str], reference_date: Optional[date] = None) -> Optional[str]:
    """Convenience wrapper around ``DateNormalizer(reference_date).normalize``."""
    normalizer = DateNormalizer(reference_date) if reference_date else DateNormalizer()
    return normalizer.normalize(text)
