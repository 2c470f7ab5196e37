"""
In-batch deduplication for job postings.

Two postings are duplicates when their identity tuples are equal
(employer, role, location, company link, date posted). The first
occurrence wins and document order is preserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from jobtables.models import CanonicalJobPosting


IdentityKey = Tuple[str, str, str, str, str]


@dataclass
class DedupeResult:
    """Result of deduplication."""
    unique_postings: List[CanonicalJobPosting]
    duplicates_removed: int


class DedupeEngine:
    """
    Engine for deduplicating postings by identity.
    """

    def __init__(self):
        self._seen: Dict[IdentityKey, CanonicalJobPosting] = {}

    def _clear(self) -> None:
        self._seen.clear()

    def _check_duplicate(self, posting: CanonicalJobPosting) -> Optional[CanonicalJobPosting]:
        return self._seen.get(posting.identity)

    def dedupe(self, postings: List[CanonicalJobPosting]) -> DedupeResult:
        """
        Deduplicate a list of postings.

        Args:
            postings: Postings to deduplicate, in document order

        Returns:
            DedupeResult with unique postings and the number removed
        """
        self._clear()

        unique: List[CanonicalJobPosting] = []
        removed = 0

        for posting in postings:
            if self._check_duplicate(posting) is not None:
                removed += 1
                continue
            self._seen[posting.identity] = posting
            unique.append(posting)

        return DedupeResult(unique_postings=unique, duplicates_removed=removed)


def dedupe_postings(postings: List[CanonicalJobPosting]) -> DedupeResult:
    """
    Convenience function to dedupe postings with a fresh engine.
    """
    return DedupeEngine().dedupe(postings)
