"""
Export harvested postings to CSV, Excel and JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, List

import pandas as pd

from jobtables.models import CanonicalJobPosting

logger = logging.getLogger(__name__)


def postings_to_frame(postings: Iterable[CanonicalJobPosting]) -> pd.DataFrame:
    """Build a DataFrame with one row per posting in export column order."""
    columns = CanonicalJobPosting.get_export_columns()
    rows = [p.to_dict() for p in postings]
    df = pd.DataFrame(rows, columns=columns)
    # Optional text columns export as empty cells, not "None"
    text_cols = [c for c in columns if c not in ("is_flagged_employer", "is_internship")]
    df[text_cols] = df[text_cols].fillna("")
    return df


def export_to_csv(postings: List[CanonicalJobPosting], path: str) -> int:
    """
    Export postings to a CSV file.

    Returns number of rows exported.
    """
    df = postings_to_frame(postings)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info("Exported %d postings to %s", len(df), path)
    return len(df)


def export_to_excel(postings: List[CanonicalJobPosting], path: str) -> int:
    """
    Export postings to an Excel file.

    Returns number of rows exported.
    """
    df = postings_to_frame(postings)
    df.to_excel(path, index=False)
    logger.info("Exported %d postings to %s", len(df), path)
    return len(df)


def export_to_json(postings: List[CanonicalJobPosting], path: str) -> int:
    """
    Export postings to a JSON array of records.

    Returns number of records exported.
    """
    records = [p.to_dict() for p in postings]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=2)
    logger.info("Exported %d postings to %s", len(records), path)
    return len(records)
