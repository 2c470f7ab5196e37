"""
Table parsing entry point: picks the Markdown or HTML parser by format.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from jobtables.extract.detect import detect_format
from jobtables.extract.html import parse_html_tables
from jobtables.extract.markdown import parse_markdown_tables
from jobtables.models import ParsedTable, TableFormat

logger = logging.getLogger(__name__)


def parse_tables(text: Optional[str], fmt: Optional[TableFormat] = None) -> List[ParsedTable]:
    """
    Extract all tables from a document in document order.

    Mixed documents prefer HTML tables and fall back to Markdown tables only
    when no HTML table could be parsed.
    """
    if not text:
        return []

    fmt = fmt or detect_format(text)

    if fmt == TableFormat.HTML:
        tables = parse_html_tables(text)
    elif fmt == TableFormat.MARKDOWN:
        tables = parse_markdown_tables(text)
    elif fmt == TableFormat.MIXED:
        tables = parse_html_tables(text)
        if not tables:
            tables = parse_markdown_tables(text)
    else:
        tables = []

    logger.debug("Parsed %d tables from %s document", len(tables), fmt.value)
    return tables
