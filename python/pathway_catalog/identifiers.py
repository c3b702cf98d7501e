"""
Identifier extraction from uploaded expression tables.

The first column of a CSV or TSV table holds the gene or compound
identifiers; the first line is a header.
"""

import csv
import io
import logging
from typing import List, Optional

logger = logging.getLogger("PathwayCatalog.Identifiers")


def sniff_delimiter(header: str) -> str:
    """Comma if the header line has one, otherwise tab."""
    return ',' if ',' in header else '\t'


def parse_identifiers(text: str, limit: Optional[int] = None) -> List[str]:
    """
    Extract unique identifiers from a CSV/TSV table.

    Args:
        text: Raw table with a header line
        limit: Optional maximum number of identifiers to return

    Returns:
        First-column values in file order, blanks dropped, duplicates removed
    """
    lines = [line for line in (text or '').splitlines() if line.strip()]
    if len(lines) < 2:
        return []

    delimiter = sniff_delimiter(lines[0])
    reader = csv.reader(io.StringIO('\n'.join(lines[1:])), delimiter=delimiter)

    seen = {}
    for row in reader:
        if not row:
            continue
        value = row[0].strip()
        if value:
            seen.setdefault(value, None)

    identifiers = list(seen)
    if limit is not None and len(identifiers) > limit:
        logger.info(f"Truncating {len(identifiers)} identifiers to {limit}")
        identifiers = identifiers[:limit]
    return identifiers
