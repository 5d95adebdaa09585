"""Date normalization.

Both systems print dates as DD/MM/YYYY. Records are keyed by the sortable
canonical form YYYY/MM/DD.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)

SOURCE_DATE_FORMAT = "%d/%m/%Y"
CANONICAL_DATE_FORMAT = "%Y/%m/%d"

# strptime accepts single-digit days and months; the source format doesn't.
_SOURCE_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def normalize_date(text: Optional[str]) -> str:
    """Convert "DD/MM/YYYY" to "YYYY/MM/DD".

    Blank input gives "". Anything else that doesn't parse is returned
    trimmed and unchanged, with a warning.
    """
    if not text:
        return ""

    stripped = text.strip()
    if not stripped:
        return ""

    try:
        if not _SOURCE_DATE_RE.match(stripped):
            raise ValueError(f"does not match {SOURCE_DATE_FORMAT}")
        parsed = datetime.strptime(stripped, SOURCE_DATE_FORMAT)
    except ValueError as e:
        logger.warning(f"Failed to parse date {stripped!r}: {e}")
        return stripped

    return parsed.strftime(CANONICAL_DATE_FORMAT)


def format_canonical_date(value: date) -> str:
    """Format a date the way records are keyed (YYYY/MM/DD)."""
    return value.strftime(CANONICAL_DATE_FORMAT)


def parse_canonical_date(text: str) -> Optional[date]:
    """Parse a canonical YYYY/MM/DD key, or None if it isn't one."""
    try:
        return datetime.strptime(text.strip(), CANONICAL_DATE_FORMAT).date()
    except (ValueError, AttributeError):
        return None
