"""Duration text codec.

Both timesheet systems report durations as human text. The official system
uses "9h 14m" / "-2h 30m"; the secondary system exports clock text such as
"8:30:45". All arithmetic happens on signed integer minutes.
"""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

HOURS_RE = re.compile(r"(\d+)h")
MINUTES_RE = re.compile(r"(\d+)m")


class InvalidDurationError(ValueError):
    """Raised when duration text has neither an hours nor a minutes token."""
    pass


def _split_sign(text: str) -> tuple:
    """Return (is_negative, remainder) for text that may start with '-'."""
    if text.startswith("-"):
        return True, text[1:].strip()
    return False, text


def parse_duration(text: str) -> int:
    """Parse "9h 14m", "-2h 30m", "2h" or "30m" into signed minutes.

    Raises:
        InvalidDurationError: If no "<n>h" or "<n>m" token is present.
    """
    normalized = (text or "").strip().lower()
    negative, normalized = _split_sign(normalized)

    hours_match = HOURS_RE.search(normalized)
    minutes_match = MINUTES_RE.search(normalized)

    if hours_match is None and minutes_match is None:
        raise InvalidDurationError(
            f"invalid time format: {text!r} (expected format like '9h 14m', '2h', or '30m')"
        )

    total = 0
    if hours_match:
        total += int(hours_match.group(1)) * 60
    if minutes_match:
        total += int(minutes_match.group(1))

    return -total if negative else total


def _format_hours_minutes(hours: int, minutes: int) -> str:
    if hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


def format_duration(minutes: int) -> str:
    """Render signed minutes as "1h 13m", "-2h 30m", "45m" or "0m"."""
    if minutes == 0:
        return "0m"

    hours, mins = divmod(abs(minutes), 60)
    result = _format_hours_minutes(hours, mins)
    return f"-{result}" if minutes < 0 else result


def parse_clock_duration(text: str) -> str:
    """Convert "H:MM:SS" or "H:MM" clock text into duration text.

    Seconds are dropped. Anything that doesn't parse comes back unchanged
    (trimmed), since exported cells are not always well formed.

    Examples:
        "8:00:00" -> "8h", "-0:45:30" -> "-45m", "1:30" -> "1h 30m"
    """
    if not text:
        return ""

    original = text.strip()
    negative, remainder = _split_sign(original)

    parts = remainder.split(":")
    if len(parts) < 2:
        return original

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return original

    if hours < 0 or minutes < 0:
        return original

    result = _format_hours_minutes(hours, minutes)
    return f"-{result}" if negative else result


def duration_to_minutes(text: Optional[str], context: str = "") -> Optional[int]:
    """Lenient conversion used by reconciliation.

    Accepts either duration text or clock text. Returns None when the value
    can't be read; blank cells are expected on non-working days and only
    logged at debug level.
    """
    if text is None or not text.strip():
        logger.debug(f"Empty duration{' for ' + context if context else ''}")
        return None

    try:
        return parse_duration(parse_clock_duration(text))
    except InvalidDurationError as e:
        logger.warning(f"Skipping unreadable duration{' for ' + context if context else ''}: {e}")
        return None
