"""Date normalization for EXIF-style timestamps.

EXIF encodes dates as "YYYY:MM:DD HH:MM:SS". Values are rewritten to ISO,
parsed with `datetime.fromisoformat` and rendered in a fixed English long
form. Unparseable input is returned unchanged so callers can still show it.
"""

from __future__ import annotations

from datetime import datetime
import re
from typing import Any

from loguru import logger

from core.services.interfaces import ParseResult

EXIF_DATE_RE = re.compile(r"^(\d{4}):(\d{2}):(\d{2})")
UTC_SUFFIX_RE = re.compile(r"[Zz]$")

MONTH_ABBR = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def normalize_exif_date(text: str) -> str:
    """Rewrite a leading `YYYY:MM:DD` to `YYYY-MM-DD` and a trailing `Z` to `+00:00`."""
    text = EXIF_DATE_RE.sub(r"\1-\2-\3", text, count=1)
    return UTC_SUFFIX_RE.sub("+00:00", text)


def parse_date(text: str) -> ParseResult[datetime]:
    """Parse an EXIF or ISO date-time string."""
    normalized = normalize_exif_date(text.strip())
    try:
        return ParseResult.success(datetime.fromisoformat(normalized))
    except ValueError as ex:
        return ParseResult.fail(str(ex))


def render_date(dt: datetime) -> str:
    """Render as e.g. "Jan 5, 2024, 3:45 PM" independent of the process locale."""
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{MONTH_ABBR[dt.month - 1]} {dt.day}, {dt.year}, {hour}:{dt.minute:02d} {meridiem}"


def format_date(raw: Any) -> Any:
    """Format `raw` for display.

    Returns None for empty input, the formatted string on success, and the
    original input unchanged when it cannot be parsed.
    """
    if not raw:
        return None
    result = parse_date(str(raw))
    if not result.ok:
        logger.debug("Unparseable date {!r}: {}", raw, result.failure.reason)
        return raw
    try:
        return render_date(result.value)
    except (ValueError, OverflowError, OSError) as ex:
        logger.debug("Date render failed for {!r}: {}", raw, ex)
        return raw
