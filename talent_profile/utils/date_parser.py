"""Parse and format employment dates exchanged with the profile service."""

from datetime import date, datetime, timezone
from typing import Any, Optional

# Formats the service and older cached drafts have been seen to use
_FALLBACK_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%b %d, %Y", "%d %B %Y")


def parse_profile_date(value: Any) -> Optional[date]:
    """
    Coerce an employment date to a calendar date.
    Accepts date/datetime objects and ISO-8601 strings (with or without time and 'Z').
    Blank or unparsable values return None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_iso_datetime(value: Optional[date]) -> Optional[str]:
    """Render a calendar date as a UTC midnight ISO-8601 timestamp, or None."""
    if value is None:
        return None
    midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return midnight.strftime("%Y-%m-%dT%H:%M:%SZ")
