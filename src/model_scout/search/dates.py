"""Parsing of the free-form catalog date strings."""

from __future__ import annotations

from datetime import UTC, datetime

# Partial dates the catalog uses besides full ISO 8601 values
_PARTIAL_FORMATS = ("%Y-%m", "%Y")


def parse_timestamp(value: str | None) -> float | None:
    """Parse a catalog date into a POSIX timestamp.

    Accepts ``YYYY``, ``YYYY-MM``, ``YYYY-MM-DD`` and ISO datetimes (with or
    without a ``Z`` / offset suffix). Naive values are read as UTC.

    Returns:
        The timestamp in seconds, or None when missing or unparsable.
    """
    if not value:
        return None
    text = value.strip()
    if not text:
        return None

    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in _PARTIAL_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.timestamp()
