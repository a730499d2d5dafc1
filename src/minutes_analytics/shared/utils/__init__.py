# src/minutes_analytics/shared/utils/__init__.py
"""
Shared Utilities - Common helpers used by adapters and engines

- Timestamp parsing and normalization (store rows carry ISO-8601 strings)
- Nested dict access for embedded relations
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Union

Timestamp = Union[str, datetime, date]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[Timestamp]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Accepts ``YYYY-MM-DD``, full datetimes with ``Z`` or an offset, and naive
    datetimes (read as UTC). ``None`` and empty strings return ``None``.

    Raises:
        ValueError: If a non-empty string is not ISO-8601.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Render a datetime the way the store expects it in filters."""
    return value.isoformat() if value is not None else None


def safe_get(data: Optional[Dict[str, Any]], *keys: str, default: Any = None) -> Any:
    """Safely get nested dictionary value."""
    for key in keys:
        if isinstance(data, dict):
            data = data.get(key)
        else:
            return default
    return default if data is None else data


__all__ = [
    "Timestamp",
    "utc_now",
    "parse_timestamp",
    "to_iso",
    "safe_get",
]
