"""Helpers for turning raw Torn API JSON into model attributes."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

T = TypeVar('T')


def timestamp(value: Any) -> datetime:
    """Convert a unix timestamp in seconds to an aware UTC datetime."""
    if isinstance(value, datetime):
        return value
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def zero_is_none_timestamp(value: Any) -> Optional[datetime]:
    """Timestamps of ``0`` (or missing) mean "not set" in the API."""
    if value in (None, 0, '0'):
        return None
    return timestamp(value)


def empty_string_is_none(value: Any) -> Optional[str]:
    if value in (None, ''):
        return None
    return str(value)


def int_keyed(data: Optional[Dict[str, Any]], decode: Callable[[Any], T]) -> Dict[int, T]:
    """Decode a map keyed by numeric ids, ordered by ascending id.

    Args:
        data: Mapping as returned by the API, keys are numeric strings
        decode: Callable applied to each value

    Returns:
        Dict[int, T]: Decoded values in ascending key order
    """
    if not data:
        return {}
    return {int(key): decode(data[key]) for key in sorted(data, key=int)}


def null_is_empty(data: Optional[List[Any]], decode: Callable[[Any], T]) -> List[T]:
    """Market selections return ``null`` instead of an empty list."""
    if not data:
        return []
    return [decode(item) for item in data]
