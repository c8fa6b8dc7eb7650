"""
Utility functions
"""
from datetime import datetime, timezone
from typing import Optional


def aligned_now(ts: datetime, now: Optional[datetime] = None) -> datetime:
    """
    Return "now" in a form comparable with ``ts``

    Seed files and admins may send naive local timestamps
    ("2024-06-01T14:00:00") or aware ones ("2024-06-01T12:00:00Z").
    Naive values are read as local time.

    Args:
        ts: Timestamp that will be compared against the result
        now: Optional reference instant (defaults to the current time)

    Example:
        >>> aligned_now(datetime(2024, 6, 1, 14, 0)).tzinfo is None
        True
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if ts.tzinfo is None and now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    if ts.tzinfo is not None and now.tzinfo is None:
        return now.astimezone()
    return now


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp, accepting a trailing "Z"

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
