"""
AnonBoard Formatting Utilities

Helper functions for formatting output.
"""

from datetime import datetime, timezone


def format_timestamp(timestamp_us: int) -> str:
    """
    Format microsecond timestamp as an ISO-8601 UTC string.

    Args:
        timestamp_us: Microseconds since epoch

    Returns:
        Formatted string like "2025-12-10T14:32:05.123Z"
    """
    dt = datetime.fromtimestamp(timestamp_us / 1_000_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def truncate(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
