"""Date and time formatting utilities."""

from datetime import datetime, timezone

from git_history_browser.constants import DEFAULT_DATE_FORMAT


def format_timestamp(timestamp: int, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """
    Format an epoch timestamp as a UTC date string.

    Args:
        timestamp: Seconds since the epoch
        date_format: strftime format

    Returns:
        Formatted date string
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(date_format)
