"""Date and time formatting utilities."""

from datetime import datetime, timezone

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY  # Approximate; labels are not calendar-exact


def format_relative_time(seconds_ago: int) -> str:
    """
    Format an age in seconds as a short relative label.

    Args:
        seconds_ago: Seconds elapsed since the event (negative means "in the
            future" and is reported as "just now")

    Returns:
        One of "just now", "Nm ago", "Nh ago", "Nd ago", "Nw ago", "Nmo ago"
    """
    if seconds_ago < MINUTE:
        return "just now"
    if seconds_ago < HOUR:
        return f"{seconds_ago // MINUTE}m ago"
    if seconds_ago < DAY:
        return f"{seconds_ago // HOUR}h ago"
    if seconds_ago < WEEK:
        return f"{seconds_ago // DAY}d ago"
    if seconds_ago < MONTH:
        return f"{seconds_ago // WEEK}w ago"
    return f"{seconds_ago // MONTH}mo ago"


def format_timestamp(timestamp: int) -> str:
    """
    Format a Unix timestamp as a local YYYY-MM-DD HH:MM string.

    Args:
        timestamp: Epoch seconds

    Returns:
        Formatted date string
    """
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone()
    return dt.strftime("%Y-%m-%d %H:%M")
