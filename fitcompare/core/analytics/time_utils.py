import math
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def format_time(seconds: Optional[float]) -> str:
    """Format elapsed seconds as zero-padded ``HH:MM:SS``.

    Fractions of a second are truncated. Hours are not wrapped at 24.
    Returns an empty string for missing or non-finite input.
    """
    if seconds is None:
        return ""
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(value):
        return ""
    total = max(0, int(value))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def parse_time_str(time_str: str) -> int:
    """Parse a time string like "45s", "mm:ss" or "hh:mm:ss" into seconds.

    Returns 0 if parsing fails.
    """
    try:
        s = (time_str or '').strip()
        if s.endswith('s'):
            return int(s[:-1])
        if ':' in s:
            parts = s.split(':')
            if len(parts) == 2:
                m, sec = int(parts[0]), int(parts[1])
                return m * 60 + sec
            if len(parts) == 3:
                h, m, sec = int(parts[0]), int(parts[1]), int(parts[2])
                return h * 3600 + m * 60 + sec
        return 0
    except ValueError:
        return 0


def format_date(value: Optional[datetime], tz_name: str = 'UTC') -> str:
    """Format a FIT timestamp for display in 12-hour local time.

    FIT timestamps decode as naive UTC datetimes.
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        tz = timezone.utc
    return value.astimezone(tz).strftime('%Y-%m-%d %I:%M:%S %p')
