#!/usr/bin/env python3
"""
dockview - Utilities Module
-----------
Small formatting and drawing helpers shared by the views and controllers.
"""
import curses
import datetime
import re

# RFC 3339 as written by the Docker daemon, e.g. 2024-05-05T12:34:56.123456789Z
TIMESTAMP_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)

# RFC 1123 layout used for the Started line
STARTED_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"


def safe_addstr(win, y, x, text, attr=0):
    """Add string only if within bounds; ignore errors"""
    h, w = win.getmaxyx()
    if 0 <= y < h and 0 <= x < w:
        try:
            # Convert to string and truncate
            text_str = str(text)[:max(0, w - x)]
            win.addstr(y, x, text_str, attr)
        except curses.error:
            # Writing the bottom-right cell raises after the text is drawn
            pass


def nz(value, fallback):
    """Return value unless it is empty"""
    return value if value else fallback


def parse_timestamp(value):
    """
    Parse a daemon timestamp into an aware datetime.

    Returns None when the value is missing, malformed or the zero time
    (0001-01-01T00:00:00Z) the daemon reports for never-started containers.
    """
    if not isinstance(value, str):
        return None
    match = TIMESTAMP_RE.match(value.strip())
    if not match:
        return None

    base, fraction, zone = match.groups()
    # fromisoformat only takes microseconds; the daemon sends nanoseconds
    fraction = (fraction or "")[:6].ljust(6, "0")
    if zone == "Z":
        zone = "+00:00"

    try:
        parsed = datetime.datetime.fromisoformat(f"{base}.{fraction}{zone}")
    except ValueError:
        return None
    if parsed.year <= 1:
        return None
    return parsed


def format_duration(seconds):
    """Bucket a duration in seconds into a coarse human string"""
    if seconds < 60:
        return f"{int(seconds)} seconds"
    elif seconds < 3600:
        return f"{int(seconds / 60)} minutes"
    elif seconds < 86400:
        return f"{int(seconds / 3600)} hours"
    return f"{int(seconds / 86400)} days"


def format_since(started, now=None):
    """Relative time elapsed since an aware datetime"""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return format_duration((now - started).total_seconds())


def format_started(started):
    """Absolute local time of an aware datetime"""
    return started.astimezone().strftime(STARTED_FORMAT)
