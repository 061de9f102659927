"""
Helper utility functions for the YouTube study notes application.
"""

import re
from typing import Optional
from urllib.parse import urlparse, parse_qs


VIDEO_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|v/)|youtu\.be/)([a-zA-Z0-9_-]{11})"
)

_COMPOSITE_TIME = re.compile(r"^(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?$", re.IGNORECASE)


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the 11-character video ID from a YouTube URL.

    Recognizes watch, embed, /v/ and youtu.be links.

    Args:
        url: YouTube video URL

    Returns:
        Video ID or None when the URL is not recognized
    """
    if not url:
        return None
    match = VIDEO_ID_PATTERN.search(url.strip())
    return match.group(1) if match else None


def parse_time_value(value: str) -> Optional[int]:
    """
    Parse a start-time value such as "90", "90s" or "1h2m3s" into seconds.

    Args:
        value: Raw query parameter value

    Returns:
        Seconds, or None if the value is not a recognized form
    """
    value = (value or "").strip()
    if not value:
        return None
    if value.isdigit():
        return int(value)

    match = _COMPOSITE_TIME.match(value)
    if not match or not any(match.groups()):
        return None
    hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def parse_start_seconds(url: str) -> Optional[int]:
    """
    Read the starting offset from a video URL's t= or start= parameter.

    Args:
        url: YouTube video URL

    Returns:
        Offset in seconds, or None if absent or unparseable
    """
    if not url:
        return None
    parsed = urlparse(url.strip())
    params = parse_qs(parsed.query)
    # Some share links put the offset in the fragment
    if parsed.fragment:
        params = {**parse_qs(parsed.fragment), **params}

    for key in ("t", "start"):
        for raw in params.get(key, []):
            seconds = parse_time_value(raw)
            if seconds is not None:
                return seconds
    return None


def format_timestamp(seconds: float) -> str:
    """
    Format seconds as h:mm:ss when an hour or longer, m:ss otherwise.

    Args:
        seconds: Offset in seconds

    Returns:
        Formatted timestamp
    """
    total = int(max(seconds, 0))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
