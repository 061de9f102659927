"""
Tests for URL and time helpers.
"""

import pytest

from app.utils.helpers import extract_video_id, format_timestamp, parse_start_seconds, parse_time_value


@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
    "https://youtu.be/dQw4w9WgXcQ?si=abc",
    "https://www.youtube.com/embed/dQw4w9WgXcQ",
    "https://www.youtube.com/v/dQw4w9WgXcQ",
    "  https://m.youtube.com/watch?v=dQw4w9WgXcQ&t=42  ",
])
def test_extract_video_id(url):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", [
    "",
    None,
    "https://vimeo.com/123456",
    "https://www.youtube.com/watch?v=short",
    "not a url",
])
def test_extract_video_id_rejects(url):
    assert extract_video_id(url) is None


@pytest.mark.parametrize("value,expected", [
    ("90", 90),
    ("90s", 90),
    ("2m", 120),
    ("1m30s", 90),
    ("1h2m3s", 3723),
    ("", None),
    ("abc", None),
    ("1.5", None),
])
def test_parse_time_value(value, expected):
    assert parse_time_value(value) == expected


def test_parse_start_seconds_from_query():
    assert parse_start_seconds("https://youtu.be/dQw4w9WgXcQ?t=75") == 75
    assert parse_start_seconds("https://www.youtube.com/watch?v=dQw4w9WgXcQ&start=30") == 30
    assert parse_start_seconds("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=1m5s") == 65


def test_parse_start_seconds_from_fragment():
    assert parse_start_seconds("https://www.youtube.com/watch?v=dQw4w9WgXcQ#t=2m") == 120


def test_parse_start_seconds_missing_or_invalid():
    assert parse_start_seconds("https://www.youtube.com/watch?v=dQw4w9WgXcQ") is None
    assert parse_start_seconds("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=soon") is None


def test_format_timestamp():
    assert format_timestamp(0) == "0:00"
    assert format_timestamp(65.9) == "1:05"
    assert format_timestamp(600) == "10:00"
    assert format_timestamp(3723) == "1:02:03"
