"""
Tests for the database-backed transcript cache.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.cache import CacheUnavailable, TranscriptCache
from app.db.crud import get_cached_transcript
from app.models.schemas import TranscriptResult, TranscriptSource


@pytest.fixture
def cache(db_session_factory, settings):
    return TranscriptCache(session_factory=db_session_factory, settings=settings)


def make_result(segments, source=TranscriptSource.DIRECT):
    return TranscriptResult(
        transcript=" ".join(s.text for s in segments),
        segments=segments,
        lang="en",
        source=source,
    )


def broken_factory():
    factory = MagicMock()
    factory.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    return factory


def test_lookup_miss(cache):
    assert cache.lookup("missingvid1") is None


def test_put_then_lookup(cache, make_segments):
    segments = make_segments(15)
    assert cache.put("abcdefghijk", make_result(segments)) is True

    cached = cache.lookup("abcdefghijk")

    assert cached.used_cache is True
    assert cached.source == TranscriptSource.CACHE
    assert cached.lang == "en"
    assert cached.segments == segments


def test_put_overwrites_existing_entry(cache, db_session_factory, make_segments):
    cache.put("abcdefghijk", make_result(make_segments(15)))
    cache.put("abcdefghijk", make_result(make_segments(20), source=TranscriptSource.WATCH_PAGE))

    with db_session_factory() as db:
        entry = get_cached_transcript(db, "abcdefghijk")
        assert entry.source == "watch_page"
        assert len(entry.segments) == 20

    assert len(cache.lookup("abcdefghijk").segments) == 20


def test_unusable_entry_is_a_miss(cache, make_segments):
    cache.put("abcdefghijk", make_result(make_segments(5)))
    assert cache.lookup("abcdefghijk") is None


def test_read_error_raises_cache_unavailable(settings):
    cache = TranscriptCache(session_factory=broken_factory(), settings=settings)
    with pytest.raises(CacheUnavailable):
        cache.lookup("abcdefghijk")


def test_write_error_is_swallowed(settings, make_segments):
    cache = TranscriptCache(session_factory=broken_factory(), settings=settings)
    assert cache.put("abcdefghijk", make_result(make_segments(15))) is False
