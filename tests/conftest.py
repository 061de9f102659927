"""
Configuration for pytest tests.
"""

import os

# Set before the app reads its configuration
os.environ.setdefault("GROQ_API_KEY", "test_api_key")
os.environ.setdefault("ENVIRONMENT", "development")

import html
import pytest
from unittest.mock import MagicMock, patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import Base
from app.models.schemas import PipelineSettings, TranscriptSegment


SENTENCE = "In this part of the lecture we cover how transcripts are fetched and parsed"


@pytest.fixture(autouse=True)
def no_sleep():
    """Never wait between retries in tests."""
    with patch("retry.api.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def settings():
    """Default pipeline settings with retry delays disabled."""
    return PipelineSettings(http_backoff_base=0)


@pytest.fixture
def make_segments():
    """Factory for evenly spaced transcript segments."""
    def _make(count=30, spacing=5.0, text=SENTENCE):
        return [
            TranscriptSegment(text=f"{text} ({index})", start=index * spacing, duration=spacing)
            for index in range(count)
        ]
    return _make


@pytest.fixture
def timed_text_xml():
    """Factory for timed-text XML bodies built from segments."""
    def _build(segments):
        cues = "".join(
            f'<text start="{segment.start}" dur="{segment.duration}">{html.escape(segment.text)}</text>'
            for segment in segments
        )
        return f'<?xml version="1.0" encoding="utf-8" ?><transcript>{cues}</transcript>'
    return _build


@pytest.fixture
def fake_response():
    """Factory for requests-like response mocks."""
    def _make(status_code=200, text="", json_data=None):
        response = MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 400
        response.text = text
        if json_data is not None:
            response.json.return_value = json_data
        else:
            response.json.side_effect = ValueError("No JSON body")
        return response
    return _make


@pytest.fixture
def route_session(fake_response):
    """
    Build a session mock that answers by URL.

    Routes map a URL substring to a response, or to a list of responses
    returned in turn. Unmatched URLs get a 404.
    """
    def _make(routes):
        pending = {key: list(value) if isinstance(value, list) else value for key, value in routes.items()}

        def _request(method, url, **kwargs):
            for key, value in pending.items():
                if key in url:
                    if isinstance(value, list):
                        return value.pop(0) if len(value) > 1 else value[0]
                    return value
            return fake_response(404)

        session = MagicMock()
        session.request.side_effect = _request
        return session
    return _make


@pytest.fixture
def db_session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    from app.db import models  # noqa: F401 registers the cache table

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
