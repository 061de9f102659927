"""
End-to-end tests for the notes pipeline with HTTP and the chat model mocked.
"""

from unittest.mock import patch, MagicMock

import groq
import httpx
import pytest
from langchain_core.messages import AIMessage

from app.config import config
from app.core.pipeline import NotesPipeline
from app.core.resolver import TranscriptResolver
from app.models.schemas import ResolverDiagnostics, TranscriptResult, TranscriptSource, VideoInfo

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

NOTES = {
    "title": "Sorting Algorithms",
    "summary": "Comparison sorts and their trade-offs.",
    "keyPoints": ["Merge sort is stable", "Quick sort is fast on average"],
    "sections": [{"title": "Merge sort", "timestamp": "0:00", "content": "Divide and conquer."}],
}


@pytest.fixture
def chat_model():
    with patch("app.core.summarizer.init_chat_model") as mock_init_model:
        mock_model = MagicMock()
        bound_model = MagicMock()
        bound_model.invoke.return_value = AIMessage(
            content="", tool_calls=[{"name": "create_notes", "args": NOTES, "id": "call_1"}]
        )
        mock_model.bind_tools.return_value = bound_model
        mock_init_model.return_value = mock_model
        yield bound_model


@pytest.fixture(autouse=True)
def video_info():
    with patch("app.core.pipeline.get_video_info") as mock_info:
        mock_info.return_value = VideoInfo(video_id="dQw4w9WgXcQ", title="Sorting 101")
        yield mock_info


@pytest.fixture
def resolver(make_segments):
    resolver = MagicMock(spec=TranscriptResolver)
    segments = make_segments(24, spacing=25.0)
    result = TranscriptResult(
        transcript=" ".join(s.text for s in segments),
        segments=segments,
        source=TranscriptSource.DIRECT,
    )
    diagnostics = ResolverDiagnostics(video_id="dQw4w9WgXcQ", source=TranscriptSource.DIRECT)
    resolver.resolve.return_value = (result, diagnostics)
    return resolver


@pytest.fixture
def pipeline(resolver, settings):
    return NotesPipeline(resolver=resolver, settings=settings, session=MagicMock())


def test_success(pipeline, chat_model, resolver):
    envelope = pipeline.run(URL, video_type="Academic Lecture")

    assert envelope["success"] is True
    notes = envelope["notes"]
    assert notes["title"] == "Sorting Algorithms"
    assert notes["duration"] == "10:00"
    assert notes["videoType"] == "Academic Lecture"
    assert notes["transcriptSource"] == "direct"
    assert envelope["debug"]["mode"] == "direct"
    assert envelope["debug"]["generatorCalls"] == 1
    resolver.resolve.assert_called_once_with("dQw4w9WgXcQ", None, None)

    user_message = chat_model.invoke.call_args.args[0][1].content
    assert "[0:00] " in user_message
    assert "[5:00] " in user_message
    assert "Sorting 101" in user_message


@pytest.mark.parametrize("url", [None, "", "   "])
def test_missing_url(pipeline, chat_model, resolver, url):
    envelope = pipeline.run(url)

    assert envelope == {"success": False, "error": "Video URL is required", "errorCode": "BAD_REQUEST"}
    resolver.resolve.assert_not_called()


def test_invalid_url(pipeline, chat_model, resolver):
    envelope = pipeline.run("https://vimeo.com/12345")

    assert envelope["errorCode"] == "INVALID_URL"
    resolver.resolve.assert_not_called()
    chat_model.invoke.assert_not_called()


def test_ai_not_configured(pipeline, resolver, monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "")
    with patch.object(config, "GROQ_API_KEY", None), patch("app.core.summarizer.init_chat_model"):
        envelope = pipeline.run(URL)

    assert envelope["errorCode"] == "AI_NOT_CONFIGURED"
    resolver.resolve.assert_not_called()


def test_no_transcript(settings, chat_model, fake_response):
    session = MagicMock()
    session.request.return_value = fake_response(404)
    pipeline = NotesPipeline(
        resolver=TranscriptResolver(settings=settings, session=session),
        settings=settings,
        session=session,
    )

    envelope = pipeline.run(URL)

    assert envelope["success"] is False
    assert envelope["errorCode"] == "NO_TRANSCRIPT"
    attempts = envelope["debug"]["transcript"]["attempts"]
    assert [a["strategy"] for a in attempts] == ["direct", "track_list", "watch_page"]
    assert all(not a["success"] for a in attempts)
    chat_model.invoke.assert_not_called()


def test_override_is_used(settings, chat_model, fake_response):
    session = MagicMock()
    session.request.return_value = fake_response(404)
    pipeline = NotesPipeline(
        resolver=TranscriptResolver(settings=settings, session=session),
        settings=settings,
        session=session,
    )
    override = "A pasted transcript about sorting algorithms. " * 10

    envelope = pipeline.run(URL, transcript_override=override)

    assert envelope["success"] is True
    assert envelope["notes"]["transcriptSource"] == "override"
    assert envelope["notes"]["duration"] == "Unknown"
    session.request.assert_not_called()
    assert override.strip() in chat_model.invoke.call_args.args[0][1].content


def test_start_offset_passed_to_resolver(pipeline, chat_model, resolver):
    pipeline.run("https://youtu.be/dQw4w9WgXcQ?t=1m40s")
    resolver.resolve.assert_called_once_with("dQw4w9WgXcQ", None, 100)


def test_unknown_video_type_defaults_to_general(pipeline, chat_model):
    envelope = pipeline.run(URL, video_type="Cooking Show")
    assert envelope["notes"]["videoType"] == "General"


def test_rate_limit(pipeline, chat_model):
    response = httpx.Response(429, request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions"))
    chat_model.invoke.side_effect = groq.RateLimitError("Too many requests", response=response, body=None)

    envelope = pipeline.run(URL)

    assert envelope["success"] is False
    assert envelope["errorCode"] == "RATE_LIMIT"


def test_payment_required(pipeline, chat_model):
    response = httpx.Response(402, request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions"))
    chat_model.invoke.side_effect = groq.APIStatusError("Payment required", response=response, body=None)

    envelope = pipeline.run(URL)

    assert envelope["success"] is False
    assert envelope["errorCode"] == "PAYMENT_REQUIRED"
    assert "notes" not in envelope


def test_track_list_fallback(settings, chat_model, route_session, fake_response, timed_text_xml, make_segments):
    track_list = (
        '<transcript_list><track id="0" name="English" lang_code="en" lang_original="English"/>'
        '</transcript_list>'
    )
    session = route_session({
        "type=list": fake_response(200, track_list),
        "name=English": fake_response(200, timed_text_xml(make_segments(40, spacing=15.0))),
    })
    pipeline = NotesPipeline(
        resolver=TranscriptResolver(settings=settings, session=session),
        settings=settings,
        session=session,
    )

    envelope = pipeline.run(URL, video_type="Tutorial")

    assert envelope["success"] is True
    assert envelope["notes"]["duration"] == "10:00"
    assert envelope["notes"]["transcriptSource"] == "track_list"
    attempts = envelope["debug"]["transcript"]["attempts"]
    assert [(a["strategy"], a["success"]) for a in attempts] == [("direct", False), ("track_list", True)]
    assert attempts[1]["segments"] == 40
    assert "[9:00] " in chat_model.invoke.call_args.args[0][1].content


def test_incomplete_notes_are_a_parse_error(pipeline, chat_model):
    chat_model.invoke.return_value = AIMessage(
        content="", tool_calls=[{"name": "create_notes", "args": {"title": "Only a title"}, "id": "call_1"}]
    )

    envelope = pipeline.run(URL)

    assert envelope["errorCode"] == "PARSE_ERROR"
    assert "notes" not in envelope


def test_unexpected_error_becomes_generic_envelope(pipeline, chat_model, resolver):
    resolver.resolve.side_effect = RuntimeError("boom")

    envelope = pipeline.run(URL)

    assert envelope["success"] is False
    assert envelope["error"] == "Failed to generate notes"
    assert "errorCode" not in envelope
    assert envelope["debug"] == {"exception": "RuntimeError"}
