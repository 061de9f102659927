"""
Tests for transcript formatting and chunking.
"""

import pytest

from app.core.formatter import chunk_text, compute_duration, group_segments, timestamped_transcript
from app.models.schemas import TranscriptResult, TranscriptSegment, TranscriptSource


def test_group_segments_blocks_of_twelve(make_segments):
    segments = make_segments(30, spacing=5.0, text="word")
    lines = group_segments(segments, per_block=12).split("\n")

    assert len(lines) == 3
    assert lines[0].startswith("[0:00] word (0) word (1)")
    assert lines[1].startswith("[1:00] word (12)")
    assert lines[2].startswith("[2:00] word (24)")
    assert lines[2].endswith("word (29)")


def test_group_segments_hour_stamps():
    segments = [TranscriptSegment(text="late", start=3725, duration=2)]
    assert group_segments(segments) == "[1:02:05] late"


def test_timestamped_transcript_without_segments():
    result = TranscriptResult(transcript="  pasted transcript text  ", source=TranscriptSource.OVERRIDE)
    assert timestamped_transcript(result) == "pasted transcript text"


def test_compute_duration():
    segments = [
        TranscriptSegment(text="a", start=0, duration=10),
        TranscriptSegment(text="b", start=590, duration=10),
        TranscriptSegment(text="c", start=300, duration=5),
    ]
    assert compute_duration(segments) == "10:00"
    assert compute_duration([TranscriptSegment(text="x", start=3600, duration=61)]) == "1:01:01"
    assert compute_duration([]) == "Unknown"


def test_chunk_text_round_trip():
    text = "".join(chr(ord("a") + i % 26) for i in range(50000))
    chunks = chunk_text(text, chunk_size=18000, max_chunks=6)

    assert len(chunks) == 3
    assert [len(c.text) for c in chunks] == [18000, 18000, 14000]
    assert [c.index for c in chunks] == [0, 1, 2]
    assert all(c.total == 3 for c in chunks)
    assert "".join(c.text for c in chunks) == text


def test_chunk_text_truncates_beyond_max_chunks():
    text = "x" * 1000
    chunks = chunk_text(text, chunk_size=100, max_chunks=3)

    assert len(chunks) == 3
    assert sum(len(c.text) for c in chunks) == 300


def test_chunk_text_edge_cases():
    assert chunk_text("", chunk_size=10) == []
    assert len(chunk_text("short", chunk_size=10)) == 1
    with pytest.raises(ValueError):
        chunk_text("abc", chunk_size=0)
