"""
Turn timed segments into compact, timestamped text for the synthesizer.
"""

from typing import List, Sequence

from app.config import config
from app.models.schemas import TranscriptChunk, TranscriptResult, TranscriptSegment
from app.utils.helpers import format_timestamp
from app.utils.logger import logging


def group_segments(segments: Sequence[TranscriptSegment], per_block: int = config.SEGMENTS_PER_BLOCK) -> str:
    """
    Join segments into one line per block of per_block segments.

    Each line is stamped with its first segment's start time:

        [1:05] text of segments 13 to 24 ...

    Args:
        segments: Ordered transcript segments
        per_block: Number of consecutive segments per line

    Returns:
        Newline-separated timestamped blocks
    """
    per_block = max(per_block, 1)
    lines = []
    for offset in range(0, len(segments), per_block):
        block = segments[offset:offset + per_block]
        text = " ".join(segment.text for segment in block).strip()
        if text:
            lines.append(f"[{format_timestamp(block[0].start)}] {text}")
    return "\n".join(lines)


def timestamped_transcript(result: TranscriptResult, per_block: int = config.SEGMENTS_PER_BLOCK) -> str:
    """Timestamped text for a result, or its plain text when it has no segments."""
    if not result.segments:
        return result.transcript.strip()
    return group_segments(result.segments, per_block)


def compute_duration(segments: Sequence[TranscriptSegment]) -> str:
    """
    Total duration as the furthest segment end, formatted h:mm:ss or m:ss.

    Returns:
        Formatted duration, or "Unknown" when there are no segments
    """
    if not segments:
        return "Unknown"
    end = max(segment.start + segment.duration for segment in segments)
    return format_timestamp(end)


def chunk_text(text: str, chunk_size: int = config.CHUNK_SIZE,
               max_chunks: int = config.MAX_CHUNKS) -> List[TranscriptChunk]:
    """
    Split text into at most max_chunks windows of at most chunk_size characters.

    Boundaries fall on raw character offsets and may split sentences. Text
    beyond chunk_size * max_chunks is dropped.

    Args:
        text: Timestamped transcript
        chunk_size: Maximum characters per chunk
        max_chunks: Maximum number of chunks

    Returns:
        Chunks in order, each knowing its index and the total count
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    pieces = [text[offset:offset + chunk_size] for offset in range(0, len(text), chunk_size)]
    if len(pieces) > max_chunks:
        logging.warning(
            f"Transcript needs {len(pieces)} chunks, keeping the first {max_chunks} "
            f"({chunk_size * max_chunks} of {len(text)} chars)"
        )
        pieces = pieces[:max_chunks]

    return [
        TranscriptChunk(index=index, total=len(pieces), text=piece)
        for index, piece in enumerate(pieces)
    ]
