"""
Parsers for YouTube caption payloads.

The timed-text XML format carries one cue per element:

    <text start="12.3" dur="4.5">Hello &amp;amp; welcome</text>

Caption endpoints can also answer in the json3 format (``events[].segs[].utf8``)
or in srv3 XML (``<p t="ms" d="ms">``); both are normalized to the same
segments.
"""

import html
import json
import re
from typing import List, Optional

from app.models.schemas import PipelineSettings, TranscriptResult, TranscriptSegment, TranscriptSource
from app.utils.error_handling import FetchError


TEXT_ELEMENT = re.compile(r"<text\b([^>]*)>(.*?)</text>", re.DOTALL | re.IGNORECASE)
P_ELEMENT = re.compile(r"<p\b([^>]*)>(.*?)</p>", re.DOTALL | re.IGNORECASE)
ATTRIBUTE = re.compile(r'([\w:-]+)\s*=\s*"([^"]*)"')
INNER_TAG = re.compile(r"<[^>]+>")
WHITESPACE = re.compile(r"\s+")
ENTITY = re.compile(r"&(#\d+|#x[0-9a-fA-F]+|[a-zA-Z]+);")


def decode_caption_text(payload: str) -> str:
    """
    Decode entities in a caption payload and normalize whitespace.

    Payloads are frequently double-escaped (``&amp;#39;``), so a second pass
    runs when entities survive the first.
    """
    text = html.unescape(payload)
    if ENTITY.search(text):
        text = html.unescape(text)
    text = text.replace("\n", " ")
    return WHITESPACE.sub(" ", text).strip()


def _attributes(raw: str) -> dict:
    return {name.lower(): value for name, value in ATTRIBUTE.findall(raw)}


def _to_float(value: Optional[str], default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_timed_text(payload: str) -> List[TranscriptSegment]:
    """
    Parse timed-text XML into segments.

    Args:
        payload: XML body returned by a timedtext endpoint

    Returns:
        Segments in document order; empty cues are dropped
    """
    segments = []
    for raw_attrs, body in TEXT_ELEMENT.findall(payload):
        text = decode_caption_text(body)
        if not text:
            continue
        attrs = _attributes(raw_attrs)
        segments.append(TranscriptSegment(
            text=text,
            start=_to_float(attrs.get("start")),
            duration=_to_float(attrs.get("dur")),
        ))

    if segments:
        return segments

    for raw_attrs, body in P_ELEMENT.findall(payload):
        text = decode_caption_text(INNER_TAG.sub("", body))
        if not text:
            continue
        attrs = _attributes(raw_attrs)
        segments.append(TranscriptSegment(
            text=text,
            start=_to_float(attrs.get("t")) / 1000,
            duration=_to_float(attrs.get("d")) / 1000,
        ))
    return segments


def parse_json3(payload: str) -> List[TranscriptSegment]:
    """
    Parse a json3 caption body into segments.

    Args:
        payload: JSON body with an ``events`` list

    Returns:
        Segments for every event carrying text
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise FetchError(f"Invalid json3 caption data: {e}")
    if not isinstance(data, dict):
        raise FetchError("Unexpected json3 caption data: top level is not an object")
    events = data.get("events") or []
    if not isinstance(events, list):
        raise FetchError("Unexpected json3 caption data: events is not a list")

    segments = []
    for event in events:
        if not isinstance(event, dict):
            raise FetchError(f"Unexpected json3 caption event: {type(event).__name__}")
        segs = event.get("segs")
        if not segs:
            continue
        if not isinstance(segs, list) or not all(isinstance(seg, dict) for seg in segs):
            raise FetchError("Unexpected json3 caption event: segs is not a list of objects")
        text = decode_caption_text("".join(str(seg.get("utf8") or "") for seg in segs))
        if not text:
            continue
        segments.append(TranscriptSegment(
            text=text,
            start=_to_float(event.get("tStartMs")) / 1000,
            duration=_to_float(event.get("dDurationMs")) / 1000,
        ))
    return segments


def parse_caption_payload(payload: str) -> List[TranscriptSegment]:
    """Parse either caption format, choosing by the body's first character."""
    body = (payload or "").lstrip()
    if not body:
        return []
    if body.startswith("{"):
        return parse_json3(body)
    return parse_timed_text(body)


def build_result(
    segments: List[TranscriptSegment],
    source: TranscriptSource,
    settings: PipelineSettings,
    lang: Optional[str] = None,
) -> TranscriptResult:
    """
    Assemble a TranscriptResult, rejecting payloads too thin to be useful.

    Raises:
        FetchError: if the segment or character count is at or below the thresholds
    """
    transcript = " ".join(segment.text for segment in segments).strip()
    result = TranscriptResult(transcript=transcript, segments=segments, lang=lang, source=source)
    if not result.is_usable(settings.min_segments, settings.min_chars):
        raise FetchError(
            f"Caption payload too short: {len(segments)} segments, {len(transcript)} chars"
        )
    return result
