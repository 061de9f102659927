"""
Validate synthesized notes and wrap results in the caller-facing envelopes.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.models.schemas import (
    ErrorCode,
    ErrorResponse,
    NoteDocument,
    NotesPayload,
    SuccessResponse,
    TranscriptSource,
    VideoType,
)
from app.utils.error_handling import NotesError, NotesParseError
from app.utils.logger import logging


def validate_notes(raw: Dict[str, Any]) -> NoteDocument:
    """
    Check the synthesizer's object has everything a notes document needs.

    Raises:
        NotesParseError: if required fields are missing or empty
    """
    try:
        return NoteDocument.model_validate(raw)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in e.errors()})
        logging.error(f"Synthesized notes failed validation on {fields}")
        raise NotesParseError(debug={"invalidFields": fields}) from e


def success_response(
    raw_notes: Dict[str, Any],
    video_url: str,
    video_type: VideoType,
    duration: str,
    source: Optional[TranscriptSource],
    debug: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the success envelope.

    Args:
        raw_notes: Object produced by the synthesizer
        video_url: URL the caller submitted
        video_type: Category used for the notes
        duration: Formatted transcript duration
        source: Where the transcript came from
        debug: Optional diagnostics to attach

    Returns:
        JSON-ready dict with success=True and the notes
    """
    document = validate_notes(raw_notes)
    payload = NotesPayload(
        title=document.title,
        summary=document.summary,
        key_points=document.key_points,
        sections=document.sections,
        duration=duration,
        video_url=video_url,
        video_type=video_type.value,
        has_transcript=True,
        transcript_source=source.value if source else None,
    )
    return SuccessResponse(notes=payload, debug=debug).model_dump(mode="json", by_alias=True, exclude_none=True)


def error_response(error: NotesError, debug: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the error envelope for a terminal failure."""
    merged = dict(error.debug or {})
    merged.update(debug or {})
    envelope = ErrorResponse(
        error=error.message,
        error_code=ErrorCode(error.error_code) if error.error_code else None,
        debug=merged or None,
    )
    return envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
