"""
End-to-end note generation: URL in, success or error envelope out.
"""

import traceback
from typing import Any, Callable, Dict, Optional

import requests

from app.core.assembler import error_response, success_response
from app.core.cache import TranscriptCache
from app.core.formatter import compute_duration, timestamped_transcript
from app.core.resolver import TranscriptResolver
from app.core.summarizer import NoteSummarizer
from app.core.video_info import get_video_info
from app.models.schemas import PipelineSettings, VideoType
from app.utils.error_handling import (
    InvalidRequestError,
    InvalidVideoUrlError,
    NoTranscriptError,
    NotesError,
    log_diagnostic_info,
)
from app.utils.helpers import extract_video_id, parse_start_seconds
from app.utils.http import create_session
from app.utils.logger import logging


class NotesPipeline:
    """Wires transcript resolution, formatting, synthesis and assembly together."""

    def __init__(
        self,
        resolver: Optional[TranscriptResolver] = None,
        summarizer_factory: Optional[Callable[..., NoteSummarizer]] = None,
        settings: Optional[PipelineSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or PipelineSettings()
        self.session = session or create_session()
        self.resolver = resolver or TranscriptResolver(
            cache=TranscriptCache(settings=self.settings),
            settings=self.settings,
            session=self.session,
        )
        self.summarizer_factory = summarizer_factory or NoteSummarizer

    def run(self, video_url: Optional[str], video_type: Optional[str] = None,
            transcript_override: Optional[str] = None) -> Dict[str, Any]:
        """
        Generate notes for a video.

        Never raises: every failure is returned as an error envelope.

        Args:
            video_url: YouTube URL
            video_type: Category name (unknown values fall back to General)
            transcript_override: Optional caller-supplied transcript

        Returns:
            Success or error envelope as a dict
        """
        try:
            return self._run(video_url, VideoType.from_value(video_type), transcript_override)
        except NotesError as e:
            logging.warning(f"Notes request failed [{e.error_code}]: {e.message}")
            return error_response(e)
        except Exception as e:
            logging.error(f"Unexpected error generating notes: {str(e)}")
            logging.error(traceback.format_exc())
            return error_response(NotesError(debug={"exception": type(e).__name__}))

    def _run(self, video_url: Optional[str], video_type: VideoType,
             transcript_override: Optional[str]) -> Dict[str, Any]:
        if not video_url or not isinstance(video_url, str) or not video_url.strip():
            raise InvalidRequestError()

        summarizer = self.summarizer_factory(settings=self.settings)

        video_id = extract_video_id(video_url)
        if not video_id:
            raise InvalidVideoUrlError()

        start_seconds = parse_start_seconds(video_url)
        logging.info(f"Generating {video_type.value} notes for {video_id} (start={start_seconds})")

        result, diagnostics = self.resolver.resolve(video_id, transcript_override, start_seconds)
        log_diagnostic_info(diagnostics.to_debug())
        if result is None:
            raise NoTranscriptError(debug={"transcript": diagnostics.to_debug()})

        text = timestamped_transcript(result, self.settings.segments_per_block)
        duration = compute_duration(result.segments)
        video_info = get_video_info(video_id, self.session)

        synthesis = summarizer.create_notes(text, video_info, video_type, duration)

        debug = {
            "transcript": diagnostics.to_debug(),
            "transcriptChars": len(text),
            "mode": synthesis.mode,
            "chunks": synthesis.chunk_count,
            "generatorCalls": synthesis.generator_calls,
        }

        return success_response(
            synthesis.notes,
            video_url=video_url,
            video_type=video_type,
            duration=duration,
            source=result.source,
            debug=debug,
        )


def generate_notes(video_url: Optional[str], video_type: Optional[str] = None,
                   transcript_override: Optional[str] = None) -> Dict[str, Any]:
    """Convenience wrapper around a default NotesPipeline."""
    return NotesPipeline().run(video_url, video_type, transcript_override)
