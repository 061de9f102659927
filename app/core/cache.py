"""
Database-backed transcript cache.

Write errors never escape; read errors surface as CacheUnavailable so the
resolver can record them and carry on as if it were a miss.
"""

from typing import Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.crud import get_cached_transcript, upsert_cached_transcript
from app.models.schemas import PipelineSettings, TranscriptResult, TranscriptSegment, TranscriptSource
from app.utils.logger import logging


class CacheUnavailable(Exception):
    """Raised internally when the cache store cannot be read."""


class TranscriptCache:
    """Keyed store of the last good transcript per video."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None,
                 settings: Optional[PipelineSettings] = None):
        if session_factory is None:
            from app.db.database import SessionLocal
            session_factory = SessionLocal
        self.session_factory = session_factory
        self.settings = settings or PipelineSettings()

    def lookup(self, video_id: str) -> Optional[TranscriptResult]:
        """
        Return the cached transcript, or None on a miss.

        Raises:
            CacheUnavailable: if the store could not be read
        """
        try:
            with self.session_factory() as db:
                entry = get_cached_transcript(db, video_id)
                if entry is None:
                    return None
                result = TranscriptResult(
                    transcript=entry.transcript,
                    segments=[TranscriptSegment(**segment) for segment in entry.segments or []],
                    lang=entry.lang,
                    source=TranscriptSource.CACHE,
                    used_cache=True,
                )
        except (SQLAlchemyError, ValidationError, TypeError) as e:
            raise CacheUnavailable(str(e)) from e

        if not result.is_usable(self.settings.min_segments, self.settings.min_chars):
            logging.info(f"Ignoring unusable cache entry for {video_id}")
            return None
        return result

    def put(self, video_id: str, result: TranscriptResult) -> bool:
        """Upsert the transcript for a video. Returns False if the write failed."""
        try:
            with self.session_factory() as db:
                upsert_cached_transcript(db, video_id, result)
        except SQLAlchemyError as e:
            logging.warning(f"Transcript cache write failed for {video_id}: {e}")
            return False
        logging.info(f"Cached transcript for {video_id} from {result.source.value}")
        return True
