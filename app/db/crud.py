"""
CRUD operations for the YouTube study notes database.
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.db.models import TranscriptCacheEntry
from app.models.schemas import TranscriptResult


def get_cached_transcript(db: Session, video_id: str) -> Optional[TranscriptCacheEntry]:
    """Get the cached transcript row for a video."""
    return db.query(TranscriptCacheEntry).filter(TranscriptCacheEntry.video_id == video_id).first()


def upsert_cached_transcript(db: Session, video_id: str, result: TranscriptResult) -> TranscriptCacheEntry:
    """
    Create or overwrite the cached transcript for a video.

    The latest successful fetch wins.
    """
    entry = get_cached_transcript(db, video_id)
    if entry is None:
        entry = TranscriptCacheEntry(video_id=video_id)
        db.add(entry)

    entry.transcript = result.transcript
    entry.segments = [segment.model_dump() for segment in result.segments]
    entry.lang = result.lang
    entry.source = result.source.value

    db.commit()
    db.refresh(entry)
    return entry
