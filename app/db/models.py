"""
SQLAlchemy models for the YouTube study notes database.
"""

import datetime
from sqlalchemy import Column, String, Text, DateTime, Integer, JSON

from app.db.database import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class TranscriptCacheEntry(Base):
    """Last successfully fetched transcript for a video."""
    __tablename__ = "video_transcripts_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    video_id = Column(String(20), unique=True, index=True, nullable=False)
    lang = Column(String(20), nullable=True)
    transcript = Column(Text, nullable=False)
    segments = Column(JSON, nullable=True)  # [{"text", "start", "duration"}, ...]
    source = Column(String(20), nullable=False, default="unknown")
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<TranscriptCacheEntry(video_id='{self.video_id}', source='{self.source}')>"
