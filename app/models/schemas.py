"""
Data models for the YouTube study notes application.
"""
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.config import config


class VideoType(str, Enum):
    """Video categories that bias the tone and structure of the notes."""
    ACADEMIC_LECTURE = "Academic Lecture"
    TUTORIAL = "Tutorial"
    MOTIVATIONAL = "Motivational"
    REVIEW_SESSION = "Review Session"
    QA_FORMAT = "Q&A Format"
    GENERAL = "General"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "VideoType":
        """Resolve a category name, falling back to General for unknown values."""
        if not value:
            return cls.GENERAL
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return cls.GENERAL


class TranscriptSource(str, Enum):
    """Where a transcript came from."""
    OVERRIDE = "override"
    CACHE = "cache"
    DIRECT = "direct"
    TRACK_LIST = "track_list"
    WATCH_PAGE = "watch_page"


class PipelineSettings(BaseModel):
    """Tunable policy for transcript acceptance, chunking and upstream calls."""
    min_segments: int = config.MIN_TRANSCRIPT_SEGMENTS
    min_chars: int = config.MIN_TRANSCRIPT_CHARS
    min_override_chars: int = config.MIN_OVERRIDE_CHARS
    preferred_language: str = config.PREFERRED_CAPTION_LANGUAGE
    segments_per_block: int = config.SEGMENTS_PER_BLOCK
    direct_mode_max_chars: int = config.DIRECT_MODE_MAX_CHARS
    chunk_size: int = config.CHUNK_SIZE
    max_chunks: int = config.MAX_CHUNKS
    http_max_attempts: int = config.HTTP_MAX_ATTEMPTS
    http_backoff_base: float = config.HTTP_BACKOFF_BASE
    http_timeout: float = config.HTTP_TIMEOUT


class TranscriptSegment(BaseModel):
    """A single caption cue with timing in seconds."""
    text: str
    start: float
    duration: float = 0.0

    model_config = ConfigDict(frozen=True)


class TranscriptResult(BaseModel):
    """Transcript text plus its timed segments."""
    transcript: str
    segments: List[TranscriptSegment] = Field(default_factory=list)
    lang: Optional[str] = None
    source: TranscriptSource
    used_cache: bool = False

    def is_usable(self, min_segments: int = config.MIN_TRANSCRIPT_SEGMENTS,
                  min_chars: int = config.MIN_TRANSCRIPT_CHARS) -> bool:
        """Whether the result carries enough text to be worth synthesizing."""
        return (
            bool(self.transcript.strip())
            and len(self.segments) > min_segments
            and len(self.transcript) > min_chars
        )


class CaptionTrack(BaseModel):
    """A caption stream advertised for a video."""
    base_url: str
    language_code: str = ""
    kind: Optional[str] = None
    name: Optional[str] = None


class TranscriptChunk(BaseModel):
    """A character-bounded window of the timestamped transcript."""
    index: int
    total: int
    text: str


class ChunkSummary(BaseModel):
    """Summary of a single transcript chunk."""
    chunk_summary: str = Field(alias="chunkSummary")
    chunk_key_points: List[str] = Field(default_factory=list, alias="chunkKeyPoints")

    model_config = ConfigDict(populate_by_name=True)


class NoteSection(BaseModel):
    """A titled, optionally timestamped section of the notes."""
    title: str
    timestamp: str = ""
    content: str

    @field_validator("timestamp", mode="before")
    @classmethod
    def coerce_timestamp(cls, v):
        return "" if v is None else str(v)


class NoteDocument(BaseModel):
    """Structured notes produced by the synthesizer."""
    title: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    key_points: List[str] = Field(min_length=1, alias="keyPoints")
    sections: List[NoteSection] = Field(min_length=1)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title", "summary")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class FetchAttempt(BaseModel):
    """Outcome of a single transcript acquisition step."""
    strategy: str
    success: bool
    segments: int = 0
    chars: int = 0
    error: Optional[str] = None


class ResolverDiagnostics(BaseModel):
    """Trail of what the resolver tried, for operators."""
    video_id: str
    override_provided: bool = False
    override_chars: int = 0
    cache_hit: bool = False
    cache_error: Optional[str] = None
    start_seconds: Optional[int] = None
    attempts: List[FetchAttempt] = Field(default_factory=list)
    source: Optional[TranscriptSource] = None
    last_error: Optional[str] = None

    def record(self, attempt: FetchAttempt) -> None:
        self.attempts.append(attempt)
        if attempt.error:
            self.last_error = attempt.error

    def to_debug(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class VideoInfo(BaseModel):
    """Display metadata for a video."""
    video_id: str
    title: str = "YouTube Video"
    author: Optional[str] = None


class ErrorCode(str, Enum):
    """Machine-readable failure categories returned to callers."""
    BAD_REQUEST = "BAD_REQUEST"
    INVALID_URL = "INVALID_URL"
    AI_NOT_CONFIGURED = "AI_NOT_CONFIGURED"
    NO_TRANSCRIPT = "NO_TRANSCRIPT"
    RATE_LIMIT = "RATE_LIMIT"
    PAYMENT_REQUIRED = "PAYMENT_REQUIRED"
    PARSE_ERROR = "PARSE_ERROR"


class NotesPayload(BaseModel):
    """Notes as returned to the caller, enriched with request metadata."""
    title: str
    summary: str
    key_points: List[str] = Field(alias="keyPoints")
    sections: List[NoteSection]
    duration: str
    video_url: str = Field(alias="videoUrl")
    video_type: str = Field(alias="videoType")
    has_transcript: bool = Field(True, alias="hasTranscript")
    transcript_source: Optional[str] = Field(None, alias="transcriptSource")

    model_config = ConfigDict(populate_by_name=True)


class SuccessResponse(BaseModel):
    success: bool = True
    notes: NotesPayload
    debug: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    error_code: Optional[ErrorCode] = Field(None, alias="errorCode")
    debug: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True)
