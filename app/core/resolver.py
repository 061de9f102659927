"""
Resolve a video's transcript: override, then cache, then each fetch strategy in turn.
"""

from typing import Iterable, List, Optional, Tuple

import requests

from app.core.cache import CacheUnavailable, TranscriptCache
from app.core.fetchers import DEFAULT_FETCHERS, TranscriptFetcher
from app.models.schemas import (
    FetchAttempt,
    PipelineSettings,
    ResolverDiagnostics,
    TranscriptResult,
    TranscriptSource,
)
from app.utils.http import create_session
from app.utils.logger import logging


def apply_start_offset(result: TranscriptResult, start_seconds: Optional[int]) -> TranscriptResult:
    """
    Keep only segments starting at or after start_seconds.

    If nothing would remain, the unfiltered result is returned unchanged.
    """
    if not start_seconds or not result.segments:
        return result

    kept = [segment for segment in result.segments if segment.start >= start_seconds]
    if not kept:
        logging.info(f"Start offset {start_seconds}s is past every segment, keeping full transcript")
        return result

    return result.model_copy(update={
        "segments": kept,
        "transcript": " ".join(segment.text for segment in kept).strip(),
    })


class TranscriptResolver:
    """
    Chain of transcript sources tried in a fixed order until one is usable.

    Adding, removing or reordering a strategy only changes the fetchers list.
    """

    def __init__(
        self,
        cache: Optional[TranscriptCache] = None,
        fetchers: Optional[Iterable[TranscriptFetcher]] = None,
        settings: Optional[PipelineSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or PipelineSettings()
        self.cache = cache
        if fetchers is None:
            session = session or create_session()
            fetchers = [cls(session=session, settings=self.settings) for cls in DEFAULT_FETCHERS]
        self.fetchers: List[TranscriptFetcher] = list(fetchers)

    def resolve(
        self,
        video_id: str,
        override: Optional[str] = None,
        start_seconds: Optional[int] = None,
    ) -> Tuple[Optional[TranscriptResult], ResolverDiagnostics]:
        """
        Find a usable transcript for a video.

        Args:
            video_id: 11-character video ID
            override: Caller-supplied transcript text
            start_seconds: Optional offset to trim the transcript to

        Returns:
            The transcript (None if every source failed) and the diagnostics trail
        """
        diagnostics = ResolverDiagnostics(video_id=video_id, start_seconds=start_seconds)

        result = self._from_override(override, diagnostics)
        if result is None:
            result = self._from_cache(video_id, diagnostics)
        if result is None:
            result = self._from_fetchers(video_id, diagnostics)

        if result is None:
            logging.warning(
                f"No transcript for {video_id} after {len(diagnostics.attempts)} attempts: "
                f"{diagnostics.last_error}"
            )
            return None, diagnostics

        diagnostics.source = result.source
        return apply_start_offset(result, start_seconds), diagnostics

    def _from_override(self, override: Optional[str], diagnostics: ResolverDiagnostics) -> Optional[TranscriptResult]:
        if override is None:
            return None
        text = override.strip()
        diagnostics.override_provided = True
        diagnostics.override_chars = len(text)
        if len(text) < self.settings.min_override_chars:
            diagnostics.record(FetchAttempt(
                strategy=TranscriptSource.OVERRIDE.value,
                success=False,
                chars=len(text),
                error=f"Override too short ({len(text)} chars)",
            ))
            return None
        diagnostics.record(FetchAttempt(strategy=TranscriptSource.OVERRIDE.value, success=True, chars=len(text)))
        return TranscriptResult(transcript=text, source=TranscriptSource.OVERRIDE)

    def _from_cache(self, video_id: str, diagnostics: ResolverDiagnostics) -> Optional[TranscriptResult]:
        if self.cache is None:
            return None
        try:
            result = self.cache.lookup(video_id)
        except CacheUnavailable as e:
            logging.warning(f"Transcript cache unavailable for {video_id}: {e}")
            diagnostics.cache_error = str(e)
            return None

        diagnostics.cache_hit = result is not None
        if result is not None:
            logging.info(f"Transcript cache hit for {video_id}")
            diagnostics.record(FetchAttempt(
                strategy=TranscriptSource.CACHE.value,
                success=True,
                segments=len(result.segments),
                chars=len(result.transcript),
            ))
        return result

    def _from_fetchers(self, video_id: str, diagnostics: ResolverDiagnostics) -> Optional[TranscriptResult]:
        for fetcher in self.fetchers:
            result, attempt = fetcher.attempt(video_id)
            if result is not None and not result.is_usable(self.settings.min_segments, self.settings.min_chars):
                attempt = attempt.model_copy(update={"success": False, "error": "Transcript below usable threshold"})
                result = None
            diagnostics.record(attempt)
            if result is None:
                continue
            if self.cache is not None:
                self.cache.put(video_id, result)
            return result
        return None
