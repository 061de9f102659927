"""
Common contract for transcript fetch strategies.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import requests

from app.models.schemas import FetchAttempt, PipelineSettings, TranscriptResult, TranscriptSource
from app.utils.error_handling import FetchError
from app.utils.http import create_session, fetch_text, request_with_retry
from app.utils.logger import logging


class TranscriptFetcher(ABC):
    """A single way of obtaining captions for a video."""

    name: str = "fetcher"
    source: TranscriptSource

    def __init__(self, session: Optional[requests.Session] = None,
                 settings: Optional[PipelineSettings] = None):
        self.session = session or create_session()
        self.settings = settings or PipelineSettings()

    @abstractmethod
    def fetch(self, video_id: str) -> TranscriptResult:
        """
        Fetch a usable transcript.

        Raises:
            FetchError: when this strategy cannot produce one
        """

    def attempt(self, video_id: str) -> Tuple[Optional[TranscriptResult], FetchAttempt]:
        """
        Run the strategy without raising.

        Returns:
            The result (None on failure) and a record of the attempt
        """
        try:
            result = self.fetch(video_id)
        except (FetchError, requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            logging.info(f"[{self.name}] no transcript for {video_id}: {e}")
            return None, FetchAttempt(strategy=self.name, success=False, error=str(e))

        logging.info(
            f"[{self.name}] transcript for {video_id}: "
            f"{len(result.segments)} segments, {len(result.transcript)} chars"
        )
        return result, FetchAttempt(
            strategy=self.name,
            success=True,
            segments=len(result.segments),
            chars=len(result.transcript),
        )

    def _get(self, url: str, **kwargs) -> str:
        return fetch_text(self.session, url, **self._http_options(), **kwargs)

    def _post(self, url: str, **kwargs) -> requests.Response:
        return request_with_retry(self.session, "POST", url, **self._http_options(), **kwargs)

    def _http_options(self) -> dict:
        return {
            "max_attempts": self.settings.http_max_attempts,
            "backoff_base": self.settings.http_backoff_base,
            "timeout": self.settings.http_timeout,
        }
