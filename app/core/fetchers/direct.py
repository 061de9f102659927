"""
Fetch captions by guessing timedtext URLs directly.
"""

from typing import Dict, List
from urllib.parse import urlencode

from app.core.fetchers.base import TranscriptFetcher
from app.core.fetchers.timedtext import build_result, parse_caption_payload
from app.models.schemas import TranscriptResult, TranscriptSource
from app.utils.error_handling import FetchError


TIMEDTEXT_HOSTS = (
    "https://www.youtube.com/api/timedtext",
    "https://video.google.com/timedtext",
)


class DirectCaptionFetcher(TranscriptFetcher):
    """Try a fixed set of language/kind/format permutations on each known host."""

    name = "direct"
    source = TranscriptSource.DIRECT

    def permutations(self) -> List[Dict[str, str]]:
        lang = self.settings.preferred_language
        return [
            {"lang": lang},
            {"lang": lang, "kind": "asr"},
            {"lang": lang, "fmt": "json3"},
            {"lang": lang, "kind": "asr", "fmt": "json3"},
        ]

    def fetch(self, video_id: str) -> TranscriptResult:
        last_error = "no caption permutation matched"
        for host in TIMEDTEXT_HOSTS:
            for params in self.permutations():
                url = f"{host}?{urlencode({'v': video_id, **params})}"
                try:
                    segments = parse_caption_payload(self._get(url))
                    return build_result(segments, self.source, self.settings, lang=params["lang"])
                except FetchError as e:
                    last_error = str(e)
        raise FetchError(f"Direct caption guesses exhausted: {last_error}")
