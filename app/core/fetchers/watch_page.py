"""
Fetch captions from the watch page, falling back to the internal player API.
"""

import re
from typing import Any, Dict, List, Optional

from app.core.fetchers.base import TranscriptFetcher
from app.core.fetchers.track_list import choose_track
from app.core.fetchers.timedtext import build_result, parse_caption_payload
from app.models.schemas import CaptionTrack, TranscriptResult, TranscriptSource
from app.utils.error_handling import FetchError
from app.utils.json_parsing import find_json_after
from app.utils.logger import logging


WATCH_URL = "https://www.youtube.com/watch?v={video_id}&hl=en&has_verified=1&bpctr=9999999999"
PLAYER_API_URL = "https://www.youtube.com/youtubei/v1/player?key={api_key}"

PLAYER_RESPONSE_MARKER = "ytInitialPlayerResponse"
CONTEXT_MARKER = '"INNERTUBE_CONTEXT":'
API_KEY_PATTERN = re.compile(r'"INNERTUBE_API_KEY"\s*:\s*"([^"]+)"')

DEFAULT_CLIENT_CONTEXT = {
    "client": {
        "clientName": "WEB",
        "clientVersion": "2.20240101.00.00",
        "hl": "en",
        "gl": "US",
    }
}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def caption_tracks_from_player(player_response: Optional[Dict[str, Any]]) -> List[CaptionTrack]:
    """
    Pull the caption track list out of a player response object.

    Raises:
        FetchError: if the response is not a JSON object
    """
    if not player_response:
        return []
    if not isinstance(player_response, dict):
        raise FetchError(f"Unexpected player response: {type(player_response).__name__}")
    renderer = _as_dict(_as_dict(player_response.get("captions")).get("playerCaptionsTracklistRenderer"))
    raw_tracks = renderer.get("captionTracks")
    tracks = []
    for raw in raw_tracks if isinstance(raw_tracks, list) else []:
        if not isinstance(raw, dict):
            continue
        base_url = raw.get("baseUrl")
        if not base_url or not isinstance(base_url, str):
            continue
        name = _as_dict(raw.get("name"))
        if "simpleText" in name:
            label = str(name["simpleText"])
        else:
            runs = name.get("runs")
            label = "".join(
                str(run.get("text", "")) for run in (runs if isinstance(runs, list) else []) if isinstance(run, dict)
            ) or None
        tracks.append(CaptionTrack(
            base_url=base_url,
            language_code=str(raw.get("languageCode") or ""),
            kind=raw.get("kind") if isinstance(raw.get("kind"), str) else None,
            name=label,
        ))
    return tracks


class WatchPageFetcher(TranscriptFetcher):
    """Scrape the caption track list embedded in the watch page HTML."""

    name = "watch_page"
    source = TranscriptSource.WATCH_PAGE

    def fetch(self, video_id: str) -> TranscriptResult:
        page = self._get(WATCH_URL.format(video_id=video_id))

        tracks = caption_tracks_from_player(find_json_after(page, PLAYER_RESPONSE_MARKER))
        if not tracks:
            logging.info(f"[{self.name}] no embedded caption tracks for {video_id}, calling player API")
            tracks = self.tracks_from_player_api(video_id, page)
        if not tracks:
            raise FetchError("No caption tracks found on watch page or player API")

        track = choose_track(tracks, self.settings.preferred_language)
        segments = parse_caption_payload(self._get(track.base_url))
        return build_result(segments, self.source, self.settings, lang=track.language_code)

    def tracks_from_player_api(self, video_id: str, page: str) -> List[CaptionTrack]:
        """Call the internal player endpoint with the key and client context found on the page."""
        key_match = API_KEY_PATTERN.search(page)
        if not key_match:
            raise FetchError("Player API key not found on watch page")

        context = find_json_after(page, CONTEXT_MARKER) or DEFAULT_CLIENT_CONTEXT
        response = self._post(
            PLAYER_API_URL.format(api_key=key_match.group(1)),
            json={"context": context, "videoId": video_id},
        )
        if not response.ok:
            raise FetchError(f"Player API returned HTTP {response.status_code}", response.status_code)
        return caption_tracks_from_player(response.json())
