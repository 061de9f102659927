"""
Fetch captions by listing the available tracks, then fetching the best one.
"""

import html
import re
from typing import List
from urllib.parse import urlencode

from app.core.fetchers.base import TranscriptFetcher
from app.core.fetchers.timedtext import build_result, parse_caption_payload
from app.models.schemas import CaptionTrack, TranscriptResult, TranscriptSource
from app.utils.error_handling import FetchError


TRACK_LIST_URL = "https://video.google.com/timedtext"
TRACK_ELEMENT = re.compile(r"<track\b([^>]*?)/?>", re.IGNORECASE)
ATTRIBUTE = re.compile(r'([\w:-]+)\s*=\s*"([^"]*)"')


def parse_track_list(payload: str, video_id: str) -> List[CaptionTrack]:
    """
    Parse a ``type=list`` response into caption tracks.

    Each track's URL points back at the same endpoint for that language.
    """
    tracks = []
    for raw_attrs in TRACK_ELEMENT.findall(payload or ""):
        attrs = {k.lower(): html.unescape(v) for k, v in ATTRIBUTE.findall(raw_attrs)}
        lang_code = attrs.get("lang_code")
        if not lang_code:
            continue
        params = {"v": video_id, "lang": lang_code}
        if attrs.get("name"):
            params["name"] = attrs["name"]
        if attrs.get("kind"):
            params["kind"] = attrs["kind"]
        tracks.append(CaptionTrack(
            base_url=f"{TRACK_LIST_URL}?{urlencode(params)}",
            language_code=lang_code,
            kind=attrs.get("kind"),
            name=attrs.get("name") or attrs.get("lang_original"),
        ))
    return tracks


def choose_track(tracks: List[CaptionTrack], preferred_language: str) -> CaptionTrack:
    """Pick the first track whose language starts with the preferred code, else the first track."""
    if not tracks:
        raise FetchError("No caption tracks available")
    preferred = preferred_language.lower()
    for track in tracks:
        if track.language_code.lower().startswith(preferred):
            return track
    return tracks[0]


class TrackListFetcher(TranscriptFetcher):
    """Enumerate caption tracks for the video, then fetch the preferred one."""

    name = "track_list"
    source = TranscriptSource.TRACK_LIST

    def list_tracks(self, video_id: str) -> List[CaptionTrack]:
        payload = self._get(f"{TRACK_LIST_URL}?{urlencode({'type': 'list', 'v': video_id})}")
        return parse_track_list(payload, video_id)

    def fetch(self, video_id: str) -> TranscriptResult:
        track = choose_track(self.list_tracks(video_id), self.settings.preferred_language)
        segments = parse_caption_payload(self._get(track.base_url))
        return build_result(segments, self.source, self.settings, lang=track.language_code)
