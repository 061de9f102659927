"""
Transcript fetch strategies, in the order the resolver tries them.
"""

from app.core.fetchers.base import TranscriptFetcher
from app.core.fetchers.direct import DirectCaptionFetcher
from app.core.fetchers.track_list import TrackListFetcher
from app.core.fetchers.watch_page import WatchPageFetcher

DEFAULT_FETCHERS = (DirectCaptionFetcher, TrackListFetcher, WatchPageFetcher)

__all__ = [
    "TranscriptFetcher",
    "DirectCaptionFetcher",
    "TrackListFetcher",
    "WatchPageFetcher",
    "DEFAULT_FETCHERS",
]
