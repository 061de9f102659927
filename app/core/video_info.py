"""
Lightweight video metadata lookup through the public oEmbed endpoint.
"""

from typing import Optional
from urllib.parse import urlencode

import requests

from app.config import config
from app.models.schemas import VideoInfo
from app.utils.error_handling import FetchError
from app.utils.http import create_session, request_with_retry
from app.utils.logger import logging


OEMBED_URL = "https://www.youtube.com/oembed"


def get_video_info(video_id: str, session: Optional[requests.Session] = None) -> VideoInfo:
    """
    Look up the video title for prompt context.

    Never fails: any error yields a placeholder title.

    Args:
        video_id: YouTube video ID
        session: Optional requests session to reuse

    Returns:
        VideoInfo with title and author when available
    """
    session = session or create_session()
    params = urlencode({"url": f"https://www.youtube.com/watch?v={video_id}", "format": "json"})
    try:
        response = request_with_retry(session, "GET", f"{OEMBED_URL}?{params}", max_attempts=1,
                                      timeout=config.HTTP_TIMEOUT)
        if not response.ok:
            logging.info(f"oEmbed lookup for {video_id} returned HTTP {response.status_code}")
            return VideoInfo(video_id=video_id)
        data = response.json()
    except (requests.RequestException, FetchError, ValueError) as e:
        logging.info(f"oEmbed lookup for {video_id} failed: {e}")
        return VideoInfo(video_id=video_id)

    if not isinstance(data, dict):
        return VideoInfo(video_id=video_id)
    return VideoInfo(
        video_id=video_id,
        title=(data.get("title") or "YouTube Video").strip(),
        author=data.get("author_name"),
    )
