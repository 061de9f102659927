"""
HTTP helpers for talking to the caption endpoints with bounded retry.
"""

import requests
from retry.api import retry_call

from app.config import config
from app.utils.error_handling import FetchError
from app.utils.logger import logging


TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}

# Skips the EU consent interstitial on watch pages
CONSENT_COOKIES = {"CONSENT": "YES+cb", "SOCS": "CAI"}


def create_session() -> requests.Session:
    """Create a session preloaded with browser-like headers and consent cookies."""
    session = requests.Session()
    session.headers.update(BROWSER_HEADERS)
    for name, value in CONSENT_COOKIES.items():
        session.cookies.set(name, value, domain=".youtube.com")
    return session


class TransientStatusError(Exception):
    """A response status worth retrying."""

    def __init__(self, response: requests.Response):
        super().__init__(f"Transient status {response.status_code}")
        self.response = response


def request_with_retry(
    session: requests.Session,
    method: str,
    url: str,
    max_attempts: int = config.HTTP_MAX_ATTEMPTS,
    backoff_base: float = config.HTTP_BACKOFF_BASE,
    timeout: float = config.HTTP_TIMEOUT,
    **kwargs,
) -> requests.Response:
    """
    Issue a request, retrying transient statuses with exponential backoff.

    Non-transient responses (including 404) are returned immediately.
    After the last attempt the final response is returned as-is.

    Args:
        session: requests session to use
        method: HTTP method
        url: Target URL
        max_attempts: Total attempts including the first
        backoff_base: Base delay; attempt n sleeps base * 2**n seconds
        timeout: Per-call timeout in seconds

    Returns:
        The last response received

    Raises:
        FetchError: if the last attempt failed at the network level
    """
    def _send() -> requests.Response:
        response = session.request(method, url, timeout=timeout, **kwargs)
        if response.status_code in TRANSIENT_STATUSES:
            raise TransientStatusError(response)
        return response

    try:
        return retry_call(
            _send,
            exceptions=(requests.RequestException, TransientStatusError),
            tries=max(max_attempts, 1),
            delay=backoff_base,
            backoff=2,
            logger=logging,
        )
    except TransientStatusError as e:
        logging.warning(f"Giving up on {url.split('?')[0]} after {max_attempts} attempts: {e}")
        return e.response
    except requests.RequestException as e:
        raise FetchError(f"Request failed after {max_attempts} attempts: {e}") from e


def fetch_text(session: requests.Session, url: str, **kwargs) -> str:
    """
    GET a URL and return the body, raising FetchError on a non-2xx status.

    Args:
        session: requests session to use
        url: Target URL

    Returns:
        Response body text
    """
    response = request_with_retry(session, "GET", url, **kwargs)
    if not response.ok:
        raise FetchError(f"HTTP {response.status_code} for {url.split('?')[0]}", response.status_code)
    return response.text
