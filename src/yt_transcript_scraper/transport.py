"""
transport.py — Thin wrapper over requests that speaks our error hierarchy.

Both the watch-page fetch and the caption-track fetch need the same mapping
from "what went wrong on the wire" to a TranscriptError:

    connection/timeout errors    → YouTubeRequestFailed
    HTTP 403 / 429               → RequestBlocked (behind a proxy) or IpBlocked
    any other non-2xx status     → YouTubeRequestFailed

Timeouts and retries at the socket level are left to the session the caller
configured.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from yt_transcript_scraper.errors import IpBlocked, RequestBlocked, YouTubeRequestFailed

if TYPE_CHECKING:
    from yt_transcript_scraper.proxies import ProxyConfig

logger = logging.getLogger(__name__)

_BLOCKED_STATUS_CODES = frozenset({403, 429})


def http_get(
    session: requests.Session,
    url: str,
    video_id: str,
    proxy_config: ProxyConfig | None = None,
    **kwargs: Any,
) -> requests.Response:
    """
    GET `url` and return the response, raising a TranscriptError on failure.

    Args:
        session:      The requests session to send with.
        url:          Absolute URL to fetch.
        video_id:     The video this request is for (used in errors).
        proxy_config: The proxy in use, so a block can be attributed to it.
        **kwargs:     Passed through to session.get().

    Raises:
        RequestBlocked:       403/429 while a proxy is configured.
        IpBlocked:            403/429 without a proxy.
        YouTubeRequestFailed: Transport error or any other non-success status.
    """
    logger.debug("GET %s", url)
    try:
        response = session.get(url, **kwargs)
    except requests.RequestException as exc:
        raise YouTubeRequestFailed(video_id, str(exc)) from exc

    if response.status_code in _BLOCKED_STATUS_CODES:
        if proxy_config is not None:
            raise RequestBlocked(video_id, proxy_config)
        raise IpBlocked(video_id)
    if not 200 <= response.status_code < 300:
        raise YouTubeRequestFailed(
            video_id, f"YouTube returned status code: {response.status_code}"
        )
    return response
