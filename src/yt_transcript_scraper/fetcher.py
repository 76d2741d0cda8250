"""
fetcher.py — Fetch the watch page and hand its player response to the parsers.

    YouTubePageFetcher   GET the watch page, getting past the EU consent
                         interstitial and recognising captcha pages.
    VideoDataFetcher     Turn a video ID into a TranscriptList and the
                         metadata records, one page fetch per call.

Every method here does I/O through the caller's requests.Session; the
parsing itself lives in page_parser, playability, metadata and transcripts.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import requests

from yt_transcript_scraper.errors import (
    FailedToCreateConsentCookie,
    IpBlocked,
    RequestBlocked,
)
from yt_transcript_scraper.metadata import (
    extract_microformat,
    extract_streaming_data,
    extract_video_details,
)
from yt_transcript_scraper.models import (
    MicroformatData,
    StreamingData,
    VideoDetails,
    VideoInfos,
)
from yt_transcript_scraper.page_parser import extract_js_var
from yt_transcript_scraper.playability import assert_playability
from yt_transcript_scraper.proxies import ProxyConfig
from yt_transcript_scraper.settings import (
    ACCEPT_LANGUAGE,
    CONSENT_FORM_MARKER,
    PLAYER_RESPONSE_VAR,
    RECAPTCHA_MARKER,
    WATCH_URL,
)
from yt_transcript_scraper.transcripts import DebugSink, TranscriptList, extract_captions_json
from yt_transcript_scraper.transport import http_get

logger = logging.getLogger(__name__)

# The consent form carries a hidden input whose value YouTube expects back
# in the CONSENT cookie.
_CONSENT_VALUE_RE = re.compile(r'name="v" value="([^"]+)"')


# ---------------------------------------------------------------------------
# Watch page
# ---------------------------------------------------------------------------

class YouTubePageFetcher:
    """
    Fetches the HTML of a video's watch page.

    Args:
        session:      The requests session to send with.
        proxy_config: The proxy the session uses, so blocks can be attributed.
        debug_sink:   Optional callable receiving ("watch_html", html).
    """

    def __init__(
        self,
        session: requests.Session,
        proxy_config: ProxyConfig | None = None,
        debug_sink: DebugSink | None = None,
    ) -> None:
        self._session = session
        self._proxy_config = proxy_config
        self._debug_sink = debug_sink

    def fetch_video_page(self, video_id: str) -> str:
        """
        Return the watch page HTML for `video_id`.

        If YouTube answers with its cookie-consent form, a CONSENT cookie is
        created from the form and the page is fetched exactly once more.

        Raises:
            IpBlocked:                   Captcha page, or 403/429 without a proxy.
            RequestBlocked:              403/429 through a proxy.
            YouTubeRequestFailed:        Transport error or other non-2xx status.
            FailedToCreateConsentCookie: The consent form could not be satisfied.
        """
        html = self._fetch_html(video_id)
        if CONSENT_FORM_MARKER in html:
            logger.debug("Consent form served for %s; creating CONSENT cookie", video_id)
            self._create_consent_cookie(html, video_id)
            html = self._fetch_html(video_id)
            if CONSENT_FORM_MARKER in html:
                raise FailedToCreateConsentCookie(video_id)

        if self._debug_sink is not None:
            self._debug_sink("watch_html", html)
        return html

    def _fetch_html(self, video_id: str) -> str:
        response = http_get(
            self._session,
            WATCH_URL.format(video_id=video_id),
            video_id,
            self._proxy_config,
            headers={"Accept-Language": ACCEPT_LANGUAGE},
        )
        html = response.text
        if RECAPTCHA_MARKER in html:
            raise IpBlocked(video_id, self._proxy_config)
        return html

    def _create_consent_cookie(self, html: str, video_id: str) -> None:
        match = _CONSENT_VALUE_RE.search(html)
        if match is None:
            raise FailedToCreateConsentCookie(video_id)
        self._session.cookies.set("CONSENT", "YES+" + match.group(1), domain=".youtube.com")


# ---------------------------------------------------------------------------
# Player response → domain records
# ---------------------------------------------------------------------------

class VideoDataFetcher:
    """
    Fetches a video's transcript list and metadata.

    Each public method performs one page fetch; use fetch_video_infos() to
    get everything from a single fetch.

    Args:
        session:      The requests session to send with.
        proxy_config: The proxy the session uses.  Its retries_when_blocked
                      decides how often a blocked page fetch is retried.
        debug_sink:   Optional callable receiving ("watch_html", html) and
                      ("player_response", json_text) artifacts.
    """

    def __init__(
        self,
        session: requests.Session,
        proxy_config: ProxyConfig | None = None,
        debug_sink: DebugSink | None = None,
    ) -> None:
        self._session = session
        self._proxy_config = proxy_config
        self._debug_sink = debug_sink
        self._page_fetcher = YouTubePageFetcher(session, proxy_config, debug_sink)

    def fetch_player_response(self, video_id: str) -> Any:
        """
        Fetch the watch page and return its playable ytInitialPlayerResponse.

        Raises:
            RequestBlocked / IpBlocked: Still blocked after all retries; the
                error carries the proxy config in use.
            YouTubeDataUnparsable: The player response could not be located.
            AgeRestricted, VideoUnavailable, InvalidVideoId, VideoUnplayable:
                From the playability check.
        """
        html = self._fetch_html_with_retries(video_id)
        player_response = extract_js_var(html, PLAYER_RESPONSE_VAR, video_id)
        if self._debug_sink is not None:
            self._debug_sink("player_response", json.dumps(player_response))
        assert_playability(player_response, video_id)
        return player_response

    def _fetch_html_with_retries(self, video_id: str) -> str:
        retries = self._proxy_config.retries_when_blocked if self._proxy_config else 0
        attempt = 0
        while True:
            try:
                return self._page_fetcher.fetch_video_page(video_id)
            except RequestBlocked as exc:
                if attempt >= retries:
                    raise exc.with_proxy_config(self._proxy_config) from exc
                attempt += 1
                logger.warning(
                    "Request for %s blocked, retrying (%d/%d)", video_id, attempt, retries
                )

    def fetch_transcript_list(self, video_id: str) -> TranscriptList:
        """
        Raises:
            TranscriptsDisabled: The video has no captions renderer.
        """
        return self._build_transcript_list(video_id, self.fetch_player_response(video_id))

    def fetch_video_details(self, video_id: str) -> VideoDetails:
        return extract_video_details(self.fetch_player_response(video_id), video_id)

    def fetch_microformat(self, video_id: str) -> MicroformatData:
        return extract_microformat(self.fetch_player_response(video_id), video_id)

    def fetch_streaming_data(self, video_id: str) -> StreamingData:
        return extract_streaming_data(self.fetch_player_response(video_id), video_id)

    def fetch_video_infos(self, video_id: str) -> VideoInfos:
        """Fetch the page once and run every extractor over it."""
        player_response = self.fetch_player_response(video_id)
        return VideoInfos(
            video_details=extract_video_details(player_response, video_id),
            microformat=extract_microformat(player_response, video_id),
            streaming_data=extract_streaming_data(player_response, video_id),
            transcript_list=self._build_transcript_list(video_id, player_response),
        )

    def _build_transcript_list(self, video_id: str, player_response: Any) -> TranscriptList:
        captions_json = extract_captions_json(player_response, video_id)
        return TranscriptList.build(
            video_id, captions_json, self._session, self._proxy_config
        )
