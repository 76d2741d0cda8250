"""
api.py — YouTubeTranscriptApi, the main entry point of yt-transcript-scraper.

Configures one requests.Session (headers, cookies, proxies) and exposes the
transcript and metadata operations on top of it:

    list_transcripts()       Every caption track for a video.
    fetch_transcript()       The best-matching track, downloaded and parsed.
    fetch_video_details()    Title, author, views, thumbnails, ...
    fetch_microformat()      Category, dates, embed info, ...
    fetch_streaming_data()   Audio/video formats.
    fetch_video_infos()      All of the above from a single page fetch.

Usage:
    from yt_transcript_scraper import YouTubeTranscriptApi

    api = YouTubeTranscriptApi()
    transcript = api.fetch_transcript("dQw4w9WgXcQ", languages=["de", "en"])
    print(transcript.text())

An instance is not thread-safe, because requests.Session is not; create one
per thread.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import requests

from yt_transcript_scraper.cookies import load_cookie_jar
from yt_transcript_scraper.fetcher import DebugSink, VideoDataFetcher
from yt_transcript_scraper.models import (
    FetchedTranscript,
    MicroformatData,
    StreamingData,
    VideoDetails,
    VideoInfos,
)
from yt_transcript_scraper.proxies import ProxyConfig
from yt_transcript_scraper.settings import ACCEPT_LANGUAGE, USER_AGENT
from yt_transcript_scraper.transcripts import TranscriptList

logger = logging.getLogger(__name__)

_DEFAULT_LANGUAGES = ("en",)


class YouTubeTranscriptApi:
    """
    Fetch transcripts and metadata for YouTube videos.

    Args:
        cookie_path:  Netscape cookie file, needed for age-restricted videos.
        proxy_config: A GenericProxyConfig or WebshareProxyConfig.
        http_client:  A requests.Session to configure and use instead of a
                      fresh one.
        debug_sink:   Optional callable receiving (artifact_name, content) for
                      the watch HTML, the player response and transcript XML.

    Raises:
        CookiePathInvalid, CookieInvalid: If `cookie_path` cannot be loaded.
    """

    def __init__(
        self,
        cookie_path: str | Path | None = None,
        proxy_config: ProxyConfig | None = None,
        http_client: requests.Session | None = None,
        debug_sink: DebugSink | None = None,
    ) -> None:
        session = http_client if http_client is not None else requests.Session()
        session.headers.update({"User-Agent": USER_AGENT, "Accept-Language": ACCEPT_LANGUAGE})

        if cookie_path is not None:
            session.cookies.update(load_cookie_jar(cookie_path))

        if proxy_config is not None:
            session.proxies.update(proxy_config.to_requests_dict())
            if proxy_config.prevent_keeping_connections_alive:
                session.headers.update({"Connection": "close"})
            logger.debug("Using %s proxy", proxy_config.kind.value)

        self._session = session
        self._debug_sink = debug_sink
        self._fetcher = VideoDataFetcher(session, proxy_config, debug_sink)

    def list_transcripts(self, video_id: str) -> TranscriptList:
        """
        Return every transcript available for `video_id`.

        Use the returned list's find_* methods to pick a track, then call
        .fetch() (or .translate(code).fetch()) on it.

        Raises:
            TranscriptError: (or subclass) if the page or captions cannot be read.
        """
        return self._fetcher.fetch_transcript_list(video_id)

    def fetch_transcript(
        self,
        video_id: str,
        languages: Iterable[str] = _DEFAULT_LANGUAGES,
        preserve_formatting: bool = False,
    ) -> FetchedTranscript:
        """
        Fetch the transcript in the first available language of `languages`.

        Manually created transcripts are preferred over generated ones for
        the same language.

        Args:
            video_id:            The 11-character video ID (not the URL).
            languages:           Language codes in descending priority.
            preserve_formatting: Keep basic HTML formatting tags in the text.

        Raises:
            NoTranscriptFound: None of `languages` is available.
            TranscriptError:   (or subclass) on any other failure.
        """
        transcript = self.list_transcripts(video_id).find_transcript(languages)
        logger.debug("Fetching %s transcript for %s", transcript.language_code, video_id)
        return transcript.fetch(preserve_formatting=preserve_formatting, debug_sink=self._debug_sink)

    def fetch_video_details(self, video_id: str) -> VideoDetails:
        return self._fetcher.fetch_video_details(video_id)

    def fetch_microformat(self, video_id: str) -> MicroformatData:
        return self._fetcher.fetch_microformat(video_id)

    def fetch_streaming_data(self, video_id: str) -> StreamingData:
        return self._fetcher.fetch_streaming_data(video_id)

    def fetch_video_infos(self, video_id: str) -> VideoInfos:
        """Fetch details, microformat, streaming data and transcripts in one go."""
        return self._fetcher.fetch_video_infos(video_id)
