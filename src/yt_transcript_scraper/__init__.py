"""
yt_transcript_scraper — Scrape YouTube transcripts and video metadata.

Public API:
    YouTubeTranscriptApi    Configured client: transcripts and metadata.
    extract()               High-level one-call interface (URL → formatted output).
    get_transcript()        Fetch a transcript for a video ID.
    parse_video_id()        Parse a YouTube URL or validate a bare video ID.
    GenericProxyConfig      Route requests through an HTTP/HTTPS proxy.
    WebshareProxyConfig     Route requests through Webshare rotating proxies.

Exception hierarchy (all importable from this package):
    TranscriptError                     Base exception for all retrieval errors.
    ├── TranscriptsDisabled             The video has captions turned off.
    ├── NoTranscriptFound               None of the requested languages exist.
    ├── VideoUnavailable                Removed, or never existed.
    ├── VideoUnplayable                 Private, region-locked, members-only, ...
    ├── AgeRestricted                   Needs an authenticated cookie file.
    ├── InvalidVideoId                  A URL was passed where an ID belongs.
    ├── RequestBlocked                  YouTube refused the request.
    │   └── IpBlocked                   ... because of the client IP.
    ├── NotTranslatable                 The track cannot be translated.
    ├── TranslationLanguageNotAvailable
    ├── FailedToCreateConsentCookie
    ├── YouTubeRequestFailed            Network error or bad HTTP status.
    └── YouTubeDataUnparsable           The page format was not recognised.

Usage:
    from yt_transcript_scraper import extract
    text = extract("https://www.youtube.com/watch?v=dQw4w9WgXcQ")

    from yt_transcript_scraper import YouTubeTranscriptApi
    details = YouTubeTranscriptApi().fetch_video_details("dQw4w9WgXcQ")
"""

import logging

from yt_transcript_scraper.api import YouTubeTranscriptApi
from yt_transcript_scraper.errors import (
    AgeRestricted,
    CookieError,
    CookieInvalid,
    CookiePathInvalid,
    FailedToCreateConsentCookie,
    InvalidVideoId,
    IpBlocked,
    NoTranscriptFound,
    NotTranslatable,
    RequestBlocked,
    TimedTextParseError,
    TranscriptError,
    TranscriptsDisabled,
    TranslationLanguageNotAvailable,
    VideoUnavailable,
    VideoUnplayable,
    YouTubeDataUnparsable,
    YouTubeRequestFailed,
)
from yt_transcript_scraper.extractor import (
    extract,
    get_transcript,
    parse_video_id,
)
from yt_transcript_scraper.models import (
    FetchedTranscript,
    FetchedTranscriptSnippet,
    MicroformatData,
    StreamingData,
    StreamingFormat,
    TranslationLanguage,
    VideoDetails,
    VideoInfos,
    VideoThumbnail,
)
from yt_transcript_scraper.proxies import (
    GenericProxyConfig,
    InvalidProxyConfig,
    ProxyConfig,
    WebshareProxyConfig,
)
from yt_transcript_scraper.transcripts import Transcript, TranscriptList

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "YouTubeTranscriptApi",
    "extract",
    "get_transcript",
    "parse_video_id",
    "Transcript",
    "TranscriptList",
    "FetchedTranscript",
    "FetchedTranscriptSnippet",
    "TranslationLanguage",
    "VideoDetails",
    "VideoThumbnail",
    "MicroformatData",
    "StreamingData",
    "StreamingFormat",
    "VideoInfos",
    "ProxyConfig",
    "GenericProxyConfig",
    "WebshareProxyConfig",
    "InvalidProxyConfig",
    "TranscriptError",
    "TranscriptsDisabled",
    "NoTranscriptFound",
    "VideoUnavailable",
    "VideoUnplayable",
    "AgeRestricted",
    "InvalidVideoId",
    "RequestBlocked",
    "IpBlocked",
    "NotTranslatable",
    "TranslationLanguageNotAvailable",
    "FailedToCreateConsentCookie",
    "YouTubeRequestFailed",
    "YouTubeDataUnparsable",
    "CookieError",
    "CookiePathInvalid",
    "CookieInvalid",
    "TimedTextParseError",
]
